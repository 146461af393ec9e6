"""
GraphQL object types.

Each type is built from its ORM model with ``from_model``; relations are
resolved lazily from the model kept in a private field.
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

import strawberry
from strawberry.types import Info

from nuber_api.core.results import ErrorKind
from nuber_api.gql.offload import offloaded
from nuber_api.models.category import Category
from nuber_api.models.dish import Dish
from nuber_api.models.order import Order, OrderItem, OrderStatus
from nuber_api.models.restaurant import Restaurant
from nuber_api.models.user import User, UserRole
from nuber_api.schemas.dish import DishOption
from nuber_api.services.categories import CategoryService

strawberry.enum(UserRole)
strawberry.enum(OrderStatus)
strawberry.enum(ErrorKind)


def as_float(value: Optional[Decimal]) -> Optional[float]:
    return None if value is None else float(value)


@strawberry.type(name="User")
class UserType:
    id: int
    email: str
    role: UserRole
    verified: bool

    @classmethod
    def from_model(cls, user: User) -> "UserType":
        return cls(id=user.id, email=user.email, role=user.role, verified=user.verified)


@strawberry.type(name="Category")
class CategoryType:
    id: int
    name: str
    slug: str
    cover_img: Optional[str]

    @strawberry.field
    @offloaded
    def restaurant_count(self, info: Info) -> int:
        return CategoryService(info.context.storage).count_restaurants(self.id)

    @classmethod
    def from_model(cls, category: Category) -> "CategoryType":
        return cls(id=category.id, name=category.name, slug=category.slug, cover_img=category.cover_img)


@strawberry.type(name="DishChoice")
class DishChoiceType:
    name: str
    extra: Optional[float]


@strawberry.type(name="DishOption")
class DishOptionType:
    name: str
    extra: Optional[float]
    choices: Optional[List[DishChoiceType]]

    @classmethod
    def from_stored(cls, stored: dict) -> "DishOptionType":
        option = DishOption.model_validate(stored)
        choices = None
        if option.choices is not None:
            choices = [DishChoiceType(name=choice.name, extra=as_float(choice.extra)) for choice in option.choices]
        return cls(name=option.name, extra=as_float(option.extra), choices=choices)


@strawberry.type(name="Dish")
class DishType:
    id: int
    name: str
    price: float
    photo: Optional[str]
    description: str
    options: List[DishOptionType]
    restaurant_id: int

    @classmethod
    def from_model(cls, dish: Dish) -> "DishType":
        return cls(
            id=dish.id,
            name=dish.name,
            price=float(dish.price),
            photo=dish.photo,
            description=dish.description,
            options=[DishOptionType.from_stored(option) for option in dish.options or []],
            restaurant_id=dish.restaurant_id,
        )


@strawberry.type(name="Restaurant")
class RestaurantType:
    id: int
    name: str
    cover_img: Optional[str]
    address: str
    is_promoted: bool
    promoted_until: Optional[datetime]
    owner_id: int
    model: strawberry.Private[Restaurant]

    @strawberry.field
    @offloaded
    def category(self, info: Info) -> Optional[CategoryType]:
        if self.model.category is None:
            return None
        return CategoryType.from_model(self.model.category)

    @strawberry.field
    @offloaded
    def menu(self, info: Info) -> List[DishType]:
        return [DishType.from_model(dish) for dish in self.model.menu]

    @strawberry.field
    @offloaded
    def orders(self, info: Info) -> List["OrderType"]:
        """Only the restaurant's owner sees its orders."""
        user = info.context.user
        if user is None or user.id != self.owner_id:
            return []
        return [OrderType.from_model(order) for order in self.model.orders]

    @classmethod
    def from_model(cls, restaurant: Restaurant) -> "RestaurantType":
        return cls(
            id=restaurant.id,
            name=restaurant.name,
            cover_img=restaurant.cover_img,
            address=restaurant.address,
            is_promoted=restaurant.is_promoted,
            promoted_until=restaurant.promoted_until,
            owner_id=restaurant.owner_id,
            model=restaurant,
        )


@strawberry.type(name="OrderItemOption")
class OrderItemOptionType:
    name: str
    choice: Optional[str]


@strawberry.type(name="OrderItem")
class OrderItemType:
    id: int
    dish_id: Optional[int]
    options: List[OrderItemOptionType]
    model: strawberry.Private[OrderItem]

    @strawberry.field
    @offloaded
    def dish(self, info: Info) -> Optional[DishType]:
        if self.model.dish is None:
            return None
        return DishType.from_model(self.model.dish)

    @classmethod
    def from_model(cls, item: OrderItem) -> "OrderItemType":
        return cls(
            id=item.id,
            dish_id=item.dish_id,
            options=[
                OrderItemOptionType(name=option["name"], choice=option.get("choice"))
                for option in item.options or []
            ],
            model=item,
        )


@strawberry.type(name="Order")
class OrderType:
    id: int
    total: float
    status: OrderStatus
    customer_id: Optional[int]
    driver_id: Optional[int]
    restaurant_id: Optional[int]
    created_at: Optional[datetime]
    model: strawberry.Private[Order]

    @strawberry.field
    @offloaded
    def customer(self, info: Info) -> Optional[UserType]:
        return UserType.from_model(self.model.customer) if self.model.customer else None

    @strawberry.field
    @offloaded
    def driver(self, info: Info) -> Optional[UserType]:
        return UserType.from_model(self.model.driver) if self.model.driver else None

    @strawberry.field
    @offloaded
    def restaurant(self, info: Info) -> Optional[RestaurantType]:
        return RestaurantType.from_model(self.model.restaurant) if self.model.restaurant else None

    @strawberry.field
    @offloaded
    def items(self, info: Info) -> List[OrderItemType]:
        return [OrderItemType.from_model(item) for item in self.model.items]

    @classmethod
    def from_model(cls, order: Order) -> "OrderType":
        return cls(
            id=order.id,
            total=float(order.total),
            status=order.status,
            customer_id=order.customer_id,
            driver_id=order.driver_id,
            restaurant_id=order.restaurant_id,
            created_at=order.created_at,
            model=order,
        )

"""
GraphQL input types and their conversion to request schemas.
"""
import dataclasses
from typing import Any, List, Optional

import strawberry

from nuber_api.models.order import OrderStatus
from nuber_api.models.user import UserRole


def input_values(value: Any) -> Any:
    """Turn a (possibly nested) input into plain data, dropping unset fields."""
    if dataclasses.is_dataclass(value):
        return {
            field.name: input_values(getattr(value, field.name))
            for field in dataclasses.fields(value)
            if getattr(value, field.name) is not strawberry.UNSET
        }
    if isinstance(value, list):
        return [input_values(item) for item in value]
    return value


# Accounts

@strawberry.input
class CreateAccountInput:
    email: str
    password: str
    role: UserRole


@strawberry.input
class LoginInput:
    email: str
    password: str


@strawberry.input
class UserProfileInput:
    user_id: int


@strawberry.input
class EditProfileInput:
    email: Optional[str] = strawberry.UNSET
    password: Optional[str] = strawberry.UNSET


# Restaurants & categories

@strawberry.input
class CreateRestaurantInput:
    name: str
    address: str
    category_name: str
    cover_img: Optional[str] = None


@strawberry.input
class EditRestaurantInput:
    restaurant_id: int
    name: Optional[str] = strawberry.UNSET
    address: Optional[str] = strawberry.UNSET
    cover_img: Optional[str] = strawberry.UNSET
    category_name: Optional[str] = strawberry.UNSET


@strawberry.input
class DeleteRestaurantInput:
    restaurant_id: int


@strawberry.input
class MyRestaurantInput:
    id: int


@strawberry.input
class RestaurantsInput:
    page: int = 1


@strawberry.input
class RestaurantInput:
    restaurant_id: int


@strawberry.input
class SearchRestaurantInput:
    query: str
    page: int = 1


@strawberry.input
class CategoryInput:
    slug: str
    page: int = 1


# Dishes

@strawberry.input
class DishChoiceInput:
    name: str
    extra: Optional[float] = None


@strawberry.input
class DishOptionInput:
    name: str
    extra: Optional[float] = None
    choices: Optional[List[DishChoiceInput]] = None


@strawberry.input
class CreateDishInput:
    restaurant_id: int
    name: str
    price: float
    description: str
    photo: Optional[str] = None
    options: List[DishOptionInput] = strawberry.field(default_factory=list)


@strawberry.input
class EditDishInput:
    dish_id: int
    name: Optional[str] = strawberry.UNSET
    price: Optional[float] = strawberry.UNSET
    description: Optional[str] = strawberry.UNSET
    photo: Optional[str] = strawberry.UNSET
    options: Optional[List[DishOptionInput]] = strawberry.UNSET


@strawberry.input
class DeleteDishInput:
    dish_id: int


# Orders

@strawberry.input
class OrderItemOptionInput:
    name: str
    choice: Optional[str] = strawberry.UNSET


@strawberry.input
class CreateOrderItemInput:
    dish_id: int
    options: List[OrderItemOptionInput] = strawberry.field(default_factory=list)


@strawberry.input
class CreateOrderInput:
    restaurant_id: int
    items: List[CreateOrderItemInput]


@strawberry.input
class GetOrdersInput:
    status: Optional[OrderStatus] = None


@strawberry.input
class GetOrderInput:
    id: int


@strawberry.input
class EditOrderInput:
    id: int
    status: OrderStatus


@strawberry.input
class TakeOrderInput:
    id: int

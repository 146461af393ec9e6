"""
GraphQL schema: every query and mutation of the API.

Resolvers only translate between GraphQL and the services; role checks are
declared with permission classes and the services do the rest.
"""
from typing import Optional

import strawberry
from strawberry.types import Info

from nuber_api.gql import outputs as out
from nuber_api.gql.inputs import (
    CategoryInput,
    CreateAccountInput,
    CreateDishInput,
    CreateOrderInput,
    CreateRestaurantInput,
    DeleteDishInput,
    DeleteRestaurantInput,
    EditDishInput,
    EditOrderInput,
    EditProfileInput,
    EditRestaurantInput,
    GetOrderInput,
    GetOrdersInput,
    LoginInput,
    MyRestaurantInput,
    RestaurantInput,
    RestaurantsInput,
    SearchRestaurantInput,
    TakeOrderInput,
    UserProfileInput,
    input_values,
)
from nuber_api.gql.offload import offloaded
from nuber_api.gql.permissions import IsAuthenticated, IsClient, IsDelivery, IsOwner
from nuber_api.gql.types import CategoryType, OrderType, RestaurantType, UserType
from nuber_api.schemas.auth import AccountCreate, ProfileUpdate, UserLogin
from nuber_api.schemas.dish import DishCreate, DishUpdate
from nuber_api.schemas.order import OrderCreate
from nuber_api.schemas.restaurant import RestaurantCreate, RestaurantUpdate
from nuber_api.services.categories import CategoryService
from nuber_api.services.dishes import DishService
from nuber_api.services.orders import OrderService
from nuber_api.services.restaurants import RestaurantService
from nuber_api.services.users import UserService


def restaurant_types(restaurants) -> list:
    return [RestaurantType.from_model(restaurant) for restaurant in restaurants]


@strawberry.type
class Query:

    @strawberry.field(permission_classes=[IsAuthenticated])
    @offloaded
    def me(self, info: Info) -> UserType:
        return UserType.from_model(info.context.user)

    @strawberry.field(permission_classes=[IsAuthenticated])
    @offloaded
    def user_profile(self, info: Info, input: UserProfileInput) -> out.UserProfileOutput:
        result = UserService(info.context.storage).find_by_id(input.user_id)
        user: Optional[UserType] = UserType.from_model(result.value) if result.ok else None
        return out.to_output(out.UserProfileOutput, result, user=user)

    @strawberry.field(permission_classes=[IsOwner])
    @offloaded
    def my_restaurants(self, info: Info) -> out.MyRestaurantsOutput:
        result = RestaurantService(info.context.storage).my_restaurants(info.context.user)
        restaurants = restaurant_types(result.value) if result.ok else None
        return out.to_output(out.MyRestaurantsOutput, result, restaurants=restaurants)

    @strawberry.field(permission_classes=[IsOwner])
    @offloaded
    def my_restaurant(self, info: Info, input: MyRestaurantInput) -> out.MyRestaurantOutput:
        result = RestaurantService(info.context.storage).my_restaurant(info.context.user, input.id)
        restaurant = RestaurantType.from_model(result.value) if result.ok else None
        return out.to_output(out.MyRestaurantOutput, result, restaurant=restaurant)

    @strawberry.field
    @offloaded
    def restaurants(self, info: Info, input: RestaurantsInput) -> out.RestaurantsOutput:
        result = RestaurantService(info.context.storage).all_restaurants(input.page)
        if not result.ok:
            return out.to_output(out.RestaurantsOutput, result)
        page = result.value
        return out.to_output(
            out.RestaurantsOutput,
            result,
            results=restaurant_types(page.results),
            total_pages=page.total_pages,
            total_results=page.total_results,
        )

    @strawberry.field
    @offloaded
    def restaurant(self, info: Info, input: RestaurantInput) -> out.RestaurantOutput:
        result = RestaurantService(info.context.storage).find_restaurant_by_id(input.restaurant_id)
        restaurant = RestaurantType.from_model(result.value) if result.ok else None
        return out.to_output(out.RestaurantOutput, result, restaurant=restaurant)

    @strawberry.field
    @offloaded
    def search_restaurant(self, info: Info, input: SearchRestaurantInput) -> out.SearchRestaurantOutput:
        result = RestaurantService(info.context.storage).search_restaurant_by_name(input.query, input.page)
        if not result.ok:
            return out.to_output(out.SearchRestaurantOutput, result)
        page = result.value
        return out.to_output(
            out.SearchRestaurantOutput,
            result,
            restaurants=restaurant_types(page.results),
            total_pages=page.total_pages,
            total_results=page.total_results,
        )

    @strawberry.field
    @offloaded
    def all_categories(self, info: Info) -> out.AllCategoriesOutput:
        result = CategoryService(info.context.storage).all_categories()
        categories = [CategoryType.from_model(category) for category in result.value] if result.ok else None
        return out.to_output(out.AllCategoriesOutput, result, categories=categories)

    @strawberry.field
    @offloaded
    def category(self, info: Info, input: CategoryInput) -> out.CategoryOutput:
        result = CategoryService(info.context.storage).find_category_by_slug(input.slug, input.page)
        if not result.ok:
            return out.to_output(out.CategoryOutput, result)
        category, page = result.value
        return out.to_output(
            out.CategoryOutput,
            result,
            category=CategoryType.from_model(category),
            restaurants=restaurant_types(page.results),
            total_pages=page.total_pages,
            total_results=page.total_results,
        )

    @strawberry.field(permission_classes=[IsAuthenticated])
    @offloaded
    def get_orders(self, info: Info, input: GetOrdersInput) -> out.GetOrdersOutput:
        result = OrderService(info.context.storage).get_orders(info.context.user, input.status)
        orders = [OrderType.from_model(order) for order in result.value] if result.ok else None
        return out.to_output(out.GetOrdersOutput, result, orders=orders)

    @strawberry.field(permission_classes=[IsAuthenticated])
    @offloaded
    def get_order(self, info: Info, input: GetOrderInput) -> out.GetOrderOutput:
        result = OrderService(info.context.storage).get_order(info.context.user, input.id)
        order = OrderType.from_model(result.value) if result.ok else None
        return out.to_output(out.GetOrderOutput, result, order=order)


@strawberry.type
class Mutation:

    # Accounts

    @strawberry.mutation
    @offloaded
    def create_account(self, info: Info, input: CreateAccountInput) -> out.CreateAccountOutput:
        data = AccountCreate(**input_values(input))
        return out.to_output(out.CreateAccountOutput, UserService(info.context.storage).create_account(data))

    @strawberry.mutation
    @offloaded
    def login(self, info: Info, input: LoginInput) -> out.LoginOutput:
        result = UserService(info.context.storage).login(UserLogin(**input_values(input)))
        return out.to_output(out.LoginOutput, result, token=result.value)

    @strawberry.mutation(permission_classes=[IsAuthenticated])
    @offloaded
    def edit_profile(self, info: Info, input: EditProfileInput) -> out.EditProfileOutput:
        data = ProfileUpdate(**input_values(input))
        result = UserService(info.context.storage).edit_profile(info.context.user.id, data)
        return out.to_output(out.EditProfileOutput, result)

    # Restaurants

    @strawberry.mutation(permission_classes=[IsOwner])
    @offloaded
    def create_restaurant(self, info: Info, input: CreateRestaurantInput) -> out.CreateRestaurantOutput:
        data = RestaurantCreate(**input_values(input))
        result = RestaurantService(info.context.storage).create_restaurant(info.context.user, data)
        return out.to_output(out.CreateRestaurantOutput, result, restaurant_id=result.value)

    @strawberry.mutation(permission_classes=[IsOwner])
    @offloaded
    def edit_restaurant(self, info: Info, input: EditRestaurantInput) -> out.EditRestaurantOutput:
        values = input_values(input)
        restaurant_id = values.pop("restaurant_id")
        result = RestaurantService(info.context.storage).edit_restaurant(
            info.context.user, restaurant_id, RestaurantUpdate(**values)
        )
        return out.to_output(out.EditRestaurantOutput, result)

    @strawberry.mutation(permission_classes=[IsOwner])
    @offloaded
    def delete_restaurant(self, info: Info, input: DeleteRestaurantInput) -> out.DeleteRestaurantOutput:
        result = RestaurantService(info.context.storage).delete_restaurant(info.context.user, input.restaurant_id)
        return out.to_output(out.DeleteRestaurantOutput, result)

    # Dishes

    @strawberry.mutation(permission_classes=[IsOwner])
    @offloaded
    def create_dish(self, info: Info, input: CreateDishInput) -> out.CreateDishOutput:
        data = DishCreate(**input_values(input))
        result = DishService(info.context.storage).create_dish(info.context.user, data)
        return out.to_output(out.CreateDishOutput, result, dish_id=result.value)

    @strawberry.mutation(permission_classes=[IsOwner])
    @offloaded
    def edit_dish(self, info: Info, input: EditDishInput) -> out.EditDishOutput:
        values = input_values(input)
        dish_id = values.pop("dish_id")
        result = DishService(info.context.storage).edit_dish(info.context.user, dish_id, DishUpdate(**values))
        return out.to_output(out.EditDishOutput, result)

    @strawberry.mutation(permission_classes=[IsOwner])
    @offloaded
    def delete_dish(self, info: Info, input: DeleteDishInput) -> out.DeleteDishOutput:
        result = DishService(info.context.storage).delete_dish(info.context.user, input.dish_id)
        return out.to_output(out.DeleteDishOutput, result)

    # Orders

    @strawberry.mutation(permission_classes=[IsClient])
    @offloaded
    def create_order(self, info: Info, input: CreateOrderInput) -> out.CreateOrderOutput:
        data = OrderCreate(**input_values(input))
        result = OrderService(info.context.storage).create_order(info.context.user, data)
        return out.to_output(out.CreateOrderOutput, result, order_id=result.value)

    @strawberry.mutation(permission_classes=[IsAuthenticated])
    @offloaded
    def edit_order(self, info: Info, input: EditOrderInput) -> out.EditOrderOutput:
        result = OrderService(info.context.storage).edit_order(info.context.user, input.id, input.status)
        return out.to_output(out.EditOrderOutput, result)

    @strawberry.mutation(permission_classes=[IsDelivery])
    @offloaded
    def take_order(self, info: Info, input: TakeOrderInput) -> out.TakeOrderOutput:
        result = OrderService(info.context.storage).take_order(info.context.user, input.id)
        return out.to_output(out.TakeOrderOutput, result)


schema = strawberry.Schema(query=Query, mutation=Mutation)

"""
GraphQL result objects: ``ok``, ``error`` and ``errorKind`` plus a payload.
"""
from typing import List, Optional, Type, TypeVar

import strawberry

from nuber_api.core.results import ErrorKind, Result
from nuber_api.gql.types import (
    CategoryType,
    OrderType,
    RestaurantType,
    UserType,
)

OutputT = TypeVar("OutputT", bound="CoreOutput")


@strawberry.type
class CoreOutput:
    ok: bool
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None


def to_output(output_cls: Type[OutputT], result: Result, **payload) -> OutputT:
    """Build ``output_cls`` from a service result; payload is only used on success."""
    if not result.ok:
        return output_cls(ok=False, error=result.error, error_kind=result.kind)
    return output_cls(ok=True, **payload)


# Accounts

@strawberry.type
class CreateAccountOutput(CoreOutput):
    pass


@strawberry.type
class LoginOutput(CoreOutput):
    token: Optional[str] = None


@strawberry.type
class UserProfileOutput(CoreOutput):
    user: Optional[UserType] = None


@strawberry.type
class EditProfileOutput(CoreOutput):
    pass


# Restaurants & categories

@strawberry.type
class CreateRestaurantOutput(CoreOutput):
    restaurant_id: Optional[int] = None


@strawberry.type
class EditRestaurantOutput(CoreOutput):
    pass


@strawberry.type
class DeleteRestaurantOutput(CoreOutput):
    pass


@strawberry.type
class MyRestaurantsOutput(CoreOutput):
    restaurants: Optional[List[RestaurantType]] = None


@strawberry.type
class MyRestaurantOutput(CoreOutput):
    restaurant: Optional[RestaurantType] = None


@strawberry.type
class RestaurantOutput(CoreOutput):
    restaurant: Optional[RestaurantType] = None


@strawberry.type
class RestaurantsOutput(CoreOutput):
    results: Optional[List[RestaurantType]] = None
    total_pages: Optional[int] = None
    total_results: Optional[int] = None


@strawberry.type
class SearchRestaurantOutput(CoreOutput):
    restaurants: Optional[List[RestaurantType]] = None
    total_pages: Optional[int] = None
    total_results: Optional[int] = None


@strawberry.type
class AllCategoriesOutput(CoreOutput):
    categories: Optional[List[CategoryType]] = None


@strawberry.type
class CategoryOutput(CoreOutput):
    category: Optional[CategoryType] = None
    restaurants: Optional[List[RestaurantType]] = None
    total_pages: Optional[int] = None
    total_results: Optional[int] = None


# Dishes

@strawberry.type
class CreateDishOutput(CoreOutput):
    dish_id: Optional[int] = None


@strawberry.type
class EditDishOutput(CoreOutput):
    pass


@strawberry.type
class DeleteDishOutput(CoreOutput):
    pass


# Orders

@strawberry.type
class CreateOrderOutput(CoreOutput):
    order_id: Optional[int] = None


@strawberry.type
class GetOrdersOutput(CoreOutput):
    orders: Optional[List[OrderType]] = None


@strawberry.type
class GetOrderOutput(CoreOutput):
    order: Optional[OrderType] = None


@strawberry.type
class EditOrderOutput(CoreOutput):
    pass


@strawberry.type
class TakeOrderOutput(CoreOutput):
    pass

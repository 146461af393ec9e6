"""
Restaurant directory: owner-scoped CRUD plus public listing and search.
"""
import logging

from nuber_api.core.config import get_settings
from nuber_api.core.results import ForbiddenError, NotFoundError, service_result
from nuber_api.db.storage import Storage
from nuber_api.models.restaurant import Restaurant
from nuber_api.models.user import User
from nuber_api.schemas.restaurant import RestaurantCreate, RestaurantUpdate
from nuber_api.services.categories import CategoryService
from nuber_api.services.pagination import paginate

logger = logging.getLogger(__name__)

PROMOTED_FIRST = [Restaurant.is_promoted.desc(), Restaurant.id.asc()]


def contains_pattern(query: str) -> str:
    """LIKE pattern matching ``query`` literally anywhere; escape character is a backslash."""
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class RestaurantService:
    """Restaurant management for owners and browsing for everyone."""

    def __init__(self, storage: Storage):
        self.storage = storage
        self.categories = CategoryService(storage)
        self.page_size = get_settings().PAGE_SIZE

    def _owned_restaurant(self, owner: User, restaurant_id: int, action: str) -> Restaurant:
        restaurant = self.storage.restaurants.find_by_id(restaurant_id)
        if restaurant is None:
            raise NotFoundError("Restaurant not found")
        if restaurant.owner_id != owner.id:
            raise ForbiddenError(f"You cannot {action} a restaurant that you do not own")
        return restaurant

    @service_result("Could not create restaurant.")
    def create_restaurant(self, owner: User, data: RestaurantCreate) -> int:
        """Create a restaurant owned by ``owner``; returns the new restaurant id."""
        with self.storage.transaction():
            category = self.categories.get_or_create(data.category_name)
            restaurant = self.storage.restaurants.save(
                self.storage.restaurants.create(
                    name=data.name,
                    address=data.address,
                    cover_img=data.cover_img,
                    owner_id=owner.id,
                    category=category,
                )
            )
            restaurant_id = restaurant.id

        logger.info(f"Owner {owner.id} created restaurant {restaurant_id}")
        return restaurant_id

    @service_result("Could not edit restaurant.")
    def edit_restaurant(self, owner: User, restaurant_id: int, data: RestaurantUpdate) -> None:
        with self.storage.transaction():
            restaurant = self._owned_restaurant(owner, restaurant_id, "edit")

            update_dict = data.model_dump(exclude_unset=True)
            category_name = update_dict.pop("category_name", None)
            if category_name is not None:
                restaurant.category = self.categories.get_or_create(category_name)

            for field, value in update_dict.items():
                if value is not None:
                    setattr(restaurant, field, value)

        logger.info(f"Owner {owner.id} edited restaurant {restaurant_id}")

    @service_result("Could not delete restaurant.")
    def delete_restaurant(self, owner: User, restaurant_id: int) -> None:
        with self.storage.transaction():
            restaurant = self._owned_restaurant(owner, restaurant_id, "delete")
            self.storage.restaurants.delete(restaurant)

        logger.info(f"Owner {owner.id} deleted restaurant {restaurant_id}")

    @service_result("Could not find restaurants.")
    def my_restaurants(self, owner: User):
        return self.storage.restaurants.find(Restaurant.owner_id == owner.id, order_by=[Restaurant.id.asc()])

    @service_result("Could not find restaurant")
    def my_restaurant(self, owner: User, restaurant_id: int) -> Restaurant:
        restaurant = self.storage.restaurants.find_one(
            Restaurant.id == restaurant_id,
            Restaurant.owner_id == owner.id,
        )
        if restaurant is None:
            raise NotFoundError("Restaurant not found")
        return restaurant

    @service_result("Could not load restaurants")
    def all_restaurants(self, page: int = 1):
        return paginate(
            self.storage.restaurants,
            page=page,
            page_size=self.page_size,
            order_by=PROMOTED_FIRST,
        )

    @service_result("Could not find restaurant")
    def find_restaurant_by_id(self, restaurant_id: int) -> Restaurant:
        restaurant = self.storage.restaurants.find_by_id(restaurant_id)
        if restaurant is None:
            raise NotFoundError("Restaurant not found")
        return restaurant

    @service_result("Could not search for restaurants")
    def search_restaurant_by_name(self, query: str, page: int = 1):
        """Case-insensitive substring match on the restaurant name."""
        return paginate(
            self.storage.restaurants,
            Restaurant.name.ilike(contains_pattern(query), escape="\\"),
            page=page,
            page_size=self.page_size,
            order_by=PROMOTED_FIRST,
        )

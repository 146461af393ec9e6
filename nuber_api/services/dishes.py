"""
Dish catalog: owners add, edit and remove dishes on their restaurants.
"""
import logging

from nuber_api.core.results import ForbiddenError, NotFoundError, service_result
from nuber_api.db.storage import Storage
from nuber_api.models.dish import Dish
from nuber_api.models.user import User
from nuber_api.schemas.dish import DishCreate, DishUpdate

logger = logging.getLogger(__name__)


class DishService:

    def __init__(self, storage: Storage):
        self.storage = storage

    def _owned_dish(self, owner: User, dish_id: int, action: str) -> Dish:
        dish = self.storage.dishes.find_by_id(dish_id)
        if dish is None:
            raise NotFoundError("Dish not found")
        if dish.restaurant.owner_id != owner.id:
            raise ForbiddenError(f"You cannot {action} a dish that you do not own")
        return dish

    @service_result("Could not create dish.")
    def create_dish(self, owner: User, data: DishCreate) -> int:
        """Add a dish to one of the owner's restaurants; returns the new dish id."""
        with self.storage.transaction():
            restaurant = self.storage.restaurants.find_by_id(data.restaurant_id)
            if restaurant is None:
                raise NotFoundError("Restaurant not found")
            if restaurant.owner_id != owner.id:
                raise ForbiddenError("You cannot add a dish to a restaurant that you do not own")

            dish = self.storage.dishes.save(
                self.storage.dishes.create(
                    restaurant_id=restaurant.id,
                    name=data.name,
                    price=data.price,
                    description=data.description,
                    photo=data.photo,
                    options=[option.model_dump(mode="json") for option in data.options],
                )
            )
            dish_id = dish.id

        logger.info(f"Owner {owner.id} added dish {dish_id} to restaurant {data.restaurant_id}")
        return dish_id

    @service_result("Could not edit dish.")
    def edit_dish(self, owner: User, dish_id: int, data: DishUpdate) -> None:
        with self.storage.transaction():
            dish = self._owned_dish(owner, dish_id, "edit")

            update_dict = data.model_dump(exclude_unset=True, mode="json")
            for field, value in update_dict.items():
                if value is None:
                    continue
                # Keep the price as a Decimal rather than its JSON string form
                setattr(dish, field, data.price if field == "price" else value)

        logger.info(f"Owner {owner.id} edited dish {dish_id}")

    @service_result("Could not delete dish.")
    def delete_dish(self, owner: User, dish_id: int) -> None:
        with self.storage.transaction():
            dish = self._owned_dish(owner, dish_id, "delete")
            self.storage.dishes.delete(dish)

        logger.info(f"Owner {owner.id} deleted dish {dish_id}")

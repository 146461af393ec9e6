"""
Order engine: pricing and creation of orders, plus the order lifecycle
(listing, status changes and driver assignment).
"""
import logging
from decimal import Decimal
from typing import Optional

from sqlalchemy import select

from nuber_api.core.results import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    service_result,
)
from nuber_api.db.storage import Storage
from nuber_api.models.order import Order, OrderStatus
from nuber_api.models.restaurant import Restaurant
from nuber_api.models.user import User, UserRole
from nuber_api.schemas.order import OrderCreate
from nuber_api.services.pricing import price_item

logger = logging.getLogger(__name__)

# For each role, the statuses it may set and the status the order must be in first
STATUS_TRANSITIONS = {
    UserRole.CLIENT: {},
    UserRole.OWNER: {
        OrderStatus.COOKING: OrderStatus.PENDING,
        OrderStatus.COOKED: OrderStatus.COOKING,
    },
    UserRole.DELIVERY: {
        OrderStatus.PICKED_UP: OrderStatus.COOKED,
        OrderStatus.DELIVERED: OrderStatus.PICKED_UP,
    },
}


def can_see_order(user: User, order: Order) -> bool:
    """Customers see their orders, drivers their rides, owners their restaurants' orders."""
    if user.role == UserRole.CLIENT:
        return order.customer_id == user.id
    if user.role == UserRole.DELIVERY:
        return order.driver_id == user.id
    if user.role == UserRole.OWNER:
        return order.restaurant is not None and order.restaurant.owner_id == user.id
    return False


class OrderService:

    def __init__(self, storage: Storage):
        self.storage = storage

    @service_result("Could not create order")
    def create_order(self, customer: User, data: OrderCreate) -> int:
        """
        Price and persist an order.

        The restaurant and every dish are resolved before anything is
        written; a missing one aborts the whole order. All reads and writes
        share one transaction, and the rows read are locked where the
        database supports it.

        Returns:
            The new order's id
        """
        with self.storage.transaction():
            restaurant = self.storage.restaurants.find_by_id(data.restaurant_id, lock=True)
            if restaurant is None:
                raise NotFoundError("Restaurant not found")

            lines = []
            for item in data.items:
                dish = self.storage.dishes.find_by_id(item.dish_id, lock=True)
                if dish is None:
                    raise NotFoundError("dish not found")
                lines.append((dish, item, price_item(dish.price, dish.options, item.options)))

            total = sum((line_price for _, _, line_price in lines), Decimal("0"))

            order_items = [
                self.storage.order_items.save(
                    self.storage.order_items.create(
                        dish=dish,
                        options=[option.model_dump(exclude_unset=True) for option in item.options],
                    )
                )
                for dish, item, _ in lines
            ]
            order = self.storage.orders.save(
                self.storage.orders.create(
                    customer_id=customer.id,
                    restaurant_id=restaurant.id,
                    total=total,
                    items=order_items,
                )
            )
            order_id = order.id

        logger.info(f"Customer {customer.id} placed order {order_id} at restaurant {data.restaurant_id} (total={total})")
        return order_id

    @service_result("Could not get orders")
    def get_orders(self, user: User, status: Optional[OrderStatus] = None):
        if user.role == UserRole.CLIENT:
            criteria = [Order.customer_id == user.id]
        elif user.role == UserRole.DELIVERY:
            criteria = [Order.driver_id == user.id]
        else:
            owned = select(Restaurant.id).where(Restaurant.owner_id == user.id)
            criteria = [Order.restaurant_id.in_(owned)]

        if status is not None:
            criteria.append(Order.status == status)

        return self.storage.orders.find(*criteria, order_by=[Order.id.asc()])

    def _visible_order(self, user: User, order_id: int, lock: bool = False) -> Order:
        order = self.storage.orders.find_by_id(order_id, lock=lock)
        if order is None:
            raise NotFoundError("Order not found")
        if not can_see_order(user, order):
            raise ForbiddenError("You cannot see that order")
        return order

    @service_result("Could not get order")
    def get_order(self, user: User, order_id: int) -> Order:
        return self._visible_order(user, order_id)

    @service_result("Could not edit order")
    def edit_order(self, user: User, order_id: int, status: OrderStatus) -> None:
        with self.storage.transaction():
            order = self._visible_order(user, order_id, lock=True)
            transitions = STATUS_TRANSITIONS.get(user.role, {})
            if status not in transitions:
                raise ForbiddenError("You cannot edit that order")
            if order.status != transitions[status]:
                raise ConflictError(f"An order that is {order.status.value} cannot become {status.value}")
            previous = order.status
            order.status = status

        logger.info(f"Order {order_id}: {previous.value} -> {status.value} by user {user.id}")

    @service_result("Could not update order")
    def take_order(self, driver: User, order_id: int) -> None:
        """Assign ``driver`` to an order that has no driver yet."""
        with self.storage.transaction():
            order = self.storage.orders.find_by_id(order_id, lock=True)
            if order is None:
                raise NotFoundError("Order not found")
            if order.driver_id is not None:
                raise ConflictError("This order already has a driver")
            if order.status == OrderStatus.DELIVERED:
                raise ConflictError("This order was already delivered")
            order.driver_id = driver.id

        logger.info(f"Driver {driver.id} took order {order_id}")

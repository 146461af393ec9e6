"""
Tests for the order engine: creation, pricing and the order lifecycle.
"""
import pytest
from decimal import Decimal

from nuber_api.core.results import ErrorKind
from nuber_api.models.order import Order, OrderItem, OrderStatus
from nuber_api.schemas.order import OrderCreate
from nuber_api.services.orders import OrderService


def order_input(restaurant_id, *items):
    return OrderCreate(
        restaurant_id=restaurant_id,
        items=[{"dish_id": dish_id, "options": opts} for dish_id, opts in items],
    )


def persisted_counts(db):
    return db.query(Order).count(), db.query(OrderItem).count()


class TestCreateOrder:

    def test_missing_restaurant(self, db, storage, customer, dish):
        result = OrderService(storage).create_order(customer, order_input(9999, (dish.id, [])))

        assert result.ok is False
        assert result.error == "Restaurant not found"
        assert result.kind == ErrorKind.NOT_FOUND
        assert persisted_counts(db) == (0, 0)

    def test_missing_dish_aborts_whole_order(self, db, storage, customer, restaurant, dish):
        """A missing dish after a valid one leaves nothing behind."""
        result = OrderService(storage).create_order(
            customer,
            order_input(restaurant.id, (dish.id, [{"name": "size"}]), (9999, [])),
        )

        assert result.ok is False
        assert result.error == "dish not found"
        assert result.kind == ErrorKind.NOT_FOUND
        assert persisted_counts(db) == (0, 0)

    def test_flat_option_extra(self, db, storage, customer, restaurant, dish):
        result = OrderService(storage).create_order(
            customer, order_input(restaurant.id, (dish.id, [{"name": "size"}]))
        )

        assert result.ok is True
        assert result.error is None
        order = db.get(Order, result.value)
        assert order.total == Decimal("12")

    @pytest.mark.parametrize("choice,expected", [("hot", Decimal("11")), ("mild", Decimal("10")), ("lava", Decimal("10"))])
    def test_choice_extra(self, db, storage, customer, restaurant, dish, choice, expected):
        result = OrderService(storage).create_order(
            customer, order_input(restaurant.id, (dish.id, [{"name": "spice", "choice": choice}]))
        )

        assert result.ok is True
        assert db.get(Order, result.value).total == expected

    def test_unknown_option_is_free(self, db, storage, customer, restaurant, dish):
        result = OrderService(storage).create_order(
            customer, order_input(restaurant.id, (dish.id, [{"name": "extra cheese", "choice": "yes"}]))
        )

        assert result.ok is True
        assert db.get(Order, result.value).total == Decimal("10")

    def test_total_sums_all_items(self, db, storage, customer, restaurant, dish):
        result = OrderService(storage).create_order(
            customer,
            order_input(
                restaurant.id,
                (dish.id, [{"name": "size"}, {"name": "spice", "choice": "hot"}]),
                (dish.id, []),
            ),
        )

        order = db.get(Order, result.value)
        assert order.total == Decimal("23")
        assert len(order.items) == 2

    def test_order_snapshot(self, db, storage, customer, restaurant, dish):
        """Items keep the dish reference and the options exactly as submitted."""
        submitted = [{"name": "spice", "choice": "hot"}, {"name": "unknown"}]
        result = OrderService(storage).create_order(customer, order_input(restaurant.id, (dish.id, submitted)))

        order = db.get(Order, result.value)
        assert order.customer_id == customer.id
        assert order.restaurant_id == restaurant.id
        assert order.status == OrderStatus.PENDING
        assert order.driver_id is None
        assert order.items[0].dish_id == dish.id
        assert order.items[0].options == submitted

    def test_unexpected_failure_becomes_unknown(self, db, storage, customer, restaurant, dish, monkeypatch):
        def broken_save(instance):
            raise RuntimeError("database went away")

        monkeypatch.setattr(storage.orders, "save", broken_save)
        result = OrderService(storage).create_order(customer, order_input(restaurant.id, (dish.id, [])))

        assert result.ok is False
        assert result.error == "Could not create order"
        assert result.kind == ErrorKind.UNKNOWN
        assert persisted_counts(db) == (0, 0)


@pytest.fixture
def placed_order(storage, customer, restaurant, dish) -> int:
    result = OrderService(storage).create_order(customer, order_input(restaurant.id, (dish.id, [])))
    assert result.ok
    return result.value


class TestOrderLifecycle:

    def test_get_orders_by_role(self, storage, customer, owner, other_owner, driver, placed_order):
        service = OrderService(storage)

        assert [o.id for o in service.get_orders(customer).value] == [placed_order]
        assert [o.id for o in service.get_orders(owner).value] == [placed_order]
        assert service.get_orders(other_owner).value == []
        assert service.get_orders(driver).value == []

    def test_get_orders_status_filter(self, storage, customer, placed_order):
        service = OrderService(storage)

        assert len(service.get_orders(customer, OrderStatus.PENDING).value) == 1
        assert service.get_orders(customer, OrderStatus.DELIVERED).value == []

    def test_get_order_visibility(self, storage, customer, other_owner, placed_order):
        service = OrderService(storage)

        assert service.get_order(customer, placed_order).ok is True

        result = service.get_order(other_owner, placed_order)
        assert result.ok is False
        assert result.kind == ErrorKind.FORBIDDEN
        assert result.error == "You cannot see that order"

        missing = service.get_order(customer, 9999)
        assert missing.error == "Order not found"

    def test_owner_cooks_and_driver_delivers(self, db, storage, owner, driver, placed_order):
        service = OrderService(storage)

        assert service.edit_order(owner, placed_order, OrderStatus.COOKING).ok
        assert service.edit_order(owner, placed_order, OrderStatus.COOKED).ok
        assert service.take_order(driver, placed_order).ok
        assert service.edit_order(driver, placed_order, OrderStatus.PICKED_UP).ok
        assert service.edit_order(driver, placed_order, OrderStatus.DELIVERED).ok

        db.expire_all()
        order = db.get(Order, placed_order)
        assert order.status == OrderStatus.DELIVERED
        assert order.driver_id == driver.id

    def test_roles_cannot_set_other_roles_statuses(self, storage, customer, owner, placed_order):
        service = OrderService(storage)

        result = service.edit_order(owner, placed_order, OrderStatus.DELIVERED)
        assert result.ok is False
        assert result.error == "You cannot edit that order"

        result = service.edit_order(customer, placed_order, OrderStatus.COOKING)
        assert result.ok is False
        assert result.kind == ErrorKind.FORBIDDEN

    def test_take_order_twice(self, storage, driver, make_user, placed_order):
        service = OrderService(storage)
        second_driver = make_user("driver2@example.com", driver.role)

        assert service.take_order(driver, placed_order).ok is True

        result = service.take_order(second_driver, placed_order)
        assert result.ok is False
        assert result.kind == ErrorKind.CONFLICT
        assert result.error == "This order already has a driver"

    def test_take_missing_order(self, storage, driver):
        result = OrderService(storage).take_order(driver, 9999)
        assert result.error == "Order not found"

    def test_status_must_follow_previous_step(self, db, storage, owner, driver, placed_order):
        service = OrderService(storage)
        assert service.take_order(driver, placed_order).ok is True

        result = service.edit_order(driver, placed_order, OrderStatus.DELIVERED)
        assert result.ok is False
        assert result.kind == ErrorKind.CONFLICT
        assert result.error == "An order that is Pending cannot become Delivered"

        result = service.edit_order(owner, placed_order, OrderStatus.COOKED)
        assert result.kind == ErrorKind.CONFLICT

        db.expire_all()
        assert db.get(Order, placed_order).status == OrderStatus.PENDING

    def test_cannot_take_delivered_order(self, db, storage, driver, placed_order):
        order = db.get(Order, placed_order)
        order.status = OrderStatus.DELIVERED
        db.commit()

        result = OrderService(storage).take_order(driver, placed_order)

        assert result.ok is False
        assert result.kind == ErrorKind.CONFLICT
        assert result.error == "This order was already delivered"

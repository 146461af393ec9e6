"""
SQLAlchemy models for Nuber Eats.
"""
# Accounts
from nuber_api.models.user import User, UserRole

# Restaurants & menu
from nuber_api.models.category import Category
from nuber_api.models.restaurant import Restaurant
from nuber_api.models.dish import Dish

# Orders
from nuber_api.models.order import Order, OrderItem, OrderStatus


__all__ = [
    # Accounts
    "User",
    "UserRole",
    # Restaurants
    "Category",
    "Restaurant",
    "Dish",
    # Orders
    "Order",
    "OrderItem",
    "OrderStatus",
]

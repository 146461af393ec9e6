"""
Order Pydantic schemas.
"""
from typing import List, Optional

from pydantic import BaseModel

from nuber_api.models.order import OrderStatus


class OrderItemOption(BaseModel):
    """An option as submitted by the customer: option name plus chosen value."""
    name: str
    choice: Optional[str] = None


class OrderItemCreate(BaseModel):
    dish_id: int
    options: List[OrderItemOption] = []


class OrderCreate(BaseModel):
    """Request model for placing an order."""
    restaurant_id: int
    items: List[OrderItemCreate]


class OrderStatusUpdate(BaseModel):
    order_id: int
    status: OrderStatus

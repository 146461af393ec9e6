"""
Dish Pydantic schemas, including the option/choice structure stored on a dish.
"""
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field


class DishChoice(BaseModel):
    """A selectable sub-value of an option, optionally with its own surcharge."""
    name: str
    extra: Optional[Decimal] = None


class DishOption(BaseModel):
    """
    A customization axis of a dish.

    Either the option itself carries a flat ``extra`` or its ``choices`` are
    priced individually. When both are set only ``extra`` is ever charged.
    """
    name: str
    extra: Optional[Decimal] = None
    choices: Optional[List[DishChoice]] = None


class DishCreate(BaseModel):
    """Request model for adding a dish to a restaurant."""
    restaurant_id: int
    name: str = Field(min_length=1, max_length=255)
    price: Decimal = Field(ge=0)
    description: str = Field(max_length=140)
    photo: Optional[str] = None
    options: List[DishOption] = []


class DishUpdate(BaseModel):
    """Request model for editing a dish; only supplied fields change."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    price: Optional[Decimal] = Field(default=None, ge=0)
    description: Optional[str] = Field(default=None, max_length=140)
    photo: Optional[str] = None
    options: Optional[List[DishOption]] = None

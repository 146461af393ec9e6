"""
Restaurant Pydantic schemas.
"""
from typing import Optional

from pydantic import BaseModel, Field, field_validator


def category_name_not_blank(v):
    if v is not None and not v.strip():
        raise ValueError('category name cannot be blank')
    return v


class RestaurantCreate(BaseModel):
    """Request model for creating a restaurant."""
    name: str = Field(min_length=5, max_length=255)
    address: str
    cover_img: Optional[str] = None
    category_name: str = Field(min_length=1)

    @field_validator('category_name')
    @classmethod
    def category_name_present(cls, v):
        return category_name_not_blank(v)


class RestaurantUpdate(BaseModel):
    """Request model for editing a restaurant; only supplied fields change."""
    name: Optional[str] = Field(default=None, min_length=5, max_length=255)
    address: Optional[str] = None
    cover_img: Optional[str] = None
    category_name: Optional[str] = None

    @field_validator('category_name')
    @classmethod
    def category_name_present(cls, v):
        return category_name_not_blank(v)

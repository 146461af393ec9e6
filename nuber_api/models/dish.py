"""
Dish model.

Options are stored as an ordered JSON list, each entry shaped like
``{"name": str, "extra": number | null, "choices": [{"name": str, "extra": number | null}] | null}``.
"""
from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, JSON, Numeric, String, Text, func
from sqlalchemy.orm import relationship

from nuber_api.db.base import Base


class Dish(Base):
    __tablename__ = "dishes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    photo = Column(String(500))
    description = Column(Text, nullable=False)
    options = Column(JSON, nullable=False, default=list)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    restaurant = relationship("Restaurant", back_populates="menu")

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_dishes_price_non_negative"),
    )

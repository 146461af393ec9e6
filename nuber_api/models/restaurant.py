from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship

from nuber_api.db.base import Base


class Restaurant(Base):
    __tablename__ = "restaurants"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    cover_img = Column(String(500))
    address = Column(String(255), nullable=False)
    is_promoted = Column(Boolean, nullable=False, default=False)
    promoted_until = Column(DateTime, nullable=True)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    owner = relationship("User", back_populates="restaurants")
    category = relationship("Category", back_populates="restaurants")
    menu = relationship("Dish", back_populates="restaurant", cascade="all, delete-orphan", order_by="Dish.id")
    orders = relationship("Order", back_populates="restaurant", order_by="Order.id")

import enum

from sqlalchemy import Boolean, Column, DateTime, Enum, Integer, String, func
from sqlalchemy.orm import relationship

from nuber_api.db.base import Base


class UserRole(str, enum.Enum):
    CLIENT = "Client"
    OWNER = "Owner"
    DELIVERY = "Delivery"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    hashed_password = Column(String, nullable=False)
    role = Column(Enum(UserRole, name="user_role"), nullable=False)
    verified = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    restaurants = relationship("Restaurant", back_populates="owner")
    orders = relationship("Order", back_populates="customer", foreign_keys="Order.customer_id")
    rides = relationship("Order", back_populates="driver", foreign_keys="Order.driver_id")

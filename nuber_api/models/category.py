from sqlalchemy import Column, DateTime, Integer, String, func
from sqlalchemy.orm import relationship

from nuber_api.db.base import Base


class Category(Base):
    """Restaurant category, addressed by a unique slug derived from its name."""
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    slug = Column(String(100), nullable=False, unique=True, index=True)
    cover_img = Column(String(500))
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    restaurants = relationship("Restaurant", back_populates="category")

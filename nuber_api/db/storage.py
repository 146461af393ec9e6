"""
Storage port used by the services.

Services never touch the session directly; they receive a ``Storage`` at
construction and go through one ``Repository`` per entity. Multi-step
writes run inside ``Storage.transaction()``.
"""
from contextlib import contextmanager
from typing import Any, Generic, Iterator, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from nuber_api.db.base import Base
from nuber_api.models.category import Category
from nuber_api.models.dish import Dish
from nuber_api.models.order import Order, OrderItem
from nuber_api.models.restaurant import Restaurant
from nuber_api.models.user import User

ModelT = TypeVar("ModelT", bound=Base)


class Repository(Generic[ModelT]):
    """Find, count, create, save and delete operations over one model."""

    def __init__(self, session: Session, model: Type[ModelT]):
        self.session = session
        self.model = model

    def find_by_id(self, id: Any, lock: bool = False) -> Optional[ModelT]:
        if id is None:
            return None
        return self.session.get(self.model, id, with_for_update=lock or None)

    def find_one(self, *criteria) -> Optional[ModelT]:
        stmt = select(self.model).where(*criteria).limit(1)
        return self.session.execute(stmt).scalars().first()

    def find(
        self,
        *criteria,
        order_by: Sequence[Any] = (),
        skip: Optional[int] = None,
        take: Optional[int] = None,
    ) -> List[ModelT]:
        stmt = select(self.model).where(*criteria).order_by(*order_by)
        if skip:
            stmt = stmt.offset(skip)
        if take is not None:
            stmt = stmt.limit(take)
        return list(self.session.execute(stmt).scalars().all())

    def count(self, *criteria) -> int:
        stmt = select(func.count()).select_from(self.model).where(*criteria)
        return self.session.execute(stmt).scalar_one()

    def create(self, **values) -> ModelT:
        """Build a transient instance; nothing is written until ``save``."""
        return self.model(**values)

    def save(self, instance: ModelT) -> ModelT:
        self.session.add(instance)
        self.session.flush()
        return instance

    def delete(self, instance: ModelT) -> None:
        self.session.delete(instance)
        self.session.flush()


class Storage:
    """One repository per entity plus an explicit transaction boundary."""

    def __init__(self, session: Session):
        self.session = session
        self.users = Repository(session, User)
        self.categories = Repository(session, Category)
        self.restaurants = Repository(session, Restaurant)
        self.dishes = Repository(session, Dish)
        self.orders = Repository(session, Order)
        self.order_items = Repository(session, OrderItem)

    @contextmanager
    def transaction(self) -> Iterator["Storage"]:
        """Commit everything done inside the block, or roll it all back."""
        try:
            yield self
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

    def rollback(self) -> None:
        self.session.rollback()

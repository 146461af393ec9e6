"""
Test configuration and fixtures.
"""
import os
import pytest
from typing import Callable, Generator
from decimal import Decimal
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

# Set test configuration before importing app
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-only-secret-key-that-is-long-enough-1234"

from nuber_api.main import app
from nuber_api.db.base import Base
from nuber_api.db.session import get_db
from nuber_api.db.storage import Storage
from nuber_api.models.category import Category
from nuber_api.models.dish import Dish
from nuber_api.models.restaurant import Restaurant
from nuber_api.models.user import User, UserRole
from nuber_api.core.security import create_access_token, hash_password


# In-memory database shared by every connection of a test
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TEST_PASSWORD = "testpassword123"


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a fresh schema and a database session for the test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def storage(db: Session) -> Storage:
    return Storage(db)


@pytest.fixture(scope="function")
def client(db: Session) -> Generator[TestClient, None, None]:
    """Create test client with database session override."""
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db: Session) -> Callable[..., User]:
    """Factory creating users with the shared test password."""
    def _make_user(email: str, role: UserRole) -> User:
        user = User(email=email, hashed_password=hash_password(TEST_PASSWORD), role=role)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make_user


@pytest.fixture
def owner(make_user) -> User:
    return make_user("owner@example.com", UserRole.OWNER)


@pytest.fixture
def other_owner(make_user) -> User:
    return make_user("other_owner@example.com", UserRole.OWNER)


@pytest.fixture
def customer(make_user) -> User:
    return make_user("customer@example.com", UserRole.CLIENT)


@pytest.fixture
def driver(make_user) -> User:
    return make_user("driver@example.com", UserRole.DELIVERY)


@pytest.fixture
def category(db: Session) -> Category:
    category = Category(name="korean bbq", slug="korean-bbq")
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


@pytest.fixture
def restaurant(db: Session, owner: User, category: Category) -> Restaurant:
    restaurant = Restaurant(
        name="Seoul Kitchen",
        address="12 Main Street",
        owner_id=owner.id,
        category_id=category.id,
    )
    db.add(restaurant)
    db.commit()
    db.refresh(restaurant)
    return restaurant


@pytest.fixture
def dish(db: Session, restaurant: Restaurant) -> Dish:
    """A 10.00 dish with a flat-priced option and a choice-priced option."""
    dish = Dish(
        restaurant_id=restaurant.id,
        name="Bibimbap",
        price=Decimal("10.00"),
        description="Mixed rice bowl",
        options=[
            {"name": "size", "extra": 2},
            {"name": "spice", "choices": [{"name": "hot", "extra": 1}, {"name": "mild"}]},
        ],
    )
    db.add(dish)
    db.commit()
    db.refresh(dish)
    return dish


def auth_headers_for(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(subject=user.id)}"}


@pytest.fixture
def graphql(client: TestClient) -> Callable[..., dict]:
    """Post a GraphQL document and return the decoded response body."""
    def _execute(query: str, variables: dict | None = None, user: User | None = None) -> dict:
        headers = auth_headers_for(user) if user is not None else {}
        response = client.post(
            "/graphql",
            json={"query": query, "variables": variables or {}},
            headers=headers,
        )
        return response.json()
    return _execute

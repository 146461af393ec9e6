"""
Category directory: slug normalization, get-or-create and category pages.
"""
import logging

from nuber_api.core.config import get_settings
from nuber_api.core.results import NotFoundError, ServiceError, service_result
from nuber_api.db.storage import Storage
from nuber_api.models.category import Category
from nuber_api.models.restaurant import Restaurant
from nuber_api.services.pagination import paginate

logger = logging.getLogger(__name__)


def normalize_name(name: str) -> str:
    """Lowercase and collapse runs of whitespace to single spaces."""
    return " ".join(name.strip().lower().split())


def slugify(name: str) -> str:
    """
    Derive the category slug from a display name.

    E.g. "  Korean  BBQ " -> "korean-bbq"
    """
    return normalize_name(name).replace(" ", "-")


class CategoryService:
    """Lookups and get-or-create over categories."""

    def __init__(self, storage: Storage):
        self.storage = storage
        self.page_size = get_settings().PAGE_SIZE

    def get_or_create(self, name: str) -> Category:
        """
        Return the category whose slug matches ``name``, creating it if needed.

        Runs inside the caller's transaction and does not commit.
        """
        slug = slugify(name)
        if not slug:
            raise ServiceError("Category name cannot be blank")
        category = self.storage.categories.find_one(Category.slug == slug)
        if category is None:
            category = self.storage.categories.save(
                self.storage.categories.create(name=normalize_name(name), slug=slug)
            )
            logger.info(f"Created category '{slug}' (id={category.id})")
        return category

    def count_restaurants(self, category_id: int) -> int:
        return self.storage.restaurants.count(Restaurant.category_id == category_id)

    @service_result("Could not load categories.")
    def all_categories(self):
        return self.storage.categories.find(order_by=[Category.name.asc()])

    @service_result("Could not load category")
    def find_category_by_slug(self, slug: str, page: int = 1):
        """
        Load a category and one page of its restaurants, promoted first.

        Returns:
            (category, Page of restaurants)
        """
        category = self.storage.categories.find_one(Category.slug == slug)
        if category is None:
            raise NotFoundError("Category not found")

        restaurants = paginate(
            self.storage.restaurants,
            Restaurant.category_id == category.id,
            page=page,
            page_size=self.page_size,
            order_by=[Restaurant.is_promoted.desc(), Restaurant.id.asc()],
        )
        return category, restaurants

"""
Tests for the restaurant directory, listing and search.
"""
import pytest
from pydantic import ValidationError

from nuber_api.core.results import ErrorKind
from nuber_api.models.category import Category
from nuber_api.models.restaurant import Restaurant
from nuber_api.schemas.restaurant import RestaurantCreate, RestaurantUpdate
from nuber_api.services.pagination import page_offset, total_pages
from nuber_api.services.restaurants import RestaurantService


class TestPagination:

    @pytest.mark.parametrize("page,offset", [(1, 0), (2, 10), (3, 20), (0, 0), (-4, 0)])
    def test_page_offset(self, page, offset):
        assert page_offset(page, 10) == offset

    @pytest.mark.parametrize("results,pages", [(0, 0), (1, 1), (10, 1), (11, 2), (25, 3)])
    def test_total_pages(self, results, pages):
        assert total_pages(results, 10) == pages


class TestCreateRestaurant:

    def test_create(self, db, storage, owner):
        data = RestaurantCreate(name="Burger Barn", address="1 Elm St", category_name="Fast Food")
        result = RestaurantService(storage).create_restaurant(owner, data)

        assert result.ok is True
        restaurant = db.get(Restaurant, result.value)
        assert restaurant.owner_id == owner.id
        assert restaurant.category.slug == "fast-food"
        assert restaurant.is_promoted is False

    def test_same_category_for_equivalent_names(self, db, storage, owner):
        service = RestaurantService(storage)
        service.create_restaurant(owner, RestaurantCreate(name="Burger Barn", address="a", category_name="Fast Food"))
        service.create_restaurant(owner, RestaurantCreate(name="Taco Town", address="b", category_name="fast  food"))

        assert db.query(Category).count() == 1

    @pytest.mark.parametrize("category_name", ["", "   ", "\t\n"])
    def test_blank_category_name_rejected(self, category_name):
        with pytest.raises(ValidationError):
            RestaurantCreate(name="Blank Place", address="x", category_name=category_name)

    def test_blank_category_never_saved(self, db, storage, owner):
        data = RestaurantCreate.model_construct(name="Blank Place", address="x", cover_img=None, category_name="   ")
        result = RestaurantService(storage).create_restaurant(owner, data)

        assert result.ok is False
        assert result.error == "Category name cannot be blank"
        assert db.query(Category).count() == 0
        assert db.query(Restaurant).count() == 0


class TestEditRestaurant:

    def test_not_owner(self, db, storage, other_owner, restaurant):
        result = RestaurantService(storage).edit_restaurant(
            other_owner, restaurant.id, RestaurantUpdate(name="Stolen Kitchen")
        )

        assert result.ok is False
        assert result.error == "You cannot edit a restaurant that you do not own"
        assert result.kind == ErrorKind.FORBIDDEN
        db.expire_all()
        assert db.get(Restaurant, restaurant.id).name == "Seoul Kitchen"

    def test_not_found(self, storage, owner):
        result = RestaurantService(storage).edit_restaurant(owner, 9999, RestaurantUpdate(name="Anything"))

        assert result.error == "Restaurant not found"
        assert result.kind == ErrorKind.NOT_FOUND

    def test_partial_update_with_new_category(self, db, storage, owner, restaurant):
        result = RestaurantService(storage).edit_restaurant(
            owner, restaurant.id, RestaurantUpdate(name="Seoul Garden", category_name="Korean Food")
        )

        assert result.ok is True
        db.expire_all()
        edited = db.get(Restaurant, restaurant.id)
        assert edited.name == "Seoul Garden"
        assert edited.address == "12 Main Street"
        assert edited.owner_id == owner.id
        assert edited.category.slug == "korean-food"

    def test_blank_category_name_rejected(self):
        with pytest.raises(ValidationError):
            RestaurantUpdate(category_name="   ")

    def test_blank_category_keeps_current_category(self, db, storage, owner, restaurant, category):
        data = RestaurantUpdate.model_construct(category_name="   ")
        result = RestaurantService(storage).edit_restaurant(owner, restaurant.id, data)

        assert result.ok is False
        db.expire_all()
        assert db.get(Restaurant, restaurant.id).category_id == category.id
        assert db.query(Category).count() == 1


class TestDeleteRestaurant:

    def test_not_owner(self, db, storage, other_owner, restaurant):
        result = RestaurantService(storage).delete_restaurant(other_owner, restaurant.id)

        assert result.ok is False
        assert result.error == "You cannot delete a restaurant that you do not own"
        assert db.query(Restaurant).count() == 1

    def test_delete(self, db, storage, owner, restaurant, dish):
        result = RestaurantService(storage).delete_restaurant(owner, restaurant.id)

        assert result.ok is True
        assert db.query(Restaurant).count() == 0


class TestOwnerQueries:

    def test_my_restaurants(self, storage, owner, other_owner, restaurant):
        service = RestaurantService(storage)

        assert [r.id for r in service.my_restaurants(owner).value] == [restaurant.id]
        assert service.my_restaurants(other_owner).value == []

    def test_my_restaurant_scoped_to_owner(self, storage, owner, other_owner, restaurant):
        service = RestaurantService(storage)

        assert service.my_restaurant(owner, restaurant.id).value.id == restaurant.id
        result = service.my_restaurant(other_owner, restaurant.id)
        assert result.ok is False
        assert result.error == "Restaurant not found"


@pytest.fixture
def many_restaurants(db, owner, category):
    names = [f"Noodle House {i:02d}" for i in range(23)] + ["Pizza Palace", "PIZZA Express"]
    for i, name in enumerate(names):
        db.add(Restaurant(
            name=name,
            address="Somewhere",
            owner_id=owner.id,
            category_id=category.id,
            is_promoted=(name == "PIZZA Express"),
        ))
    db.commit()
    return names


class TestListing:

    def test_pages(self, storage, many_restaurants):
        service = RestaurantService(storage)

        first = service.all_restaurants(1).value
        assert first.total_results == 25
        assert first.total_pages == 3
        assert len(first.results) == 10
        assert first.results[0].name == "PIZZA Express"

        third = service.all_restaurants(3).value
        assert len(third.results) == 5

        beyond = service.all_restaurants(4).value
        assert beyond.results == []

    def test_find_by_id(self, storage, restaurant, dish):
        result = RestaurantService(storage).find_restaurant_by_id(restaurant.id)

        assert result.ok is True
        assert [d.id for d in result.value.menu] == [dish.id]

    def test_find_by_id_missing(self, storage):
        result = RestaurantService(storage).find_restaurant_by_id(9999)
        assert result.error == "Restaurant not found"

    def test_search_is_case_insensitive_substring(self, storage, many_restaurants):
        page = RestaurantService(storage).search_restaurant_by_name("pizza", 1).value

        assert page.total_results == 2
        assert page.total_pages == 1
        assert {r.name for r in page.results} == {"Pizza Palace", "PIZZA Express"}

    def test_search_paginates(self, storage, many_restaurants):
        page = RestaurantService(storage).search_restaurant_by_name("noodle", 3).value

        assert page.total_results == 23
        assert page.total_pages == 3
        assert len(page.results) == 3

    @pytest.mark.parametrize("query,expected", [
        ("_", {"Burger_King"}),
        ("%", {"100% Vegan"}),
        ("r_k", {"Burger_King"}),
    ])
    def test_search_matches_wildcards_literally(self, db, storage, owner, category, query, expected):
        for name in ["Pizza Hut", "Burger_King", "Taco Bell", "100% Vegan", "Barok Grill"]:
            db.add(Restaurant(name=name, address="Somewhere", owner_id=owner.id, category_id=category.id))
        db.commit()

        page = RestaurantService(storage).search_restaurant_by_name(query, 1).value

        assert {r.name for r in page.results} == expected

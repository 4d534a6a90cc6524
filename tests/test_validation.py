"""Tests for catalog validation and date helpers."""

import asyncio
from datetime import date, timedelta

import pytest
from bson import ObjectId
from pymongo.errors import PyMongoError

from vegshop.models.enums import VALID_CATEGORIES
from vegshop.services.dates import is_valid_date, previous_day, resolve_date_param, today
from vegshop.services.validation import (
    is_valid_object_id,
    validate_daily_stock_vegetables,
    validate_vegetable_data,
)


def test_valid_vegetable_passes():
    result = validate_vegetable_data({"name": "Onion", "price": "12.5", "category": "bulb"})
    assert result.is_valid
    assert result.error is None


@pytest.mark.parametrize("name", [None, "", "   ", 42])
def test_name_required(name):
    result = validate_vegetable_data({"name": name, "price": 1, "category": "root"})
    assert not result.is_valid
    assert result.error == "Name is required and cannot be empty"


@pytest.mark.parametrize("price", [None, "abc", -1, "", float("nan"), True])
def test_price_must_be_non_negative_number(price):
    result = validate_vegetable_data({"name": "Beet", "price": price, "category": "root"})
    assert result.error == "Price must be a valid non-negative number"


def test_name_checked_before_price_and_category():
    result = validate_vegetable_data({"name": "", "price": -5, "category": "nope"})
    assert result.error == "Name is required and cannot be empty"


def test_missing_category():
    result = validate_vegetable_data({"name": "Beet", "price": 3})
    assert result.error == "Category is required"


@pytest.mark.parametrize("category", VALID_CATEGORIES)
def test_all_categories_accepted(category):
    assert validate_vegetable_data({"name": "X", "price": 0, "category": category}).is_valid


@pytest.mark.parametrize("category", ["Root", "tuber", "fruit", "grain"])
def test_unknown_category_lists_valid_values(category):
    result = validate_vegetable_data({"name": "X", "price": 0, "category": category})
    assert not result.is_valid
    assert result.error == (
        "Category must be one of: stem, root, bulb, leaves, fruits, herb, seeds, vegetable"
    )


def test_object_id_format():
    assert is_valid_object_id(str(ObjectId()))
    assert is_valid_object_id("ABCDEFabcdef012345678901")
    assert not is_valid_object_id("123")
    assert not is_valid_object_id("g" * 24)
    # 12-byte strings are valid ObjectIds to bson but not here
    assert not is_valid_object_id("abcdefghijkl")
    assert not is_valid_object_id(None)


@pytest.mark.parametrize("value", ["2024-01-01", "2024-02-29", "1999-12-31"])
def test_valid_dates(value):
    assert is_valid_date(value)


@pytest.mark.parametrize(
    "value", ["2023-02-30", "2023-13-01", "2024-1-01", "20240101", "2024-01-01T00:00", "", None, 20240101]
)
def test_invalid_dates(value):
    assert not is_valid_date(value)


def test_today_and_previous_day():
    assert today() == date.today().isoformat()
    assert previous_day() == (date.today() - timedelta(days=1)).isoformat()
    assert previous_day("2024-03-01") == "2024-02-29"


def test_resolve_date_param():
    assert resolve_date_param("previous-day") == previous_day()
    assert resolve_date_param("2024-01-01") == "2024-01-01"
    assert resolve_date_param("yesterday") is None


class TestDailyStockValidation:
    def run(self, vegetables, collection):
        return asyncio.run(validate_daily_stock_vegetables(vegetables, collection))

    @pytest.fixture
    def catalog(self, db):
        collection = db["vegetables"]
        inserted = asyncio.run(collection.insert_one({"name": "Carrot", "price": 40, "category": "root"}))
        return collection, str(inserted.inserted_id)

    def test_accepts_known_vegetable(self, catalog):
        collection, veg_id = catalog
        result = self.run([{"id": veg_id, "quantity": 3, "photo": "https://x"}], collection)
        assert result.is_valid

    def test_rejects_non_list(self, catalog):
        collection, _ = catalog
        assert self.run({"id": "x"}, collection).error == "Vegetables must be an array"
        assert self.run(None, collection).error == "Vegetables must be an array"

    def test_rejects_bad_id(self, catalog):
        collection, _ = catalog
        result = self.run([{"id": "123", "quantity": 1, "photo": "https://x"}], collection)
        assert result.error == "Each vegetable must have a valid 24-character hexadecimal id"

    @pytest.mark.parametrize("quantity", [-1, "3", None, True])
    def test_rejects_bad_quantity(self, catalog, quantity):
        collection, veg_id = catalog
        result = self.run([{"id": veg_id, "quantity": quantity, "photo": "https://x"}], collection)
        assert result.error == "Each vegetable must have a valid non-negative quantity"

    @pytest.mark.parametrize("photo", ["", "   ", None, 5])
    def test_rejects_missing_photo(self, catalog, photo):
        collection, veg_id = catalog
        result = self.run([{"id": veg_id, "quantity": 1, "photo": photo}], collection)
        assert result.error == "Each vegetable must have a non-empty photo URL"

    def test_rejects_unknown_vegetable(self, catalog):
        collection, _ = catalog
        missing = str(ObjectId())
        result = self.run([{"id": missing, "quantity": 1, "photo": "https://x"}], collection)
        assert result.error == f"Vegetable with id {missing} not found"

    def test_first_failing_entry_wins(self, catalog):
        collection, veg_id = catalog
        missing = str(ObjectId())
        result = self.run(
            [
                {"id": veg_id, "quantity": 1, "photo": "https://x"},
                {"id": missing, "quantity": 1, "photo": "https://x"},
                {"id": veg_id, "quantity": -1, "photo": "https://x"},
            ],
            collection,
        )
        assert result.error == f"Vegetable with id {missing} not found"


class UnreachableCollection:
    """Vegetables collection whose lookups fail like a dropped connection."""

    async def find_one(self, *args, **kwargs):
        raise PyMongoError("connection reset")


def test_catalog_lookup_failure_fails_validation():
    entries = [{"id": str(ObjectId()), "quantity": 1, "photo": "https://x"}]
    result = asyncio.run(validate_daily_stock_vegetables(entries, UnreachableCollection()))
    assert not result.is_valid
    assert result.error == "Invalid vegetable id format"

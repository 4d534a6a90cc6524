"""Catalog and daily stock validation.

Each check returns a :class:`ValidationResult`; the first failing rule wins and
its message is what the API reports back to the caller.
"""

import logging
import math
import re
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

from bson import ObjectId
from pymongo.errors import PyMongoError

from vegshop.models.enums import VALID_CATEGORIES

logger = logging.getLogger(__name__)

OBJECT_ID_RE = re.compile(r"^[0-9a-fA-F]{24}$")

INVALID_ID_MESSAGE = "Invalid ID format: Must be a 24-character hexadecimal string"
INVALID_VEGETABLE_ID_MESSAGE = "Invalid vegetable ID format: Must be a 24-character hexadecimal string"


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    error: Optional[str] = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(True)

    @classmethod
    def fail(cls, error: str) -> "ValidationResult":
        return cls(False, error)


def is_valid_object_id(value: Any) -> bool:
    # ObjectId.is_valid also accepts 12-byte strings, which are not ids here
    return isinstance(value, str) and OBJECT_ID_RE.match(value) is not None


def coerce_number(value: Any) -> Optional[float]:
    """Coerce a price-like value to a finite float, or None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def is_quantity(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
        and value >= 0
    )


def validate_vegetable_data(data: Mapping[str, Any]) -> ValidationResult:
    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        return ValidationResult.fail("Name is required and cannot be empty")

    price = coerce_number(data.get("price"))
    if price is None or price < 0:
        return ValidationResult.fail("Price must be a valid non-negative number")

    category = data.get("category")
    if not category:
        return ValidationResult.fail("Category is required")
    if category not in VALID_CATEGORIES:
        return ValidationResult.fail(f"Category must be one of: {', '.join(VALID_CATEGORIES)}")

    return ValidationResult.ok()


async def validate_daily_stock_vegetables(vegetables: Any, collection) -> ValidationResult:
    """Check stock entries in order against the vegetables ``collection``.

    This is the only validation step that touches the store: every entry id
    must resolve to an existing catalog document.
    """
    if not isinstance(vegetables, list):
        return ValidationResult.fail("Vegetables must be an array")

    for veg in vegetables:
        if not isinstance(veg, Mapping):
            return ValidationResult.fail("Each vegetable must be an object")
        veg_id = veg.get("id")
        if not is_valid_object_id(veg_id):
            return ValidationResult.fail("Each vegetable must have a valid 24-character hexadecimal id")
        if not is_quantity(veg.get("quantity")):
            return ValidationResult.fail("Each vegetable must have a valid non-negative quantity")
        photo = veg.get("photo")
        if not isinstance(photo, str) or not photo.strip():
            return ValidationResult.fail("Each vegetable must have a non-empty photo URL")
        try:
            exists = await collection.find_one({"_id": ObjectId(veg_id)}, {"_id": 1})
        except PyMongoError as e:
            logger.warning(f"Catalog lookup for {veg_id} failed: {e}")
            return ValidationResult.fail("Invalid vegetable id format")
        if not exists:
            return ValidationResult.fail(f"Vegetable with id {veg_id} not found")

    return ValidationResult.ok()


async def validate_vegetable_ids(ids: List[str], collection) -> ValidationResult:
    """Check that every id in ``ids`` names an existing catalog vegetable."""
    for veg_id in ids:
        if not is_valid_object_id(veg_id):
            return ValidationResult.fail(INVALID_VEGETABLE_ID_MESSAGE)
        if not await collection.find_one({"_id": ObjectId(veg_id)}, {"_id": 1}):
            return ValidationResult.fail(f"Vegetable with id {veg_id} not found")
    return ValidationResult.ok()

"""Enumerations shared by schemas and validation."""

from enum import Enum


class Category(str, Enum):
    """Vegetable catalog categories."""

    STEM = "stem"
    ROOT = "root"
    BULB = "bulb"
    LEAVES = "leaves"
    FRUITS = "fruits"
    HERB = "herb"
    SEEDS = "seeds"
    VEGETABLE = "vegetable"


class UserRole(str, Enum):
    CUSTOMER = "customer"
    VENDOR = "vendor"


VALID_CATEGORIES = [c.value for c in Category]

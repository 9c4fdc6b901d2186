"""Configuration management."""
from .settings import *
from .categories import (
    INCOME_CATEGORIES,
    EXPENSE_CATEGORIES,
    INCOME_KEYWORDS,
    EXPENSE_KEYWORDS,
    CATEGORY_KEYWORDS,
    categories_for,
    normalize_category,
)

__all__ = [
    'INCOME_CATEGORIES',
    'EXPENSE_CATEGORIES',
    'INCOME_KEYWORDS',
    'EXPENSE_KEYWORDS',
    'CATEGORY_KEYWORDS',
    'categories_for',
    'normalize_category',
]

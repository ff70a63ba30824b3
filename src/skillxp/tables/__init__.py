"""
skillxp.tables - Experience lookup tables

Per-category tables built from raw config entries, and the registry that
owns them.
"""

from skillxp.tables.categories import (
    BLOCK_BREAK_CATEGORIES,
    CATEGORY_CONFIGS,
    Category,
    CategoryConfig,
    Skill,
    block_break_category,
    get_category_config,
    has_table,
)
from skillxp.tables.table import (
    BuildReport,
    CategoryTable,
    DuplicateDefinition,
    InvalidValue,
    coerce_value,
    normalize_entries,
)
from skillxp.tables.registry import LookupRegistry

__all__ = [
    # Categories
    "BLOCK_BREAK_CATEGORIES",
    "CATEGORY_CONFIGS",
    "Category",
    "CategoryConfig",
    "Skill",
    "block_break_category",
    "get_category_config",
    "has_table",
    # Tables
    "BuildReport",
    "CategoryTable",
    "DuplicateDefinition",
    "InvalidValue",
    "coerce_value",
    "normalize_entries",
    # Registry
    "LookupRegistry",
]

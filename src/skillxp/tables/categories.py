"""
Skills and Experience Categories

Defines which lookup table a query targets and how each table's raw config
entries are resolved and typed.
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Dict, Optional

from skillxp.errors import UnsupportedCategory
from skillxp.resolver.identifiers import IdentifierSpace


class Skill(Enum):
    """Primary skills."""

    ACROBATICS = auto()
    ALCHEMY = auto()
    ARCHERY = auto()
    AXES = auto()
    EXCAVATION = auto()
    FISHING = auto()
    HERBALISM = auto()
    MINING = auto()
    REPAIR = auto()
    SALVAGE = auto()
    SMELTING = auto()
    SWORDS = auto()
    TAMING = auto()
    UNARMED = auto()
    WOODCUTTING = auto()


class Category(Enum):
    """Tag selecting which table a lookup applies to."""

    # Block break experience, one table per gathering skill
    MINING = auto()
    HERBALISM = auto()
    WOODCUTTING = auto()
    EXCAVATION = auto()

    # Furnace conversion, keyed by the smelted item
    SMELTING = auto()

    # Experience for taming a creature kind
    TAMING = auto()

    # Flat multiplier per creature kind (owned by the multiplier store)
    COMBAT = auto()

    # Multiplier per creature group tag (owned by the multiplier store)
    SPECIAL_COMBAT = auto()

    @classmethod
    def from_name(cls, name: str) -> Optional["Category"]:
        """Case-insensitive lookup by name, None if unknown."""
        return cls.__members__.get(name.strip().upper().replace("-", "_"))


@dataclass(frozen=True)
class CategoryConfig:
    """How a lookup-table category resolves and types its values."""

    # Host registry raw names are resolved against
    space: IdentifierSpace

    # Values are coerced to this type on build
    value_type: type

    # Skill that gains block break experience from this table, if any
    skill: Optional[Skill] = None

    # Human-readable label used in log lines
    description: str = ""


# Categories backed by a lookup table in the registry
CATEGORY_CONFIGS: Dict[Category, CategoryConfig] = {
    Category.MINING: CategoryConfig(
        space=IdentifierSpace.MATERIAL,
        value_type=int,
        skill=Skill.MINING,
        description="block break XP values for Mining",
    ),

    Category.HERBALISM: CategoryConfig(
        space=IdentifierSpace.MATERIAL,
        value_type=int,
        skill=Skill.HERBALISM,
        description="block break XP values for Herbalism",
    ),

    Category.WOODCUTTING: CategoryConfig(
        space=IdentifierSpace.MATERIAL,
        value_type=int,
        skill=Skill.WOODCUTTING,
        description="block break XP values for Woodcutting",
    ),

    Category.EXCAVATION: CategoryConfig(
        space=IdentifierSpace.MATERIAL,
        value_type=int,
        skill=Skill.EXCAVATION,
        description="block break XP values for Excavation",
    ),

    Category.SMELTING: CategoryConfig(
        space=IdentifierSpace.MATERIAL,
        value_type=int,
        description="XP values for furnaces",
    ),

    Category.TAMING: CategoryConfig(
        space=IdentifierSpace.ENTITY,
        value_type=float,
        description="Taming XP values",
    ),
}

# Skill -> its block break table
BLOCK_BREAK_CATEGORIES: Dict[Skill, Category] = {
    cfg.skill: category
    for category, cfg in CATEGORY_CONFIGS.items()
    if cfg.skill is not None
}


def get_category_config(category: Category) -> Optional[CategoryConfig]:
    """Get the table configuration for a category, None if it has no table."""
    return CATEGORY_CONFIGS.get(category)


def has_table(category: Category) -> bool:
    return category in CATEGORY_CONFIGS


def block_break_category(skill: Skill) -> Category:
    """
    Map a skill to its block break table.

    Raises:
        UnsupportedCategory: the skill never grants block break experience
    """
    category = BLOCK_BREAK_CATEGORIES.get(skill)
    if category is None:
        raise UnsupportedCategory(skill, "block break XP")
    return category

"""
Lookup Table Registry

Owns one CategoryTable per table category and serves category-qualified
lookups. Rebuilding a category builds a complete new table first and then
swaps it in with a single assignment, so concurrent readers see either the
old table or the new one, never a mix.

The two combat categories have no table of their own. Lookups on them are
answered by the attached MultiplierStore.
"""

import logging
import threading
from typing import TYPE_CHECKING, Any, Dict, Hashable, Iterable, Mapping, Optional, Tuple, Union

from skillxp.errors import UnsupportedCategory
from skillxp.resolver.identifiers import IdentifierLike, IdentifierRegistry, IdentifierSpace
from skillxp.tables.categories import (
    CATEGORY_CONFIGS,
    Category,
    CategoryConfig,
    Skill,
    block_break_category,
    get_category_config,
)
from skillxp.tables.table import BuildReport, CategoryTable, Number

if TYPE_CHECKING:
    from skillxp.multipliers import MultiplierStore

logger = logging.getLogger(__name__)


class LookupRegistry:
    """
    Category -> CategoryTable, plus the multiplier store for combat lookups.

    Reads take no lock. Writes to one category are serialized by that
    category's lock; writes to different categories do not contend.
    """

    def __init__(
        self,
        materials: IdentifierRegistry,
        entities: IdentifierRegistry,
        multipliers: Optional["MultiplierStore"] = None,
    ):
        if multipliers is None:
            from skillxp.multipliers import MultiplierStore
            multipliers = MultiplierStore()
        self.multipliers = multipliers
        self._spaces: Dict[IdentifierSpace, IdentifierRegistry] = {
            IdentifierSpace.MATERIAL: materials,
            IdentifierSpace.ENTITY: entities,
        }
        self._tables: Dict[Category, CategoryTable] = {
            category: CategoryTable.empty(category) for category in CATEGORY_CONFIGS
        }
        self._locks: Dict[Category, threading.Lock] = {
            category: threading.Lock() for category in CATEGORY_CONFIGS
        }

    # =========================================================================
    # Writes
    # =========================================================================

    def rebuild(self, category: Category, entries: Iterable[Tuple[str, Any]]) -> BuildReport:
        """
        Replace one category's table with one built from raw entries.

        No other category is touched.
        """
        cfg = self._config(category)
        registry = self._spaces[cfg.space]

        with self._locks[category]:
            table = CategoryTable.build(category, entries, registry)
            self._tables[category] = table

        logger.info(f"Rebuilt {category.name}: {table.report}")
        return table.report

    def set_table(self, table: CategoryTable) -> None:
        """Swap in a prebuilt table for its category."""
        self._config(table.category)
        with self._locks[table.category]:
            logger.info(f"Changing {table.category.name} XP values...")
            self._tables[table.category] = table

    def build_all(self, entries_by_category: Mapping[Category, Iterable[Tuple[str, Any]]]) -> Dict[Category, BuildReport]:
        """Rebuild every category present in the mapping."""
        return {
            category: self.rebuild(category, entries)
            for category, entries in entries_by_category.items()
        }

    # =========================================================================
    # Reads
    # =========================================================================

    def table(self, category: Category) -> CategoryTable:
        self._config(category)
        return self._tables[category]

    def lookup(self, category: Category, identifier: Union[IdentifierLike, Hashable]) -> Optional[Number]:
        """
        Configured value, or None when the id has no entry.

        COMBAT takes a creature id and SPECIAL_COMBAT a group tag; both are
        read from the multiplier store.
        """
        if category is Category.COMBAT:
            return self.multipliers.get_entity_multiplier(identifier)
        if category is Category.SPECIAL_COMBAT:
            return self.multipliers.get_group_multiplier(identifier)
        return self.table(category).get(identifier)

    def has_value(self, category: Category, identifier: Union[IdentifierLike, Hashable]) -> bool:
        return self.lookup(category, identifier) is not None

    def block_break_xp(self, skill: Skill, identifier: IdentifierLike) -> Optional[int]:
        """
        Block break XP for a skill.

        Raises:
            UnsupportedCategory: the skill never grants block break XP
        """
        return self.lookup(block_break_category(skill), identifier)

    def reports(self) -> Dict[Category, BuildReport]:
        """Last build report per category (categories never built are omitted)."""
        return {
            category: table.report
            for category, table in self._tables.items()
            if table.report is not None
        }

    def _config(self, category: Category) -> CategoryConfig:
        cfg = get_category_config(category)
        if cfg is None:
            raise UnsupportedCategory(category, "table lookup")
        return cfg

    # =========================================================================
    # Typed accessors
    # =========================================================================

    def mining_xp(self, identifier: IdentifierLike) -> Optional[int]:
        return self.lookup(Category.MINING, identifier)

    def herbalism_xp(self, identifier: IdentifierLike) -> Optional[int]:
        return self.lookup(Category.HERBALISM, identifier)

    def woodcutting_xp(self, identifier: IdentifierLike) -> Optional[int]:
        return self.lookup(Category.WOODCUTTING, identifier)

    def excavation_xp(self, identifier: IdentifierLike) -> Optional[int]:
        return self.lookup(Category.EXCAVATION, identifier)

    def furnace_xp(self, identifier: IdentifierLike) -> Optional[int]:
        """XP for converting an item in a furnace."""
        return self.lookup(Category.SMELTING, identifier)

    def taming_xp(self, identifier: IdentifierLike) -> Optional[float]:
        return self.lookup(Category.TAMING, identifier)

    def has_mining_xp(self, identifier: IdentifierLike) -> bool:
        return self.has_value(Category.MINING, identifier)

    def has_herbalism_xp(self, identifier: IdentifierLike) -> bool:
        return self.has_value(Category.HERBALISM, identifier)

    def has_woodcutting_xp(self, identifier: IdentifierLike) -> bool:
        return self.has_value(Category.WOODCUTTING, identifier)

    def has_excavation_xp(self, identifier: IdentifierLike) -> bool:
        return self.has_value(Category.EXCAVATION, identifier)

    def __repr__(self):
        sizes = ", ".join(f"{c.name}={len(t)}" for c, t in self._tables.items())
        return f"LookupRegistry({sizes})"

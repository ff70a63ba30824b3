"""
Experience Engine

Builds the lookup registry and multiplier store from an ExperienceConfig:
1. Register combat multipliers (per kind, then per group)
2. Build the block break, smelting and taming tables
3. Hand out gain trackers using the configured interval
"""

import logging
from typing import Any, Dict, Iterable, Optional, Tuple

from skillxp.config import ExperienceConfig
from skillxp.multipliers import MultiplierStore
from skillxp.resolver.identifiers import IdentifierRegistry
from skillxp.tables.categories import CATEGORY_CONFIGS, Category
from skillxp.tables.registry import LookupRegistry
from skillxp.tables.table import BuildReport
from skillxp.tracker import GainTracker

logger = logging.getLogger(__name__)


class ExperienceEngine:
    """Everything a caller needs to price an action in XP."""

    def __init__(
        self,
        config: ExperienceConfig,
        materials: IdentifierRegistry,
        entities: IdentifierRegistry,
    ):
        self.config = config
        self.entities = entities
        self.multipliers = MultiplierStore(original_global=config.global_multiplier)
        self.registry = LookupRegistry(materials, entities, self.multipliers)
        self.combat_report: Optional[BuildReport] = None
        self.special_combat_report: Optional[BuildReport] = None
        self._load(config)

    def _load(self, config: ExperienceConfig) -> None:
        self.combat_report = self.multipliers.register_entity_multipliers(config.combat, self.entities)
        self.special_combat_report = self.multipliers.register_group_multipliers(config.special_combat)

        # Every table category is rebuilt so a section removed from the
        # config empties its table on reload.
        for category in CATEGORY_CONFIGS:
            self.registry.rebuild(category, config.entries_for(category))

        reports = self.reports()
        diagnostics = sum(r.diagnostic_count for r in reports.values())
        logger.info(f"Experience tables built: {len(reports)} categories, {diagnostics} diagnostics")

    def reload(self, config: ExperienceConfig) -> None:
        """
        Rebuild all tables and multiplier maps from a new config.

        The original global multiplier stays as first configured; a differing
        value in the new config is ignored with a warning.
        """
        if config.global_multiplier != self.multipliers.get_original_global():
            logger.warning(f"Ignoring global multiplier {config.global_multiplier} on reload; "
                           f"original stays {self.multipliers.get_original_global()}")
        self.config = config
        self._load(config)

    def reload_category(self, category: Category, entries: Iterable[Tuple[str, Any]]) -> BuildReport:
        """Rebuild a single table without touching the others."""
        return self.registry.rebuild(category, entries)

    def reports(self) -> Dict[Category, BuildReport]:
        reports = self.registry.reports()
        if self.combat_report is not None:
            reports[Category.COMBAT] = self.combat_report
        if self.special_combat_report is not None:
            reports[Category.SPECIAL_COMBAT] = self.special_combat_report
        return reports

    def new_tracker(self, clock=None) -> GainTracker:
        return GainTracker(interval_minutes=self.config.gain_interval_minutes, clock=clock)

    def apply_global_multiplier(self, xp: float) -> float:
        return xp * self.multipliers.get_global()

    def __repr__(self):
        return f"ExperienceEngine({self.registry!r}, {self.multipliers!r})"

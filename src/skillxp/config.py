"""
Experience Configuration

In-memory form of the experience config. Reading files from disk belongs to
the host; ``from_mapping`` takes a document that has already been parsed
(YAML, JSON, HOCON...) and keeps each section's entries in config order.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple

from skillxp.multipliers import SpecialGroup
from skillxp.tables.categories import Category, has_table
from skillxp.tracker import DEFAULT_INTERVAL_MINUTES

logger = logging.getLogger(__name__)

RawEntries = Tuple[Tuple[str, Any], ...]


@dataclass(frozen=True)
class ExperienceConfig:
    global_multiplier: float = 1.0

    # Lookup-table categories only (block break skills, smelting, taming)
    tables: Mapping[Category, RawEntries] = field(default_factory=lambda: MappingProxyType({}))

    # Raw creature name -> combat multiplier
    combat: RawEntries = ()

    special_combat: Mapping[SpecialGroup, float] = field(default_factory=lambda: MappingProxyType({}))

    # How long a gain counts towards the rolling totals
    gain_interval_minutes: int = DEFAULT_INTERVAL_MINUTES

    def entries_for(self, category: Category) -> RawEntries:
        return self.tables.get(category, ())

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ExperienceConfig:
        """
        Build a config from a parsed document.

        Layout:
            global_multiplier: 1.0
            gain_interval_minutes: 10
            experience:
                mining: {stone: 30, ...}
                smelting: {...}
                taming: {wolf: 250, ...}
            combat: {zombie: 2.0, ...}
            special_combat: {animals: 1.0, ...}

        Unknown sections and group names are logged and skipped. A global
        multiplier that is not a number raises ValueError.
        """
        global_multiplier = data.get("global_multiplier", 1.0)
        if isinstance(global_multiplier, bool) or not isinstance(global_multiplier, (int, float)) \
                or not math.isfinite(global_multiplier):
            raise ValueError(f"global_multiplier must be a number, got {global_multiplier!r}")

        interval = data.get("gain_interval_minutes", DEFAULT_INTERVAL_MINUTES)
        if isinstance(interval, bool) or not isinstance(interval, (int, float)) \
                or not math.isfinite(interval):
            logger.warning(f"Ignoring gain_interval_minutes {interval!r}; using {DEFAULT_INTERVAL_MINUTES}")
            interval = DEFAULT_INTERVAL_MINUTES

        tables: Dict[Category, RawEntries] = {}
        for section, values in (data.get("experience") or {}).items():
            category = Category.from_name(str(section))
            if category is None or not has_table(category):
                logger.warning(f"Unknown experience section '{section}' - skipping")
                continue
            tables[category] = _pairs(values, section)

        special: Dict[SpecialGroup, float] = {}
        for name, value in (data.get("special_combat") or {}).items():
            group = SpecialGroup.from_name(str(name))
            if group is None:
                logger.warning(f"Unknown special combat group '{name}' - skipping")
                continue
            special[group] = value

        return cls(
            global_multiplier=float(global_multiplier),
            tables=MappingProxyType(tables),
            combat=_pairs(data.get("combat") or {}, "combat"),
            special_combat=MappingProxyType(special),
            gain_interval_minutes=interval,
        )


def _pairs(values: Any, section: str) -> RawEntries:
    """Section body as ordered (name, value) pairs."""
    if isinstance(values, Mapping):
        return tuple((str(k), v) for k, v in values.items())
    if isinstance(values, (list, tuple)):
        pairs = []
        for item in values:
            if isinstance(item, (list, tuple)) and len(item) == 2:
                pairs.append((str(item[0]), item[1]))
            else:
                logger.warning(f"Ignoring malformed entry {item!r} in section '{section}'")
        return tuple(pairs)
    logger.warning(f"Section '{section}' is not a mapping - skipping")
    return ()

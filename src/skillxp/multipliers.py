"""
Multiplier Store

Holds the combat XP multipliers (per creature kind and per creature group) and
the global XP multiplier.

The global multiplier has two values: the configured original, fixed when the
store is created, and the current working value, which commands such as an
"xprate" event may override temporarily and later reset.
"""

import logging
import threading
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Hashable, Iterable, Mapping, Optional, Tuple, Union

from skillxp.resolver.identifiers import IdentifierLike, IdentifierRegistry, canonical_key
from skillxp.tables.table import BuildReport, DuplicateDefinition, normalize_entries

logger = logging.getLogger(__name__)


class SpecialGroup(Enum):
    """Coarse creature groupings that carry their own combat multiplier."""

    ANIMALS = "animals"
    SPAWNED = "spawned"
    PETS = "pets"
    PLAYER = "player"

    @classmethod
    def from_name(cls, name: str) -> Optional["SpecialGroup"]:
        """Case-insensitive lookup by value or name, None if unknown."""
        needle = name.strip().lower()
        for group in cls:
            if group.value == needle:
                return group
        return None


GroupEntries = Union[Mapping[Hashable, float], Iterable[Tuple[Hashable, float]]]


class MultiplierStore:
    """
    Combat multipliers plus the global multiplier.

    Every map is replaced whole on registration. Readers take no lock; writers
    to the same value are serialized.
    """

    def __init__(self, original_global: float = 1.0):
        self._original_global = float(original_global)
        self._global = self._original_global
        self._global_lock = threading.Lock()

        self._entity: Mapping[str, float] = MappingProxyType({})
        self._entity_lock = threading.Lock()

        self._groups: Mapping[Hashable, float] = MappingProxyType({})
        self._group_lock = threading.Lock()

    # =========================================================================
    # Global multiplier
    # =========================================================================

    def set_global(self, value: float) -> None:
        """Override the current global multiplier. Not persisted."""
        value = float(value)
        with self._global_lock:
            logger.info(f"Setting the global XP multiplier {self._global} -> {value}")
            self._global = value

    def reset_global(self) -> None:
        """Restore the current global multiplier to the configured original."""
        with self._global_lock:
            logger.info(f"Resetting the global XP multiplier {self._global} -> {self._original_global}")
            self._global = self._original_global

    def get_global(self) -> float:
        return self._global

    def get_original_global(self) -> float:
        """The configured baseline; never changes for the life of the store."""
        return self._original_global

    @property
    def global_overridden(self) -> bool:
        return self._global != self._original_global

    # =========================================================================
    # Per creature kind
    # =========================================================================

    def register_entity_multipliers(
        self,
        entries: Iterable[Tuple[str, Any]],
        entities: IdentifierRegistry,
    ) -> BuildReport:
        """
        Resolve raw creature names and replace the per-kind multiplier map.

        Unmatched names are logged and skipped; a kind defined twice is
        logged as a conflict and the later value is kept.
        """
        logger.info("Registering combat XP values...")
        values, report = normalize_entries(entries, entities, float, "combat")
        with self._entity_lock:
            self._entity = MappingProxyType(values)
        return report

    def get_entity_multiplier(self, kind: IdentifierLike) -> Optional[float]:
        return self._entity.get(canonical_key(kind))

    def has_entity_multiplier(self, kind: IdentifierLike) -> bool:
        return canonical_key(kind) in self._entity

    def entity_multipliers(self) -> Mapping[str, float]:
        return self._entity

    # =========================================================================
    # Per creature group
    # =========================================================================

    def register_group_multipliers(self, entries: GroupEntries) -> BuildReport:
        """
        Install group multipliers as given, replacing the previous map.

        Keys are already well-defined group tags and are not normalized. A key
        repeated in a pair sequence keeps its later value.
        """
        logger.info("Registering special combat XP values...")
        pairs = list(entries.items()) if isinstance(entries, Mapping) else list(entries)
        report = BuildReport(label="special_combat", entries_seen=len(pairs))

        groups: Dict[Hashable, float] = {}
        for key, value in pairs:
            if key in groups:
                logger.warning(f"Group '{_group_label(key)}' has multiple values in the special combat config; "
                               f"using {value!r} over {groups[key]!r}")
                report.duplicates.append(DuplicateDefinition(
                    key=_group_label(key),
                    winner_name=_group_label(key),
                    winner_value=value,
                    loser_name=_group_label(key),
                    loser_value=groups[key],
                ))
            groups[key] = value

        report.entries_stored = len(groups)
        with self._group_lock:
            self._groups = MappingProxyType(groups)
        return report

    def get_group_multiplier(self, group: Hashable) -> Optional[float]:
        return self._groups.get(group)

    def group_multipliers(self) -> Mapping[Hashable, float]:
        return self._groups

    def __repr__(self):
        return (f"MultiplierStore(global={self._global} (original {self._original_global}), "
                f"{len(self._entity)} kinds, {len(self._groups)} groups)")


def _group_label(key: Hashable) -> str:
    return key.value if isinstance(key, SpecialGroup) else str(key)

"""
Category Lookup Tables

A CategoryTable maps canonical ids to experience values for one category.
Tables are built once from raw config entries and never mutated afterwards;
reloading a category builds a fresh table and swaps it in whole.
"""

import logging
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from skillxp.resolver.identifiers import IdentifierLike, IdentifierRegistry, canonical_key
from skillxp.resolver.normalizer import ResolutionStatus, resolve_entries
from skillxp.tables.categories import Category, get_category_config

logger = logging.getLogger(__name__)

Number = Union[int, float]


@dataclass(frozen=True)
class DuplicateDefinition:
    """Two raw entries that collapsed onto the same key. The later one won."""
    key: str
    winner_name: str
    winner_value: Any
    loser_name: str
    loser_value: Any

    def __repr__(self):
        return f"Duplicate({self.key}: {self.winner_name!r} wins over {self.loser_name!r})"


@dataclass(frozen=True)
class InvalidValue:
    """An entry whose name resolved but whose value was unusable."""
    raw_name: str
    value: Any
    reason: str


@dataclass
class BuildReport:
    """Diagnostics gathered while building one table or multiplier map."""
    label: str
    entries_seen: int = 0
    entries_stored: int = 0
    unmatched: List[str] = field(default_factory=list)
    duplicates: List[DuplicateDefinition] = field(default_factory=list)
    invalid: List[InvalidValue] = field(default_factory=list)

    @property
    def diagnostic_count(self) -> int:
        return len(self.unmatched) + len(self.duplicates) + len(self.invalid)

    @property
    def clean(self) -> bool:
        return self.diagnostic_count == 0

    def __repr__(self):
        return (f"BuildReport({self.label}: {self.entries_stored}/{self.entries_seen} stored, "
                f"{len(self.unmatched)} unmatched, {len(self.duplicates)} duplicates, "
                f"{len(self.invalid)} invalid)")


def coerce_value(value: Any, value_type: type) -> Tuple[Optional[Number], str]:
    """
    Validate a raw config value against a table's value type.

    Returns (coerced, "") on success, or (None, reason) when the value must be
    dropped. Values must be finite, non-negative numbers; booleans are not
    numbers here.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None, f"not a number: {value!r}"
    if not math.isfinite(value):
        return None, f"not finite: {value!r}"
    if value < 0:
        return None, f"negative: {value!r}"
    if value_type is int:
        if isinstance(value, float) and not value.is_integer():
            return None, f"expected a whole number: {value!r}"
        return int(value), ""
    return value_type(value), ""


def normalize_entries(
    entries: Iterable[Tuple[str, Any]],
    registry: IdentifierRegistry,
    value_type: type,
    label: str,
) -> Tuple[Dict[str, Number], BuildReport]:
    """
    Resolve raw (name, value) pairs into a canonical key -> value dict.

    Unmatched names and invalid values are dropped; duplicate keys keep the
    later entry. Each problem is logged once and recorded in the report.
    Never raises for bad entries.
    """
    entries = list(entries)
    report = BuildReport(label=label, entries_seen=len(entries))
    values: Dict[str, Number] = {}
    # canonical key -> raw name that currently holds the slot
    holders: Dict[str, Tuple[str, Number]] = {}

    for res in resolve_entries(entries, registry):
        if res.status is ResolutionStatus.NOT_FOUND:
            logger.warning(f"Could not find a match for '{res.raw_name}' among registered {label} names")
            report.unmatched.append(res.raw_name)
            continue

        coerced, reason = coerce_value(res.value, value_type)
        if coerced is None:
            logger.warning(f"Ignoring {label} value for '{res.raw_name}': {reason}")
            report.invalid.append(InvalidValue(res.raw_name, res.value, reason))
            continue

        key = res.identifier.key
        previous = holders.get(key)
        if previous is not None:
            logger.warning(f"'{res.raw_name}' has multiple values in the {label} config "
                           f"({key}); using {coerced!r} over {previous[1]!r}")
            report.duplicates.append(DuplicateDefinition(
                key=key,
                winner_name=res.raw_name,
                winner_value=coerced,
                loser_name=previous[0],
                loser_value=previous[1],
            ))

        values[key] = coerced
        holders[key] = (res.raw_name, coerced)

    report.entries_stored = len(values)
    return values, report


@dataclass(frozen=True, eq=False)
class CategoryTable:
    """
    Immutable canonical id -> value table for one category.

    ``get`` returns None for ids with no configured value, so callers can tell
    "not configured" apart from a configured zero.
    """
    category: Category
    values: Mapping[str, Number] = field(default_factory=lambda: MappingProxyType({}))
    report: Optional[BuildReport] = None

    @classmethod
    def build(
        cls,
        category: Category,
        entries: Iterable[Tuple[str, Any]],
        registry: IdentifierRegistry,
    ) -> "CategoryTable":
        """
        Build a table from ordered raw config entries.

        Args:
            category: Table category (must have a table configuration)
            entries: (raw_name, value) pairs in config order
            registry: Host identifier space for this category

        Returns:
            A new table; diagnostics are available on ``table.report``
        """
        cfg = get_category_config(category)
        if cfg is None:
            raise ValueError(f"{category.name} has no lookup table")

        logger.info(f"Mapping {cfg.description or category.name}...")
        values, report = normalize_entries(entries, registry, cfg.value_type, category.name.lower())
        return cls(category=category, values=MappingProxyType(values), report=report)

    @classmethod
    def empty(cls, category: Category) -> "CategoryTable":
        return cls(category=category)

    def get(self, identifier: IdentifierLike) -> Optional[Number]:
        return self.values.get(canonical_key(identifier))

    def has(self, identifier: IdentifierLike) -> bool:
        return canonical_key(identifier) in self.values

    def __contains__(self, identifier: object) -> bool:
        if not isinstance(identifier, str) and not hasattr(identifier, "key"):
            return False
        return self.has(identifier)

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def __eq__(self, other):
        if not isinstance(other, CategoryTable):
            return NotImplemented
        return self.category == other.category and dict(self.values) == dict(other.values)

    def __hash__(self):
        return hash((self.category, tuple(sorted(self.values.items()))))

    def __repr__(self):
        return f"CategoryTable({self.category.name}: {len(self.values)} entries)"

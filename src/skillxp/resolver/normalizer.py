"""
Identifier Normalizer

Resolves free-text configuration names to canonical identifiers.

Matching is case-insensitive and exact (bare name, namespaced key, or alias).
Nothing here logs or mutates: callers decide how to report the results.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Dict, Iterable, List, Optional, Tuple

from skillxp.resolver.identifiers import CanonicalId, IdentifierRegistry


class ResolutionStatus(Enum):
    """Outcome of resolving one raw configuration entry."""

    # First entry to claim its canonical id
    MATCHED = auto()

    # Same canonical id as an earlier entry; this one wins
    DUPLICATE = auto()

    # No candidate in the registry
    NOT_FOUND = auto()


@dataclass(frozen=True)
class Resolution:
    """A raw (name, value) entry together with what it resolved to."""
    raw_name: str
    value: Any
    identifier: Optional[CanonicalId]
    status: ResolutionStatus
    previous_name: Optional[str] = None  # Set for DUPLICATE
    previous_value: Any = None

    @property
    def resolved(self) -> bool:
        return self.identifier is not None

    def __repr__(self):
        return f"Resolution({self.raw_name!r} -> {self.identifier}, {self.status.name})"


def resolve(raw_name: str, registry: IdentifierRegistry) -> Optional[CanonicalId]:
    """Resolve one raw name. Returns None when nothing matches."""
    return registry.match(raw_name)


def resolve_entries(
    entries: Iterable[Tuple[str, Any]],
    registry: IdentifierRegistry,
) -> List[Resolution]:
    """
    Resolve an ordered sequence of (raw_name, value) pairs.

    Entries that collapse onto an id already produced earlier in the sequence
    are flagged DUPLICATE; the later entry is the one callers keep.

    Args:
        entries: Pairs in configuration order
        registry: Host identifier space to resolve against

    Returns:
        One Resolution per entry, in input order
    """
    results: List[Resolution] = []
    seen: Dict[CanonicalId, Tuple[str, Any]] = {}

    for raw_name, value in entries:
        ident = resolve(raw_name, registry)

        if ident is None:
            results.append(Resolution(raw_name, value, None, ResolutionStatus.NOT_FOUND))
            continue

        previous = seen.get(ident)
        if previous is not None:
            results.append(Resolution(
                raw_name, value, ident, ResolutionStatus.DUPLICATE,
                previous_name=previous[0],
                previous_value=previous[1],
            ))
        else:
            results.append(Resolution(raw_name, value, ident, ResolutionStatus.MATCHED))

        seen[ident] = (raw_name, value)

    return results

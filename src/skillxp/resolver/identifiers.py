"""
Canonical Identifiers

The host game owns the identifier spaces (blocks/items, creature kinds).
skillxp only consumes them as an injected, enumerable set of canonical ids,
each with a namespaced key and optional aliases.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, Iterable, Iterator, Optional, Tuple, Union


DEFAULT_NAMESPACE = "minecraft"


class IdentifierSpace(Enum):
    """Which host registry a category resolves its names against."""

    # Blocks and items
    MATERIAL = auto()

    # Creature kinds
    ENTITY = auto()


@dataclass(frozen=True)
class CanonicalId:
    """A namespaced, globally unique key for a game object."""
    name: str
    namespace: str = DEFAULT_NAMESPACE
    aliases: Tuple[str, ...] = field(default=(), compare=False)

    @property
    def key(self) -> str:
        """Fully qualified form, e.g. ``minecraft:stone``."""
        return f"{self.namespace}:{self.name}"

    def match_forms(self) -> Tuple[str, ...]:
        """Every casefolded spelling a config entry may use for this id."""
        forms = [self.name, self.key, *self.aliases]
        return tuple(dict.fromkeys(f.strip().casefold() for f in forms))

    def __str__(self):
        return self.key


IdentifierLike = Union[CanonicalId, str]


def canonical_key(identifier: IdentifierLike) -> str:
    """Table key for an id. Strings are taken to already be canonical."""
    if isinstance(identifier, CanonicalId):
        return identifier.key
    return identifier


class IdentifierRegistry:
    """
    Snapshot of a host identifier space.

    Indexes every match form of every id so that name resolution is a single
    dict lookup. Two different ids claiming the same form is a broken host
    contract and raises ValueError.
    """

    def __init__(self, identifiers: Iterable[CanonicalId]):
        self._ids: Tuple[CanonicalId, ...] = tuple(dict.fromkeys(identifiers))
        self._index: Dict[str, CanonicalId] = {}

        for ident in self._ids:
            for form in ident.match_forms():
                existing = self._index.get(form)
                if existing is not None and existing != ident:
                    raise ValueError(
                        f"Identifier form '{form}' is claimed by both {existing} and {ident}"
                    )
                self._index[form] = ident

    @classmethod
    def from_names(
        cls,
        names: Iterable[str],
        namespace: str = DEFAULT_NAMESPACE,
    ) -> IdentifierRegistry:
        """Build a registry from bare names, e.g. ``["stone", "dirt"]``."""
        return cls(CanonicalId(name=n.lower(), namespace=namespace) for n in names)

    def match(self, raw_name: str) -> Optional[CanonicalId]:
        """Case-insensitive exact match of a raw name, or None."""
        if not isinstance(raw_name, str):
            return None
        return self._index.get(raw_name.strip().casefold())

    def __contains__(self, identifier: object) -> bool:
        if isinstance(identifier, CanonicalId):
            return identifier in self._ids
        if isinstance(identifier, str):
            return self.match(identifier) is not None
        return False

    def __iter__(self) -> Iterator[CanonicalId]:
        return iter(self._ids)

    def __len__(self) -> int:
        return len(self._ids)

    def __repr__(self):
        return f"IdentifierRegistry({len(self._ids)} ids)"

"""
skillxp.resolver - Identifier resolution

Turns free-text configuration names into canonical identifiers from an
injected host identifier space.
"""

from skillxp.resolver.identifiers import (
    DEFAULT_NAMESPACE,
    CanonicalId,
    IdentifierLike,
    IdentifierRegistry,
    IdentifierSpace,
    canonical_key,
)
from skillxp.resolver.normalizer import (
    Resolution,
    ResolutionStatus,
    resolve,
    resolve_entries,
)

__all__ = [
    # Identifiers
    "DEFAULT_NAMESPACE",
    "CanonicalId",
    "IdentifierLike",
    "IdentifierRegistry",
    "IdentifierSpace",
    "canonical_key",
    # Normalizer
    "Resolution",
    "ResolutionStatus",
    "resolve",
    "resolve_entries",
]

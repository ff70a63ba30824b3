"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from skillxp.resolver import CanonicalId, IdentifierRegistry


# =============================================================================
# IDENTIFIER FIXTURES
# =============================================================================

@pytest.fixture
def materials():
    """Small material registry standing in for the host's block/item space."""
    return IdentifierRegistry([
        CanonicalId("stone"),
        CanonicalId("dirt"),
        CanonicalId("oak_log", aliases=("oak wood",)),
        CanonicalId("wheat"),
        CanonicalId("iron_ore"),
        CanonicalId("gold_ore"),
        CanonicalId("sand"),
        CanonicalId("copper_ore", namespace="moremetals"),
    ])


@pytest.fixture
def entities():
    """Small creature registry."""
    return IdentifierRegistry.from_names(["wolf", "horse", "zombie", "skeleton", "cow"])


# =============================================================================
# CLOCK
# =============================================================================

class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start_ms: int = 1_000_000):
        self.now_ms = start_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int) -> None:
        self.now_ms += ms

    def advance_minutes(self, minutes: float) -> None:
        self.now_ms += int(minutes * 60_000)


@pytest.fixture
def clock():
    return FakeClock()

"""
Tests for identifier resolution.
"""

import pytest

from skillxp.resolver import (
    CanonicalId,
    IdentifierRegistry,
    ResolutionStatus,
    canonical_key,
    resolve,
    resolve_entries,
)


class TestCanonicalId:
    """Test canonical id forms."""

    def test_key_is_namespaced(self):
        """Key joins namespace and name."""
        assert CanonicalId("stone").key == "minecraft:stone"
        assert str(CanonicalId("copper_ore", namespace="moremetals")) == "moremetals:copper_ore"

    def test_aliases_do_not_affect_equality(self):
        """Two ids with the same key are equal regardless of aliases."""
        assert CanonicalId("oak_log", aliases=("oak wood",)) == CanonicalId("oak_log")

    def test_canonical_key_accepts_strings(self):
        """Strings pass through unchanged."""
        assert canonical_key("minecraft:stone") == "minecraft:stone"
        assert canonical_key(CanonicalId("stone")) == "minecraft:stone"


class TestIdentifierRegistry:
    """Test the host identifier snapshot."""

    def test_conflicting_forms_rejected(self):
        """Two ids claiming the same spelling is a host contract violation."""
        with pytest.raises(ValueError):
            IdentifierRegistry([
                CanonicalId("oak_log", aliases=("log",)),
                CanonicalId("birch_log", aliases=("log",)),
            ])

    def test_repeated_id_is_not_a_conflict(self):
        """Listing the same id twice is harmless."""
        registry = IdentifierRegistry([CanonicalId("stone"), CanonicalId("stone")])
        assert len(registry) == 1

    def test_from_names(self):
        """Bare names become namespaced ids."""
        registry = IdentifierRegistry.from_names(["Wolf", "cow"])
        assert CanonicalId("wolf") in registry
        assert "minecraft:cow" in registry

    def test_contains_matches_like_match(self):
        """Membership ignores case and surrounding whitespace, as match does."""
        registry = IdentifierRegistry.from_names(["cow"])
        assert "  minecraft:cow " in registry
        assert "\tCOW" in registry
        assert registry.match("  minecraft:cow ") is not None
        assert "mooshroom" not in registry
        assert 42 not in registry


class TestResolve:
    """Test single-name resolution."""

    @pytest.mark.parametrize("raw", ["stone", "STONE", "Stone", "minecraft:stone", "  stone  "])
    def test_case_insensitive_match(self, materials, raw):
        """Bare and namespaced names match in any case."""
        assert resolve(raw, materials) == CanonicalId("stone")

    def test_alias_match(self, materials):
        """Aliases resolve to their id."""
        assert resolve("Oak Wood", materials) == CanonicalId("oak_log")

    def test_other_namespace(self, materials):
        """Non-default namespaces resolve by bare name or full key."""
        assert resolve("copper_ore", materials).key == "moremetals:copper_ore"
        assert resolve("MoreMetals:Copper_Ore", materials).key == "moremetals:copper_ore"

    @pytest.mark.parametrize("raw", ["ston", "stone_block", "unknownblock", "", "othermod:stone"])
    def test_no_partial_match(self, materials, raw):
        """Anything short of an exact match is NotFound."""
        assert resolve(raw, materials) is None

    def test_non_string_is_not_found(self, materials):
        """Garbage keys never raise."""
        assert resolve(42, materials) is None


class TestResolveEntries:
    """Test resolving ordered config entries."""

    def test_statuses(self, materials):
        """Matched, duplicate and unmatched entries are told apart."""
        results = resolve_entries(
            [("stone", 2), ("STONE", 5), ("unknownblock", 9)],
            materials,
        )
        assert [r.status for r in results] == [
            ResolutionStatus.MATCHED,
            ResolutionStatus.DUPLICATE,
            ResolutionStatus.NOT_FOUND,
        ]

    def test_duplicate_carries_previous(self, materials):
        """A duplicate remembers the entry it displaces."""
        dup = resolve_entries([("stone", 2), ("minecraft:stone", 5)], materials)[1]
        assert dup.previous_name == "stone"
        assert dup.previous_value == 2
        assert dup.value == 5

    def test_preserves_order(self, materials):
        """Results line up with input order."""
        results = resolve_entries([("dirt", 1), ("nope", 2), ("sand", 3)], materials)
        assert [r.raw_name for r in results] == ["dirt", "nope", "sand"]
        assert not results[1].resolved

"""
Tests for the multiplier store.
"""

import logging

import pytest

from skillxp.multipliers import MultiplierStore, SpecialGroup
from skillxp.resolver import CanonicalId


class TestGlobalMultiplier:
    """Test the live-mutable global multiplier."""

    def test_defaults_to_original(self):
        """Current starts at the configured value."""
        store = MultiplierStore(original_global=1.5)
        assert store.get_global() == 1.5
        assert store.get_original_global() == 1.5
        assert not store.global_overridden

    def test_set_then_reset(self):
        """setGlobal(2.0) then resetGlobal() with original 1.0 yields 1.0."""
        store = MultiplierStore(original_global=1.0)
        store.set_global(2.0)
        assert store.get_global() == 2.0
        assert store.global_overridden
        store.reset_global()
        assert store.get_global() == 1.0

    def test_reset_after_many_sets(self):
        """Reset restores the original however many overrides came before."""
        store = MultiplierStore(original_global=1.25)
        for value in (2.0, 3.0, 0.5, 10.0):
            store.set_global(value)
        store.reset_global()
        assert store.get_global() == store.get_original_global() == 1.25

    def test_set_never_changes_original(self):
        """Overrides leave the baseline alone."""
        store = MultiplierStore()
        store.set_global(4)
        assert store.get_original_global() == 1.0

    def test_transitions_logged(self, caplog):
        """Both overrides and resets log old and new values."""
        store = MultiplierStore(original_global=1.0)
        with caplog.at_level(logging.INFO, logger="skillxp"):
            store.set_global(2.0)
            store.reset_global()
        messages = [r.getMessage() for r in caplog.records]
        assert any("1.0 -> 2.0" in m for m in messages)
        assert any("2.0 -> 1.0" in m for m in messages)


class TestEntityMultipliers:
    """Test per-creature combat multipliers."""

    def test_register_and_query(self, entities):
        """Raw names resolve case-insensitively to creature kinds."""
        store = MultiplierStore()
        report = store.register_entity_multipliers([("ZOMBIE", 2.0), ("skeleton", 3)], entities)
        assert report.clean
        assert store.get_entity_multiplier(CanonicalId("zombie")) == 2.0
        assert store.get_entity_multiplier("minecraft:skeleton") == 3.0
        assert store.has_entity_multiplier("minecraft:zombie")

    def test_absent_has_no_default(self, entities):
        """Unregistered kinds are None; the caller picks a default."""
        store = MultiplierStore()
        store.register_entity_multipliers([("zombie", 2.0)], entities)
        assert store.get_entity_multiplier("minecraft:cow") is None
        assert not store.has_entity_multiplier("minecraft:cow")

    def test_unmatched_and_conflicts(self, entities):
        """Unknown names are skipped and repeated kinds keep the later value."""
        store = MultiplierStore()
        report = store.register_entity_multipliers(
            [("zombie", 2.0), ("creeperling", 4.0), ("Zombie", 2.5)],
            entities,
        )
        assert report.unmatched == ["creeperling"]
        assert len(report.duplicates) == 1
        assert store.get_entity_multiplier("minecraft:zombie") == 2.5

    def test_registration_replaces(self, entities):
        """A new registration drops kinds that are no longer configured."""
        store = MultiplierStore()
        store.register_entity_multipliers([("zombie", 2.0)], entities)
        store.register_entity_multipliers([("cow", 1.0)], entities)
        assert store.get_entity_multiplier("minecraft:zombie") is None
        assert dict(store.entity_multipliers()) == {"minecraft:cow": 1.0}


class TestGroupMultipliers:
    """Test per-group combat multipliers."""

    def test_installed_verbatim(self):
        """Group keys are stored as given."""
        store = MultiplierStore()
        store.register_group_multipliers({SpecialGroup.ANIMALS: 1.0, SpecialGroup.SPAWNED: 0.0})
        assert store.get_group_multiplier(SpecialGroup.ANIMALS) == 1.0
        assert store.get_group_multiplier(SpecialGroup.SPAWNED) == 0.0
        assert store.get_group_multiplier(SpecialGroup.PETS) is None

    def test_full_replacement(self):
        """Re-registering discards the previous map."""
        store = MultiplierStore()
        store.register_group_multipliers({SpecialGroup.ANIMALS: 1.0})
        store.register_group_multipliers({SpecialGroup.PETS: 0.5})
        assert store.get_group_multiplier(SpecialGroup.ANIMALS) is None
        assert store.get_group_multiplier(SpecialGroup.PETS) == 0.5

    def test_repeated_pairs(self):
        """Repeated keys in a pair sequence are reported; later wins."""
        store = MultiplierStore()
        report = store.register_group_multipliers([
            (SpecialGroup.ANIMALS, 1.0),
            (SpecialGroup.ANIMALS, 3.0),
        ])
        assert len(report.duplicates) == 1
        assert report.duplicates[0].key == "animals"
        assert store.get_group_multiplier(SpecialGroup.ANIMALS) == 3.0

    @pytest.mark.parametrize("name,expected", [
        ("animals", SpecialGroup.ANIMALS),
        ("Spawned", SpecialGroup.SPAWNED),
        ("PLAYER", SpecialGroup.PLAYER),
        ("villagers", None),
    ])
    def test_group_from_name(self, name, expected):
        assert SpecialGroup.from_name(name) is expected

"""Tests for characteristics, skills and capped resources."""

import pytest

from charforge.game.character.characteristics import (
    CharacteristicKind,
    Characteristics,
    parse_characteristic,
    upgrade_cost,
)
from charforge.game.character.resources import Resource
from charforge.game.character.skills import CharacterSkill, find_skill


class TestParseCharacteristic:
    """Tests for resolving characteristic names."""

    def test_full_names(self):
        """Full names resolve in any case."""
        assert parse_characteristic("Strength") == CharacteristicKind.STRENGTH
        assert parse_characteristic("WILLPOWER") == CharacteristicKind.WILLPOWER

    def test_short_names(self):
        """Three-letter labels resolve."""
        assert parse_characteristic("DEX") == CharacteristicKind.DEXTERITY
        assert parse_characteristic("cha") == CharacteristicKind.CHARISMA

    def test_aliases(self):
        """Alternate spellings from catalog data resolve."""
        assert parse_characteristic("Intelligence") == CharacteristicKind.INTELLECT
        assert parse_characteristic("Agility") == CharacteristicKind.DEXTERITY

    def test_unknown_raises(self):
        """Unknown names raise ValueError."""
        with pytest.raises(ValueError, match="Unknown characteristic"):
            parse_characteristic("Luck")


class TestCharacteristics:
    """Tests for the Characteristics dataclass."""

    def test_defaults_to_level_1(self):
        """All characteristics start at level 1."""
        stats = Characteristics()
        assert all(level == 1 for level in stats.as_dict().values())
        assert len(stats.as_dict()) == 8

    def test_floor_is_validated(self):
        """Levels below 1 are rejected."""
        with pytest.raises(ValueError):
            Characteristics(strength=0)

        stats = Characteristics()
        with pytest.raises(ValueError):
            stats.set_level(CharacteristicKind.MAGIC, 0)

    def test_get_and_set_level(self):
        """Levels are addressed by kind."""
        stats = Characteristics()
        stats.set_level(CharacteristicKind.PERCEPTION, 4)
        assert stats.perception == 4
        assert stats.get_level(CharacteristicKind.PERCEPTION) == 4

    def test_from_dict_accepts_aliases(self):
        """from_dict resolves names and fills missing entries with 1."""
        stats = Characteristics.from_dict({"Agility": 3, "int": 2})
        assert stats.dexterity == 3
        assert stats.intellect == 2
        assert stats.strength == 1

    def test_short_name(self):
        """Every kind has a three-letter label."""
        assert CharacteristicKind.ENDURANCE.short_name == "END"
        assert {kind.short_name for kind in CharacteristicKind} == {
            "STR", "DEX", "END", "PER", "MAG", "WIL", "INT", "CHA",
        }

    def test_upgrade_cost_is_triangular(self):
        """Going from L to L+1 costs L+1."""
        assert upgrade_cost(1) == 2
        assert upgrade_cost(2) == 3
        assert sum(upgrade_cost(level) for level in range(1, 4)) == 2 + 3 + 4


class TestSkills:
    """Tests for known skills."""

    def test_level_must_be_positive(self):
        """A known skill is at least level 1."""
        with pytest.raises(ValueError):
            CharacterSkill("Stealth", 0)

    def test_find_skill(self):
        """Skills are found by exact name."""
        skills = [CharacterSkill("Stealth", 2), CharacterSkill("Art")]
        assert find_skill(skills, "Art").level == 1
        assert find_skill(skills, "art") is None


class TestResource:
    """Tests for capped resources."""

    def test_construction_clamps(self):
        """Current is clamped into [0, max]."""
        assert Resource(10, 5).current == 5
        assert Resource(-3, 5).current == 0

    def test_spend(self):
        """Spending fails without changing anything when short."""
        resource = Resource.full(5)
        assert resource.spend(3)
        assert resource.current == 2
        assert not resource.spend(3)
        assert resource.current == 2

    def test_restore_and_set_current_clamp(self):
        """Restoring and setting never exceed the maximum."""
        resource = Resource(1, 5)
        resource.restore(10)
        assert resource.current == 5
        resource.set_current(-4)
        assert resource.current == 0
        resource.set_current(99)
        assert resource.current == 5

    def test_resize_preserves_spent(self):
        """Changing the maximum keeps the amount already spent."""
        resource = Resource(4, 6)
        resource.resize(12)
        assert (resource.current, resource.max) == (10, 12)

        resource.resize(3)
        assert (resource.current, resource.max) == (1, 3)

    def test_resize_below_spent_empties(self):
        """A maximum below the spent amount leaves nothing."""
        resource = Resource(1, 6)
        resource.resize(2)
        assert resource.current == 0

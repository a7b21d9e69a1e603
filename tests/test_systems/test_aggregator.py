"""Tests for effect aggregation and derived values."""

from charforge.game.character.characteristics import CharacteristicKind, Characteristics
from charforge.game.character.effects import (
    ActiveEffects,
    CharacteristicEffect,
    InitiativeEffect,
    LevelUpGrant,
    Protection,
    ProtectionEffect,
    Resist,
    ResistEffect,
)
from charforge.game.character.items import EquipmentSlot
from charforge.game.character.race import Race
from charforge.game.systems.aggregator import (
    base_protections,
    level_up_grants,
    max_action_points,
    max_hp,
    max_mana,
    recompute_effects,
)

RACE_EFFECTS = (
    ResistEffect(Resist.LIGHTNING, 1),
    ResistEffect(Resist.SPIRIT, 1),
    ProtectionEffect(Protection.RANGE, 10),
)


class TestRecomputeEffects:
    """Tests for collecting effects from their sources."""

    def test_race_and_size_only(self, catalogs):
        """A character with no traits or gear only has race and size effects."""
        effects = recompute_effects(Race.DARK_HALF_ELF, [], {}, [], catalogs)
        assert effects == RACE_EFFECTS

    def test_source_order(self, catalogs):
        """Race, traits, weapons, then gear in slot order."""
        effects = recompute_effects(
            Race.DARK_HALF_ELF,
            ["Pyromancer", "Restless"],
            {
                EquipmentSlot.RING: ["Silver Ring"],
                EquipmentSlot.HEAD: ["Leather Cap"],
            },
            ["Dagger"],
            catalogs,
        )
        assert effects == RACE_EFFECTS + (
            ResistEffect(Resist.FIRE, 2),
            InitiativeEffect(2),
            InitiativeEffect(1),
            ProtectionEffect(Protection.MELEE, 1),
            ResistEffect(Resist.DARK, 1),
        )

    def test_unknown_names_contribute_nothing(self, catalogs):
        """Names missing from the catalogs are skipped."""
        effects = recompute_effects(
            Race.DARK_HALF_ELF,
            ["No Such Trait"],
            {EquipmentSlot.CLOAK: ["Invisible Cloak"]},
            ["Imaginary Sword"],
            catalogs,
        )
        assert effects == RACE_EFFECTS

    def test_deterministic(self, catalogs):
        """The same inputs always give the same effects."""
        args = (
            Race.DARK_HALF_ELF,
            ["Strength of Spirit", "Light Step"],
            {EquipmentSlot.RING: ["Silver Ring", "Ring of Agility"]},
            ["Rapier"],
            catalogs,
        )
        assert recompute_effects(*args) == recompute_effects(*args)


class TestClassDefaults:
    """Tests for protections and per-level grants derived from characteristics."""

    def test_base_protections(self):
        """Protections are 10 plus the governing characteristic; ranged comes from size."""
        stats = Characteristics(dexterity=3, magic=2, endurance=4, willpower=1)
        protections = base_protections(stats, ActiveEffects())
        assert protections == {
            Protection.MELEE: 13,
            Protection.RANGE: 0,
            Protection.MAGIC: 12,
            Protection.BODY: 14,
            Protection.MIND: 11,
        }

    def test_base_protections_use_bonuses(self):
        """Characteristic bonuses raise base protections."""
        effects = ActiveEffects([CharacteristicEffect(CharacteristicKind.DEXTERITY, 2)])
        assert base_protections(Characteristics(), effects)[Protection.MELEE] == 13

    def test_level_up_grants_defaults(self):
        """One ability point, three plus Intellect skill points, two characteristic points."""
        grants = level_up_grants(Characteristics(intellect=2), ActiveEffects())
        assert grants == {
            LevelUpGrant.ABILITY_POINTS: 1,
            LevelUpGrant.SKILL_POINTS: 5,
            LevelUpGrant.CHARACTERISTIC_POINTS: 2,
        }


class TestResourceMaxima:
    """Tests for hit point, mana and action point maxima."""

    def test_hp_from_endurance(self):
        assert max_hp(Characteristics(), ActiveEffects()) == 6
        assert max_hp(Characteristics(endurance=3), ActiveEffects()) == 12

    def test_mana_includes_scaling(self, catalogs):
        """Mana scaling effects add to the willpower-based maximum."""
        effects = ActiveEffects(
            recompute_effects(Race.DARK_HALF_ELF, ["Strength of Spirit"], {}, [], catalogs)
        )
        assert max_mana(Characteristics(willpower=2), effects) == 9 + 2

    def test_action_points_from_race(self, catalogs):
        """Race base action points plus bonuses."""
        assert max_action_points(Race.DARK_HALF_ELF, ActiveEffects()) == 10

        effects = ActiveEffects(
            recompute_effects(
                Race.DARK_HALF_ELF,
                ["Light Step"],
                {EquipmentSlot.ARMOR: ["Chainmail"]},
                [],
                catalogs,
            )
        )
        assert max_action_points(Race.DARK_HALF_ELF, effects) == 10

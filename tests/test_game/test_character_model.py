"""Tests for the Character aggregate."""

from charforge.game.character.characteristics import CharacteristicKind
from charforge.game.character.effects import Protection, Resist
from charforge.game.character.items import EquipmentSlot
from charforge.game.character.skills import CharacterSkill


class TestNewCharacter:
    """Tests for a freshly built level 1 character."""

    def test_resources(self, character):
        """All characteristics at 1 give 6 HP, 6 mana and the race's 10 action points."""
        assert (character.hp.current, character.hp.max) == (6, 6)
        assert (character.mana.current, character.mana.max) == (6, 6)
        assert (character.action_points.current, character.action_points.max) == (10, 10)

    def test_race_resists(self, character):
        """Dark half-elves resist lightning and spirit."""
        resists = character.resists()
        assert resists[Resist.LIGHTNING] == 1
        assert resists[Resist.SPIRIT] == 1
        assert resists[Resist.FIRE] == 0

    def test_protections(self, character):
        """Class defaults plus the ranged protection from size."""
        assert character.protections() == {
            Protection.MELEE: 11,
            Protection.RANGE: 10,
            Protection.MAGIC: 11,
            Protection.BODY: 11,
            Protection.MIND: 11,
        }

    def test_initiative(self, make_character):
        """Initiative is Perception plus bonuses."""
        character = make_character(traits=["Restless"])
        character.stats.perception = 3
        assert character.initiative == 5


class TestRefreshEffects:
    """Tests for recomputing the effect cache."""

    def test_active_effects_is_read_only(self, character):
        """The cache has no setter."""
        try:
            character.active_effects = ()
        except AttributeError:
            pass
        else:
            raise AssertionError("active_effects should not be settable")

    def test_refresh_picks_up_sources(self, character, catalogs):
        """New traits and gear apply after a refresh."""
        character.traits.append("Pyromancer")
        character.equipment[EquipmentSlot.RING] = ["Ring of Agility"]
        character.refresh_effects(catalogs)

        assert character.resists()[Resist.FIRE] == 2
        assert character.effective_level(CharacteristicKind.DEXTERITY) == 2

    def test_endurance_change_preserves_damage(self, character, catalogs):
        """Raising Endurance grows max HP but keeps the damage taken."""
        character.hp.set_current(4)
        character.stats.endurance = 3
        character.refresh_effects(catalogs)

        assert character.hp.max == 12
        assert character.hp.current == 10

    def test_skill_total_includes_bonus(self, make_character, catalogs):
        """Skill totals add gear bonuses, even for unlearned skills."""
        character = make_character(skills=[CharacterSkill("Art", 2)])
        character.equipment[EquipmentSlot.SUIT] = ["Performer's Suit"]
        character.equipment[EquipmentSlot.HEAD] = ["Feathered Hat"]
        character.refresh_effects(catalogs)

        assert character.skill_total("Art") == 3
        assert character.skill_total("Eloquence") == 1
        assert character.skill_total("Lore") == 0

    def test_equipped_gear_is_flattened_in_slot_order(self, make_character):
        """Gear is listed in slot order regardless of insertion order."""
        character = make_character(
            equipment={
                EquipmentSlot.CLOAK: ["Traveler's Cloak"],
                EquipmentSlot.RING: ["Silver Ring", "Ring of Agility"],
                EquipmentSlot.HEAD: ["Leather Cap"],
            }
        )
        assert character.equipped_gear() == [
            (EquipmentSlot.HEAD, "Leather Cap"),
            (EquipmentSlot.RING, "Silver Ring"),
            (EquipmentSlot.RING, "Ring of Agility"),
            (EquipmentSlot.CLOAK, "Traveler's Cloak"),
        ]

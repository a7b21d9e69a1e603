"""Tests for learning traits and abilities."""

from charforge.game.character.effects import Resist
from charforge.game.character.items import EquipmentSlot
from charforge.game.outcome import Outcome
from charforge.game.systems.learning import (
    known_abilities,
    learn_ability,
    learn_trait,
    learnable_abilities,
)


class TestLearnTrait:
    """Tests for spending trait points."""

    def test_learn_trait_applies_effects(self, make_character, catalogs):
        character = make_character(trait_points=1)

        assert learn_trait(character, "Pyromancer", catalogs) == Outcome.APPLIED
        assert character.traits == ["Pyromancer"]
        assert character.trait_points == 0
        assert character.resists()[Resist.FIRE] == 2

    def test_no_points(self, character, catalogs):
        assert learn_trait(character, "Pyromancer", catalogs) == Outcome.INSUFFICIENT_POINTS
        assert character.traits == []

    def test_already_known(self, make_character, catalogs):
        character = make_character(trait_points=1, traits=["Pyromancer"])
        assert learn_trait(character, "Pyromancer", catalogs) == Outcome.INVALID_TARGET
        assert character.trait_points == 1

    def test_unknown_trait(self, make_character, catalogs):
        character = make_character(trait_points=1)
        assert learn_trait(character, "Lucky", catalogs) == Outcome.INVALID_TARGET

    def test_requirement_not_met(self, make_character, catalogs):
        """Acrobat needs Dexterity 4."""
        character = make_character(trait_points=1)
        assert learn_trait(character, "Acrobat", catalogs) == Outcome.PRECONDITION_FAILED
        assert character.trait_points == 1

    def test_requirement_counts_bonuses(self, make_character, catalogs):
        """Gear bonuses count toward trait requirements."""
        character = make_character(trait_points=1)
        character.stats.dexterity = 3
        character.equipment[EquipmentSlot.RING] = ["Ring of Agility"]
        character.refresh_effects(catalogs)

        assert learn_trait(character, "Acrobat", catalogs) == Outcome.APPLIED


class TestLearnAbility:
    """Tests for spending ability points."""

    def test_learn_root_ability(self, make_character, catalogs):
        character = make_character(ability_points=1)

        assert learn_ability(character, "Rebound", catalogs) == Outcome.APPLIED
        assert character.abilities == ["Rebound"]
        assert character.ability_points == 0

    def test_prerequisites_required(self, make_character, catalogs):
        """Narrator needs both Heal word and Rebound."""
        character = make_character(ability_points=2, abilities=["Rebound"])
        assert learn_ability(character, "Narrator", catalogs) == Outcome.PRECONDITION_FAILED

        assert learn_ability(character, "Heal word", catalogs) == Outcome.APPLIED
        assert learn_ability(character, "Narrator", catalogs) == Outcome.APPLIED

    def test_innate_ability_is_not_learnable(self, make_character, catalogs):
        character = make_character(ability_points=1)
        assert learn_ability(character, "Enchanting song", catalogs) == Outcome.INVALID_TARGET

    def test_no_points(self, character, catalogs):
        assert learn_ability(character, "Rebound", catalogs) == Outcome.INSUFFICIENT_POINTS

    def test_already_known(self, make_character, catalogs):
        character = make_character(ability_points=1, abilities=["Rebound"])
        assert learn_ability(character, "Rebound", catalogs) == Outcome.INVALID_TARGET


class TestAbilityQueries:
    """Tests for listing known and learnable abilities."""

    def test_known_includes_innate(self, make_character, catalogs):
        character = make_character(abilities=["Lullaby"])
        names = [ability.name for ability in known_abilities(character, catalogs)]
        assert names == ["Enchanting song", "False chord", "From one eye", "Lullaby"]

    def test_learnable_follows_tree(self, make_character, catalogs):
        """Only roots are learnable at first; learning unlocks their children."""
        character = make_character()
        names = {ability.name for ability in learnable_abilities(character, catalogs)}
        assert names == {"Rebound", "Heal word", "Lullaby"}

        character.abilities.append("Rebound")
        names = {ability.name for ability in learnable_abilities(character, catalogs)}
        assert names == {"Heal word", "Lullaby", "Hidden Strike"}

"""Tests for effect values and the ActiveEffects view."""

import pytest

from charforge.game.character.characteristics import CharacteristicKind, Characteristics
from charforge.game.character.effects import (
    ActionPointsEffect,
    ActiveEffects,
    ArmorEffect,
    CharacteristicEffect,
    InitiativeEffect,
    LevelUpEffect,
    LevelUpGrant,
    ManaEffect,
    Protection,
    ProtectionEffect,
    Resist,
    ResistEffect,
    SkillEffect,
    describe_effect,
    effect_from_dict,
    effect_to_dict,
    effective_level,
)


class TestEffectParsing:
    """Tests for the tagged mapping form of effects."""

    def test_resist(self):
        """Resist effects parse kind and magnitude."""
        effect = effect_from_dict({"type": "resist", "kind": "Fire", "magnitude": 2})
        assert effect == ResistEffect(Resist.FIRE, 2)

    def test_characteristic_alias(self):
        """Characteristic effects accept alias names."""
        effect = effect_from_dict({"type": "characteristic", "kind": "Agility", "magnitude": 1})
        assert effect == CharacteristicEffect(CharacteristicKind.DEXTERITY, 1)

    def test_mana_and_level_up(self):
        """Mana-scaling and on-level-up effects use their own fields."""
        assert effect_from_dict({"type": "mana", "dependent": "wil", "per_point": 1}) == ManaEffect(
            CharacteristicKind.WILLPOWER, 1
        )
        assert effect_from_dict(
            {"type": "on_level_up", "grant": "skill_points", "magnitude": 1}
        ) == LevelUpEffect(LevelUpGrant.SKILL_POINTS, 1)

    def test_magnitude_only_effects(self):
        """Initiative, armor and action point effects only carry a magnitude."""
        assert effect_from_dict({"type": "armor", "magnitude": -1}) == ArmorEffect(-1)
        assert effect_from_dict({"type": "initiative", "magnitude": 2}) == InitiativeEffect(2)

    def test_unknown_type(self):
        """Unknown tags raise ValueError."""
        with pytest.raises(ValueError, match="Unknown effect type"):
            effect_from_dict({"type": "luck", "magnitude": 1})

    def test_missing_field(self):
        """Missing fields raise ValueError naming the field."""
        with pytest.raises(ValueError, match="magnitude"):
            effect_from_dict({"type": "resist", "kind": "fire"})

    def test_to_dict_is_inverse(self):
        """effect_to_dict output parses back to the same effect."""
        effect = ManaEffect(CharacteristicKind.WILLPOWER, 2)
        data = effect_to_dict(effect)
        assert data == {"type": "mana", "dependent": "willpower", "per_point": 2}
        assert effect_from_dict(data) == effect

    def test_describe(self):
        """Effects describe themselves in one line."""
        assert describe_effect(ResistEffect(Resist.FIRE, 2)) == "Fire Resist +2"
        assert describe_effect(ActionPointsEffect(-1)) == "Action Points -1"
        assert describe_effect(CharacteristicEffect(CharacteristicKind.INTELLECT, 1)) == "INT +1"
        assert (
            describe_effect(LevelUpEffect(LevelUpGrant.SKILL_POINTS, 1))
            == "+1 Skill Points per level"
        )


class TestActiveEffects:
    """Tests for aggregate queries over effects."""

    def test_empty_folds_are_zero_filled(self):
        """Every kind is present even with no effects."""
        effects = ActiveEffects()
        assert effects.resists() == dict.fromkeys(Resist, 0)
        assert effects.protections() == dict.fromkeys(Protection, 0)
        assert effects.level_up_grants() == dict.fromkeys(LevelUpGrant, 0)
        assert effects.initiative_bonus() == 0
        assert effects.armor() == 0

    def test_effects_sum_per_bucket(self):
        """Magnitudes add up per kind, including negative ones."""
        effects = ActiveEffects(
            [
                ResistEffect(Resist.FIRE, 2),
                ResistEffect(Resist.FIRE, -1),
                ResistEffect(Resist.ICE, 1),
                ProtectionEffect(Protection.MAGIC, 2),
                ArmorEffect(3),
                ArmorEffect(-1),
                ActionPointsEffect(1),
            ]
        )
        assert effects.resists()[Resist.FIRE] == 1
        assert effects.resists()[Resist.ICE] == 1
        assert effects.protections()[Protection.MAGIC] == 2
        assert effects.armor() == 2
        assert effects.action_points_bonus() == 1

    def test_order_does_not_matter(self):
        """Reversing the sources gives the same totals."""
        source = [
            ResistEffect(Resist.DARK, 1),
            CharacteristicEffect(CharacteristicKind.DEXTERITY, 2),
            SkillEffect("Art", 1),
            CharacteristicEffect(CharacteristicKind.DEXTERITY, -1),
        ]
        forward = ActiveEffects(source)
        backward = ActiveEffects(reversed(source))
        assert forward.resists() == backward.resists()
        assert forward.characteristic_bonuses() == backward.characteristic_bonuses()
        assert forward.skill_bonus("Art") == backward.skill_bonus("Art")

    def test_skill_bonus_matches_name(self):
        """Only effects for the named skill count."""
        effects = ActiveEffects(
            [SkillEffect("Art", 1), SkillEffect("Art", 2), SkillEffect("Lore", 5)]
        )
        assert effects.skill_bonus("Art") == 3
        assert effects.skill_bonus("Stealth") == 0

    def test_effective_level_floors_at_zero(self):
        """A large penalty cannot push an effective level below 0."""
        stats = Characteristics(strength=2)
        effects = ActiveEffects([CharacteristicEffect(CharacteristicKind.STRENGTH, -5)])
        assert effects.effective_level(stats, CharacteristicKind.STRENGTH) == 0
        assert effective_level(stats, CharacteristicKind.STRENGTH) == 2

    def test_mana_bonus_uses_effective_level(self):
        """Mana scaling multiplies the dependent's effective level."""
        stats = Characteristics(willpower=3)
        effects = ActiveEffects(
            [
                ManaEffect(CharacteristicKind.WILLPOWER, 1),
                CharacteristicEffect(CharacteristicKind.WILLPOWER, 1),
            ]
        )
        assert effects.mana_bonus(stats) == 4

    def test_level_up_grants(self):
        """On-level-up effects sum per pool."""
        effects = ActiveEffects(
            [
                LevelUpEffect(LevelUpGrant.SKILL_POINTS, 1),
                LevelUpEffect(LevelUpGrant.SKILL_POINTS, 2),
                LevelUpEffect(LevelUpGrant.ABILITY_POINTS, -1),
            ]
        )
        grants = effects.level_up_grants()
        assert grants[LevelUpGrant.SKILL_POINTS] == 3
        assert grants[LevelUpGrant.ABILITY_POINTS] == -1
        assert grants[LevelUpGrant.CHARACTERISTIC_POINTS] == 0

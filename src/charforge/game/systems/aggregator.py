"""Effect aggregation and derived character values.

``active_effects`` is a pure function of the character's race, known traits,
equipped gear and equipped weapons. Everything else here (class defaults,
resource maxima, initiative) is derived from those effects and the base
characteristics and is never stored independently.
"""

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

from charforge.game.character.characteristics import CharacteristicKind, Characteristics
from charforge.game.character.effects import (
    ActiveEffects,
    Effect,
    LevelUpGrant,
    Protection,
    effective_level,
)
from charforge.game.character.items import SLOT_ORDER, EquipmentSlot
from charforge.game.character.race import Race, race_effects

if TYPE_CHECKING:
    from charforge.game.catalog.definitions import Catalogs
    from charforge.game.character.model import Character

# Base protection = BASE_PROTECTION + effective level of the governing characteristic
BASE_PROTECTION = 10
PROTECTION_CHARACTERISTICS = {
    Protection.MELEE: CharacteristicKind.DEXTERITY,
    Protection.MAGIC: CharacteristicKind.MAGIC,
    Protection.BODY: CharacteristicKind.ENDURANCE,
    Protection.MIND: CharacteristicKind.WILLPOWER,
}

# Points granted on every level gained before effects are added
BASE_ABILITY_POINTS_PER_LEVEL = 1
BASE_SKILL_POINTS_PER_LEVEL = 3
BASE_CHARACTERISTIC_POINTS_PER_LEVEL = 2

# Resource maxima: characteristic * RESOURCE_PER_POINT + RESOURCE_BASE
RESOURCE_PER_POINT = 3
RESOURCE_BASE = 3


def recompute_effects(
    race: Race,
    traits: Iterable[str],
    equipment: Mapping[EquipmentSlot, list[str]],
    weapons: Iterable[str],
    catalogs: "Catalogs",
) -> tuple[Effect, ...]:
    """
    Collect effects from every active source.

    Sources are race, race size, known traits, equipped weapons and equipped
    gear (slot order, then insertion order). Names missing from the catalogs
    contribute nothing.

    Args:
        race: Character race
        traits: Known trait names
        equipment: Equipped gear names by slot
        weapons: Equipped weapon names
        catalogs: Registries to resolve names against

    Returns:
        All effects as a tuple
    """
    effects: list[Effect] = list(race_effects(race))

    for name in traits:
        character_trait = catalogs.get_trait(name)
        if character_trait is not None:
            effects.extend(character_trait.effects)

    for name in weapons:
        weapon = catalogs.get_weapon(name)
        if weapon is not None:
            effects.extend(weapon.effects)

    for slot in sorted(equipment, key=SLOT_ORDER.__getitem__):
        for name in equipment[slot]:
            piece = catalogs.get_equipment(name)
            if piece is not None:
                effects.extend(piece.effects)

    return tuple(effects)


def base_protections(stats: Characteristics, effects: ActiveEffects) -> dict[Protection, int]:
    """Class default protections from effective characteristics (ranged comes from size)."""
    bonuses = effects.characteristic_bonuses()
    totals = dict.fromkeys(Protection, 0)
    for protection, kind in PROTECTION_CHARACTERISTICS.items():
        totals[protection] = BASE_PROTECTION + effective_level(stats, kind, bonuses)
    return totals


def total_protections(stats: Characteristics, effects: ActiveEffects) -> dict[Protection, int]:
    """Class default protections plus every protection effect."""
    base = base_protections(stats, effects)
    from_effects = effects.protections()
    return {kind: base[kind] + from_effects[kind] for kind in Protection}


def level_up_grants(stats: Characteristics, effects: ActiveEffects) -> dict[LevelUpGrant, int]:
    """
    Points granted per level gained.

    Class defaults are one ability point, three skill points plus effective
    Intellect, and two characteristic points; on-level-up effects add to them.
    """
    intellect = effects.effective_level(stats, CharacteristicKind.INTELLECT)
    grants = effects.level_up_grants()
    grants[LevelUpGrant.ABILITY_POINTS] += BASE_ABILITY_POINTS_PER_LEVEL
    grants[LevelUpGrant.SKILL_POINTS] += BASE_SKILL_POINTS_PER_LEVEL + intellect
    grants[LevelUpGrant.CHARACTERISTIC_POINTS] += BASE_CHARACTERISTIC_POINTS_PER_LEVEL
    return grants


def initiative(stats: Characteristics, effects: ActiveEffects) -> int:
    """Perception level plus initiative bonuses."""
    return stats.perception + effects.initiative_bonus()


def max_hp(stats: Characteristics, effects: ActiveEffects) -> int:
    endurance = effects.effective_level(stats, CharacteristicKind.ENDURANCE)
    return endurance * RESOURCE_PER_POINT + RESOURCE_BASE


def max_mana(stats: Characteristics, effects: ActiveEffects) -> int:
    willpower = effects.effective_level(stats, CharacteristicKind.WILLPOWER)
    return max(0, willpower * RESOURCE_PER_POINT + RESOURCE_BASE + effects.mana_bonus(stats))


def max_action_points(race: Race, effects: ActiveEffects) -> int:
    return max(0, race.base_action_points + effects.action_points_bonus())


def refresh_resources(character: "Character") -> None:
    """
    Recompute resource maxima, keeping the amount already spent.

    Called after the effects or the characteristics of a character change.
    """
    effects = character.effects
    character.hp.resize(max_hp(character.stats, effects))
    character.mana.resize(max_mana(character.stats, effects))
    character.action_points.resize(max_action_points(character.race, effects))

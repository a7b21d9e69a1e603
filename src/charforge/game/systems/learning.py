"""Learning traits and abilities.

Traits are gated by a characteristic requirement and cost a trait point.
Abilities cost an ability point and, when acquirable, require every ability
listed in ``can_learn_after`` to be known first. Innate abilities of a class
are always known and never learned.
"""

from collections.abc import Mapping
from typing import TYPE_CHECKING

from charforge.game.catalog.definitions import Ability, Catalogs, TraitCondition
from charforge.game.character.characteristics import CharacteristicKind, Characteristics
from charforge.game.outcome import Outcome

if TYPE_CHECKING:
    from charforge.game.character.model import Character


def trait_requirement_met(
    condition: TraitCondition | None,
    stats: Characteristics,
    bonuses: Mapping[CharacteristicKind, int] | None = None,
) -> bool:
    """Whether effective stats satisfy a trait requirement (no requirement always does)."""
    return condition is None or condition.is_met(stats, bonuses)


def learn_trait(character: "Character", name: str, catalogs: Catalogs) -> Outcome:
    """
    Learn a trait, spending one trait point.

    The effect cache is refreshed so the trait's effects apply immediately.
    """
    if character.trait_points <= 0:
        return Outcome.INSUFFICIENT_POINTS
    if name in character.traits:
        return Outcome.INVALID_TARGET

    character_trait = catalogs.get_trait(name)
    if character_trait is None:
        return Outcome.INVALID_TARGET

    bonuses = character.effects.characteristic_bonuses()
    if not trait_requirement_met(character_trait.condition, character.stats, bonuses):
        return Outcome.PRECONDITION_FAILED

    character.trait_points -= 1
    character.traits.append(name)
    character.refresh_effects(catalogs)
    return Outcome.APPLIED


def prerequisites_known(ability: Ability, known: list[str]) -> bool:
    return all(required in known for required in ability.can_learn_after)


def learn_ability(character: "Character", name: str, catalogs: Catalogs) -> Outcome:
    """Learn an acquirable class ability, spending one ability point."""
    if character.ability_points <= 0:
        return Outcome.INSUFFICIENT_POINTS
    if name in character.abilities:
        return Outcome.INVALID_TARGET

    ability = catalogs.get_acquire(character.character_class, name)
    if ability is None:
        return Outcome.INVALID_TARGET
    if not prerequisites_known(ability, character.abilities):
        return Outcome.PRECONDITION_FAILED

    character.ability_points -= 1
    character.abilities.append(name)
    return Outcome.APPLIED


def known_abilities(character: "Character", catalogs: Catalogs) -> list[Ability]:
    """Innate abilities of the class followed by learned ones."""
    class_abilities = catalogs.class_abilities(character.character_class)
    known = list(class_abilities.innate.values())
    for name in character.abilities:
        ability = class_abilities.acquire.get(name)
        if ability is not None:
            known.append(ability)
    return known


def learnable_abilities(character: "Character", catalogs: Catalogs) -> list[Ability]:
    """Acquirable abilities not yet known whose prerequisites are all known."""
    acquire = catalogs.class_abilities(character.character_class).acquire
    return [
        ability
        for name, ability in acquire.items()
        if name not in character.abilities and prerequisites_known(ability, character.abilities)
    ]

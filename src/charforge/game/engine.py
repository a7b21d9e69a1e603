"""Intent engine for charforge.

Applies player intents to a character one at a time. Each intent is applied
to a copy of the character: an accepted intent yields the updated copy, a
rejected one yields the original object untouched.
"""

import copy
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

import structlog

from charforge.game.catalog.definitions import Catalogs
from charforge.game.character.model import Character
from charforge.game.outcome import Outcome
from charforge.game.systems import allocation, experience, inventory, learning

from .intents import (
    AddExisting,
    ChangeWallet,
    CreateItem,
    Equip,
    GainExperience,
    Intent,
    LearnAbility,
    LearnTrait,
    LevelUp,
    Remove,
    SetResource,
    UnequipGear,
    UnequipWeapon,
    UpgradeCharacteristic,
    UpgradeSkill,
)

logger = structlog.get_logger(__name__)


class IntentRegistryError(ValueError):
    """Raised when an intent type has no handler or is registered twice."""

    pass


@dataclass
class StepResult:
    """What a handler did to the working copy."""

    outcome: Outcome
    spent: int = 0
    follow_ups: tuple[Intent, ...] = ()
    catalogs: Catalogs | None = None


@dataclass(frozen=True)
class IntentResult:
    """Character after an intent, with how the intent was classified."""

    character: Character
    outcome: Outcome
    spent: int = 0
    follow_ups: tuple[Intent, ...] = ()
    over_limit_skills: tuple[str, ...] = ()

    @property
    def accepted(self) -> bool:
        return self.outcome.accepted


Handler = Callable[[Character, Any], StepResult]


class CharacterEngine:
    """
    Registry of intent handlers bound to a set of catalogs.

    Catalogs are replaced (never mutated) when a :class:`CreateItem` intent
    registers a new definition.
    """

    def __init__(self, catalogs: Catalogs) -> None:
        self.catalogs = catalogs
        self._handlers: dict[type, Handler] = {}
        self._register_default_handlers()

    def register(self, intent_type: type, handler: Handler) -> None:
        """
        Register the handler for an intent type.

        Raises:
            IntentRegistryError: If the intent type already has a handler
        """
        if intent_type in self._handlers:
            raise IntentRegistryError(f"Intent '{intent_type.__name__}' already registered")
        self._handlers[intent_type] = handler
        logger.debug("intent_handler_registered", intent=intent_type.__name__)

    def get_handler(self, intent_type: type) -> Handler | None:
        return self._handlers.get(intent_type)

    def _register_default_handlers(self) -> None:
        self.register(UpgradeCharacteristic, self._upgrade_characteristic)
        self.register(UpgradeSkill, self._upgrade_skill)
        self.register(GainExperience, self._gain_experience)
        self.register(LevelUp, self._level_up)
        self.register(LearnTrait, self._learn_trait)
        self.register(LearnAbility, self._learn_ability)
        self.register(Equip, self._equip)
        self.register(Remove, self._remove)
        self.register(UnequipGear, self._unequip_gear)
        self.register(UnequipWeapon, self._unequip_weapon)
        self.register(AddExisting, self._add_existing)
        self.register(CreateItem, self._create_item)
        self.register(ChangeWallet, self._change_wallet)
        self.register(SetResource, self._set_resource)

    def over_limit_skills(self, character: Character) -> list[str]:
        """Skills of ``character`` above the effective level of their characteristic."""
        return allocation.find_over_limit_skills(
            character,
            self.catalogs.class_skills(character.character_class),
            character.effects.characteristic_bonuses(),
        )

    def apply(self, character: Character, intent: Intent) -> IntentResult:
        """
        Apply one intent.

        Args:
            character: Current character (never modified)
            intent: Intent to apply

        Returns:
            IntentResult holding the new character, or ``character`` itself
            if the intent was rejected

        Raises:
            IntentRegistryError: If no handler is registered for the intent
        """
        intent_name = type(intent).__name__
        handler = self._handlers.get(type(intent))
        if handler is None:
            raise IntentRegistryError(f"No handler registered for intent '{intent_name}'")

        working = copy.deepcopy(character)
        step = handler(working, intent)

        if not step.outcome.accepted:
            logger.debug(
                "intent_rejected",
                character_id=str(character.id),
                intent=intent_name,
                outcome=step.outcome.value,
            )
            return IntentResult(character=character, outcome=step.outcome)

        if step.catalogs is not None:
            self.catalogs = step.catalogs

        over_limit = tuple(self.over_limit_skills(working))
        outcome = Outcome.DEGRADED if over_limit else step.outcome

        logger.debug(
            "intent_applied",
            character_id=str(character.id),
            intent=intent_name,
            outcome=outcome.value,
            spent=step.spent,
            follow_ups=len(step.follow_ups),
        )

        return IntentResult(
            character=working,
            outcome=outcome,
            spent=step.spent,
            follow_ups=step.follow_ups,
            over_limit_skills=over_limit,
        )

    def apply_all(
        self, character: Character, intents: Iterable[Intent]
    ) -> tuple[Character, list[IntentResult]]:
        """
        Apply intents strictly in order.

        Follow-up intents run right after the intent that produced them,
        before the next intent in ``intents``.

        Returns:
            Final character and one result per applied intent (follow-ups included)
        """
        results: list[IntentResult] = []
        for intent in intents:
            character = self._apply_with_follow_ups(character, intent, results)
        return character, results

    def _apply_with_follow_ups(
        self, character: Character, intent: Intent, results: list[IntentResult]
    ) -> Character:
        result = self.apply(character, intent)
        results.append(result)
        character = result.character
        for follow_up in result.follow_ups:
            character = self._apply_with_follow_ups(character, follow_up, results)
        return character

    # Handlers

    def _upgrade_characteristic(
        self, character: Character, intent: UpgradeCharacteristic
    ) -> StepResult:
        spent = allocation.upgrade_characteristic(character, intent.kind)
        if spent == 0:
            return StepResult(Outcome.INSUFFICIENT_POINTS)
        character.refresh_effects(self.catalogs)
        return StepResult(Outcome.APPLIED, spent=spent)

    def _upgrade_skill(self, character: Character, intent: UpgradeSkill) -> StepResult:
        definition = self.catalogs.get_skill(character.character_class, intent.name)
        if definition is None:
            return StepResult(Outcome.INVALID_TARGET)

        cap = allocation.skill_cap(
            character.stats, definition.dependency, character.effects.characteristic_bonuses()
        )
        cost = allocation.skill_upgrade_cost(character, intent.name, cap)
        if cost is None:
            return StepResult(Outcome.PRECONDITION_FAILED)

        spent = allocation.upgrade_skill(character, intent.name, cap)
        if spent == 0:
            return StepResult(Outcome.INSUFFICIENT_POINTS)
        return StepResult(Outcome.APPLIED, spent=spent)

    def _gain_experience(self, character: Character, intent: GainExperience) -> StepResult:
        if intent.amount < 0:
            return StepResult(Outcome.INVALID_TARGET)
        levels = experience.apply_experience(character, intent.amount)
        follow_ups: tuple[Intent, ...] = (LevelUp(levels),) if levels else ()
        return StepResult(Outcome.APPLIED, follow_ups=follow_ups)

    def _level_up(self, character: Character, intent: LevelUp) -> StepResult:
        if intent.levels <= 0:
            return StepResult(Outcome.INVALID_TARGET)
        if intent.levels > character.pending_levels:
            return StepResult(Outcome.PRECONDITION_FAILED)
        result = experience.apply_level_up(character, intent.levels)
        logger.info(
            "character_leveled_up",
            character_id=str(character.id),
            character_name=character.name,
            new_level=character.level,
            levels=result.levels,
            ability_points_gained=result.ability_points,
            skill_points_gained=result.skill_points,
            characteristic_points_gained=result.characteristic_points,
            trait_points_gained=result.trait_points,
        )
        return StepResult(Outcome.APPLIED)

    def _learn_trait(self, character: Character, intent: LearnTrait) -> StepResult:
        outcome = learning.learn_trait(character, intent.name, self.catalogs)
        return StepResult(outcome, spent=1 if outcome.accepted else 0)

    def _learn_ability(self, character: Character, intent: LearnAbility) -> StepResult:
        outcome = learning.learn_ability(character, intent.name, self.catalogs)
        return StepResult(outcome, spent=1 if outcome.accepted else 0)

    def _equip(self, character: Character, intent: Equip) -> StepResult:
        return StepResult(inventory.equip(character, intent.index, self.catalogs))

    def _remove(self, character: Character, intent: Remove) -> StepResult:
        return StepResult(inventory.remove(character, intent.index))

    def _unequip_gear(self, character: Character, intent: UnequipGear) -> StepResult:
        return StepResult(inventory.unequip_gear(character, intent.index, self.catalogs))

    def _unequip_weapon(self, character: Character, intent: UnequipWeapon) -> StepResult:
        return StepResult(inventory.unequip_weapon(character, intent.index, self.catalogs))

    def _add_existing(self, character: Character, intent: AddExisting) -> StepResult:
        return StepResult(inventory.add_existing(character, intent.item))

    def _create_item(self, character: Character, intent: CreateItem) -> StepResult:
        catalogs = inventory.create_item(character, intent.definition, self.catalogs)
        return StepResult(Outcome.APPLIED, catalogs=catalogs)

    def _change_wallet(self, character: Character, intent: ChangeWallet) -> StepResult:
        character.wallet.add(intent.delta)
        return StepResult(Outcome.APPLIED)

    def _set_resource(self, character: Character, intent: SetResource) -> StepResult:
        resource = getattr(character, intent.resource.value)
        resource.set_current(intent.value)
        return StepResult(Outcome.APPLIED)

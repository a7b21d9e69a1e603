"""Static catalog definitions: skills, abilities, traits, gear and items.

Catalogs are read-only registries loaded once from data files. A
:class:`Catalogs` value is never mutated; registering a newly created
definition produces a new :class:`Catalogs`.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import StrEnum
from types import MappingProxyType

from charforge.game.character.characteristics import CharacteristicKind, Characteristics
from charforge.game.character.effects import Effect, effective_level
from charforge.game.character.items import EquipmentSlot, ItemKind
from charforge.game.character.race import CharacterClass
from charforge.game.character.skills import SkillDefinition


@dataclass(frozen=True)
class TraitCondition:
    """Requirement that a characteristic reaches a minimum effective level."""

    characteristic: CharacteristicKind
    level: int

    def is_met(
        self,
        stats: Characteristics,
        bonuses: Mapping[CharacteristicKind, int] | None = None,
    ) -> bool:
        return effective_level(stats, self.characteristic, bonuses) >= self.level


@dataclass(frozen=True)
class CharacterTrait:
    """A once-learned perk."""

    name: str
    description: str
    effects: tuple[Effect, ...] = ()
    condition: TraitCondition | None = None


class AbilityType(StrEnum):
    """How an ability behaves in play."""

    STANCE = "stance"
    ATTACK = "attack"
    DEBUFF = "debuff"
    PEACEFUL = "peaceful"
    PASSIVE = "passive"
    TOUCH = "touch"


@dataclass(frozen=True)
class AbilityRequirements:
    """Resource costs and range for using an ability."""

    mp: int | None = None
    hp: int | None = None
    action_points: int | None = None
    range: int | None = None


@dataclass(frozen=True)
class AbilityCheck:
    """Check the user must pass: either a skill or a characteristic."""

    skill: str | None = None
    characteristic: CharacteristicKind | None = None

    def __str__(self) -> str:
        if self.skill is not None:
            return self.skill
        return self.characteristic.short_name if self.characteristic else ""


@dataclass(frozen=True)
class AbilityUpgrade:
    """Extra behaviour unlocked once ``condition`` holds."""

    condition: TraitCondition
    description: str


@dataclass(frozen=True)
class Ability:
    """A class ability, either innate or acquirable."""

    name: str
    description: str
    ability_type: AbilityType
    requirements: AbilityRequirements | None = None
    check: AbilityCheck | None = None
    # Characteristic the target defends with
    enemy_check: CharacteristicKind | None = None
    self_only: bool = False
    additional: AbilityUpgrade | None = None
    learn_screen_position: tuple[int, int] | None = None
    can_learn_after: tuple[str, ...] = ()


@dataclass(frozen=True)
class ClassAbilities:
    """Abilities of one class, split into innate and acquirable."""

    innate: Mapping[str, Ability] = field(default_factory=dict)
    acquire: Mapping[str, Ability] = field(default_factory=dict)


@dataclass(frozen=True)
class Equipment:
    """Wearable gear occupying one slot."""

    name: str
    description: str
    slot: EquipmentSlot
    effects: tuple[Effect, ...] = ()


class WeaponCategory(StrEnum):
    RANGED = "ranged"
    MELEE = "melee"


class RangeKind(StrEnum):
    BOW = "bow"
    FIREARM = "firearm"
    CROSSBOW = "crossbow"


class MeleeKind(StrEnum):
    SLASHING = "slashing"
    CRUSHING = "crushing"
    PIERCING = "piercing"
    POLEARM = "polearm"
    CHOPPING = "chopping"


class WeaponGrip(StrEnum):
    ONE_HANDED = "one_handed"
    TWO_HANDED = "two_handed"
    HAND_AND_A_HALF = "hand_and_a_half"


@dataclass(frozen=True)
class Weapon:
    """A weapon that can be equipped in one of the weapon slots."""

    name: str
    damage: str
    attack: int
    category: WeaponCategory
    subtype: RangeKind | MeleeKind
    grip: WeaponGrip
    range: int
    effects: tuple[Effect, ...] = ()
    condition: str | None = None

    def __post_init__(self) -> None:
        """Validate that the subtype belongs to the category."""
        expected = RangeKind if self.category == WeaponCategory.RANGED else MeleeKind
        if not isinstance(self.subtype, expected):
            raise ValueError(
                f"Weapon '{self.name}' has subtype {self.subtype!r} "
                f"which is not a {self.category.value} weapon kind"
            )


@dataclass(frozen=True)
class Item:
    """A generic carried item without effects."""

    name: str
    description: str


Definition = Weapon | Equipment | Item


def definition_kind(definition: Definition) -> ItemKind:
    """Inventory kind matching a gear or item definition."""
    if isinstance(definition, Weapon):
        return ItemKind.WEAPON
    if isinstance(definition, Equipment):
        return ItemKind.EQUIPMENT
    return ItemKind.ITEM


def _frozen(mapping: Mapping) -> Mapping:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class Catalogs:
    """All registries the rules engine reads from."""

    skills: Mapping[CharacterClass, Mapping[str, SkillDefinition]] = field(default_factory=dict)
    abilities: Mapping[CharacterClass, ClassAbilities] = field(default_factory=dict)
    traits: Mapping[str, CharacterTrait] = field(default_factory=dict)
    equipment: Mapping[str, Equipment] = field(default_factory=dict)
    weapons: Mapping[str, Weapon] = field(default_factory=dict)
    items: Mapping[str, Item] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name in ("skills", "abilities", "traits", "equipment", "weapons", "items"):
            object.__setattr__(self, name, _frozen(getattr(self, name)))

    def class_skills(self, character_class: CharacterClass) -> Mapping[str, SkillDefinition]:
        return self.skills.get(character_class, {})

    def get_skill(self, character_class: CharacterClass, name: str) -> SkillDefinition | None:
        return self.class_skills(character_class).get(name)

    def class_abilities(self, character_class: CharacterClass) -> ClassAbilities:
        return self.abilities.get(character_class, ClassAbilities())

    def get_innate(self, character_class: CharacterClass, name: str) -> Ability | None:
        return self.class_abilities(character_class).innate.get(name)

    def get_acquire(self, character_class: CharacterClass, name: str) -> Ability | None:
        return self.class_abilities(character_class).acquire.get(name)

    def get_trait(self, name: str) -> CharacterTrait | None:
        return self.traits.get(name)

    def get_equipment(self, name: str) -> Equipment | None:
        return self.equipment.get(name)

    def get_weapon(self, name: str) -> Weapon | None:
        return self.weapons.get(name)

    def get_item(self, name: str) -> Item | None:
        return self.items.get(name)

    def with_definition(self, definition: Definition) -> "Catalogs":
        """
        Return new catalogs that also contain ``definition``.

        A definition with an existing name replaces the previous entry.
        """
        if isinstance(definition, Weapon):
            return replace(self, weapons={**self.weapons, definition.name: definition})
        if isinstance(definition, Equipment):
            return replace(self, equipment={**self.equipment, definition.name: definition})
        return replace(self, items={**self.items, definition.name: definition})

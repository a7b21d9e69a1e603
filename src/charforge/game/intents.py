"""Player intents: the closed set of actions the engine applies to a character."""

from dataclasses import dataclass

from charforge.game.catalog.definitions import Definition
from charforge.game.character.characteristics import CharacteristicKind
from charforge.game.character.items import InventoryItem
from charforge.game.character.resources import ResourceKind


@dataclass(frozen=True)
class UpgradeCharacteristic:
    kind: CharacteristicKind


@dataclass(frozen=True)
class UpgradeSkill:
    name: str


@dataclass(frozen=True)
class GainExperience:
    amount: int


@dataclass(frozen=True)
class LevelUp:
    """
    Grant the points for ``levels`` levels the character has just reached.

    Queued by ``GainExperience``. Levels beyond the character's
    ``pending_levels`` are refused.
    """

    levels: int


@dataclass(frozen=True)
class LearnTrait:
    name: str


@dataclass(frozen=True)
class LearnAbility:
    name: str


@dataclass(frozen=True)
class Equip:
    """Equip the inventory entry at ``index``."""

    index: int


@dataclass(frozen=True)
class Remove:
    """Delete the inventory entry at ``index``."""

    index: int


@dataclass(frozen=True)
class UnequipGear:
    """Unequip gear by its position in the flattened equipment list."""

    index: int


@dataclass(frozen=True)
class UnequipWeapon:
    index: int


@dataclass(frozen=True)
class AddExisting:
    item: InventoryItem


@dataclass(frozen=True)
class CreateItem:
    definition: Definition


@dataclass(frozen=True)
class ChangeWallet:
    """Add a signed amount of copper."""

    delta: int


@dataclass(frozen=True)
class SetResource:
    resource: ResourceKind
    value: int


Intent = (
    UpgradeCharacteristic
    | UpgradeSkill
    | GainExperience
    | LevelUp
    | LearnTrait
    | LearnAbility
    | Equip
    | Remove
    | UnequipGear
    | UnequipWeapon
    | AddExisting
    | CreateItem
    | ChangeWallet
    | SetResource
)

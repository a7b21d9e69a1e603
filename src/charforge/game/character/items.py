"""Inventory references and equipment slots."""

from dataclasses import dataclass
from enum import StrEnum


class ItemKind(StrEnum):
    """Which catalog an inventory entry refers to."""

    WEAPON = "weapon"
    EQUIPMENT = "equipment"
    ITEM = "item"


class EquipmentSlot(StrEnum):
    """Equipment slots on a character's body, in display order."""

    HEAD = "head"
    PANTS = "pants"
    GLOVES = "gloves"
    ARMOR = "armor"
    SUIT = "suit"
    RING = "ring"
    NECKLACE = "necklace"
    CLOAK = "cloak"
    ANY = "any"

    @property
    def stacking(self) -> bool:
        """Whether several items can occupy the slot at once."""
        return self in STACKING_SLOTS


STACKING_SLOTS = frozenset({EquipmentSlot.RING})

SLOT_ORDER = {slot: index for index, slot in enumerate(EquipmentSlot)}

MAX_EQUIPPED_WEAPONS = 3


@dataclass(frozen=True)
class InventoryItem:
    """An entry in a character's inventory: a catalog name plus its kind."""

    kind: ItemKind
    name: str

    @classmethod
    def weapon(cls, name: str) -> "InventoryItem":
        return cls(ItemKind.WEAPON, name)

    @classmethod
    def equipment(cls, name: str) -> "InventoryItem":
        return cls(ItemKind.EQUIPMENT, name)

    @classmethod
    def item(cls, name: str) -> "InventoryItem":
        return cls(ItemKind.ITEM, name)

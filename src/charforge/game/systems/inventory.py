"""Inventory and equipment management.

All operations address inventory entries, equipped weapons and equipped gear
by position. A position that no longer exists is rejected without changing
anything, so a queue of intents built against an older snapshot never fails
halfway through.
"""

from collections.abc import Mapping
from typing import TYPE_CHECKING

from charforge.game.catalog.definitions import Catalogs, Definition, definition_kind
from charforge.game.character.items import (
    MAX_EQUIPPED_WEAPONS,
    SLOT_ORDER,
    EquipmentSlot,
    InventoryItem,
    ItemKind,
)
from charforge.game.outcome import Outcome

if TYPE_CHECKING:
    from charforge.game.character.model import Character


def locate_gear(
    equipment: Mapping[EquipmentSlot, list[str]], flat_index: int
) -> tuple[EquipmentSlot, int] | None:
    """
    Find the slot and position behind a flattened gear index.

    Equipped gear is numbered across all slots in slot order, then in
    insertion order within a slot.

    Returns:
        ``(slot, index within slot)`` or None if out of range
    """
    if flat_index < 0:
        return None

    remaining = flat_index
    for slot in sorted(equipment, key=SLOT_ORDER.__getitem__):
        names = equipment[slot]
        if remaining < len(names):
            return slot, remaining
        remaining -= len(names)
    return None


def equip(character: "Character", index: int, catalogs: Catalogs) -> Outcome:
    """
    Equip the inventory entry at ``index``.

    Weapons go to the weapon list while it has room. Ring-slot gear joins the
    rings already worn; gear for any other slot sends the current occupant to
    the end of the inventory. Generic items cannot be equipped.
    """
    if not 0 <= index < len(character.inventory):
        return Outcome.INVALID_TARGET

    entry = character.inventory[index]

    if entry.kind == ItemKind.WEAPON:
        if len(character.equipped_weapons) >= MAX_EQUIPPED_WEAPONS:
            return Outcome.INVALID_TARGET
        del character.inventory[index]
        character.equipped_weapons.append(entry.name)
        character.refresh_effects(catalogs)
        return Outcome.APPLIED

    if entry.kind != ItemKind.EQUIPMENT:
        return Outcome.INVALID_TARGET

    piece = catalogs.get_equipment(entry.name)
    if piece is None:
        return Outcome.INVALID_TARGET

    del character.inventory[index]
    if piece.slot.stacking:
        character.equipment.setdefault(piece.slot, []).append(piece.name)
    else:
        for displaced in character.equipment.get(piece.slot, []):
            character.inventory.append(InventoryItem.equipment(displaced))
        character.equipment[piece.slot] = [piece.name]

    character.refresh_effects(catalogs)
    return Outcome.APPLIED


def remove(character: "Character", index: int) -> Outcome:
    """Delete the inventory entry at ``index``."""
    if not 0 <= index < len(character.inventory):
        return Outcome.INVALID_TARGET
    del character.inventory[index]
    return Outcome.APPLIED


def unequip_gear(character: "Character", flat_index: int, catalogs: Catalogs) -> Outcome:
    """Move one piece of equipped gear back to the inventory."""
    located = locate_gear(character.equipment, flat_index)
    if located is None:
        return Outcome.INVALID_TARGET

    slot, position = located
    name = character.equipment[slot].pop(position)
    if not character.equipment[slot]:
        del character.equipment[slot]

    character.inventory.append(InventoryItem.equipment(name))
    character.refresh_effects(catalogs)
    return Outcome.APPLIED


def unequip_weapon(character: "Character", index: int, catalogs: Catalogs) -> Outcome:
    """Move an equipped weapon back to the inventory."""
    if not 0 <= index < len(character.equipped_weapons):
        return Outcome.INVALID_TARGET

    name = character.equipped_weapons.pop(index)
    character.inventory.append(InventoryItem.weapon(name))
    character.refresh_effects(catalogs)
    return Outcome.APPLIED


def add_existing(character: "Character", item: InventoryItem) -> Outcome:
    """Append an already known item to the inventory."""
    character.inventory.append(item)
    return Outcome.APPLIED


def create_item(character: "Character", definition: Definition, catalogs: Catalogs) -> Catalogs:
    """
    Register a newly created definition and put it in the inventory.

    A definition may replace one with the same name, so the effect cache is
    rebuilt against the new catalogs.

    Args:
        character: Character receiving the item
        definition: New weapon, equipment or item definition
        catalogs: Current catalogs (left unchanged)

    Returns:
        Catalogs that also contain ``definition``
    """
    updated = catalogs.with_definition(definition)
    character.inventory.append(InventoryItem(definition_kind(definition), definition.name))
    character.refresh_effects(updated)
    return updated

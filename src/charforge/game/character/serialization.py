"""JSON-compatible documents for whole characters.

The effect cache is not stored: :func:`character_from_dict` recomputes it
from the loaded sources against the given catalogs.
"""

from typing import TYPE_CHECKING, Any
from uuid import UUID

from charforge.game.systems.economy import Wallet
from charforge.game.systems.experience import xp_to_next_level

from .characteristics import Characteristics
from .items import MAX_EQUIPPED_WEAPONS, EquipmentSlot, InventoryItem, ItemKind
from .model import Character
from .race import CharacterClass, Race
from .resources import Resource, ResourceKind
from .skills import CharacterSkill

if TYPE_CHECKING:
    from charforge.game.catalog.definitions import Catalogs

FORMAT_VERSION = 1


def character_to_dict(character: Character) -> dict[str, Any]:
    """Serialize the full aggregate (without the effect cache)."""
    return {
        "format_version": FORMAT_VERSION,
        "id": str(character.id),
        "name": character.name,
        "race": character.race.value,
        "character_class": character.character_class.value,
        "level": character.level,
        "experience": character.experience,
        "pending_levels": character.pending_levels,
        "resources": {
            kind.value: {
                "current": getattr(character, kind.value).current,
                "max": getattr(character, kind.value).max,
            }
            for kind in ResourceKind
        },
        "stats": character.stats.as_dict(),
        "characteristic_points": character.characteristic_points,
        "skill_points": character.skill_points,
        "skills": [{"name": s.name, "level": s.level} for s in character.skills],
        "ability_points": character.ability_points,
        "trait_points": character.trait_points,
        "traits": list(character.traits),
        "abilities": list(character.abilities),
        "wallet": character.wallet.total,
        "equipment": {
            slot.value: list(names) for slot, names in character.equipment.items() if names
        },
        "equipped_weapons": list(character.equipped_weapons),
        "inventory": [{"kind": i.kind.value, "name": i.name} for i in character.inventory],
    }


def character_from_dict(data: dict[str, Any], catalogs: "Catalogs") -> Character:
    """
    Rebuild a character from :func:`character_to_dict` output.

    Resource values are restored as saved after the effect cache is rebuilt.

    Raises:
        ValueError: If the document is malformed
    """
    if not isinstance(data, dict):
        raise ValueError("Character document must be a mapping")

    version = data.get("format_version", FORMAT_VERSION)
    if version != FORMAT_VERSION:
        raise ValueError(f"Unsupported character format version: {version}")

    try:
        character = Character(
            id=UUID(str(data["id"])),
            name=str(data["name"]),
            race=Race(data["race"]),
            character_class=CharacterClass(data["character_class"]),
            level=int(data.get("level", 1)),
            experience=int(data.get("experience", 0)),
            pending_levels=int(data.get("pending_levels", 0)),
            stats=Characteristics.from_dict(data.get("stats", {})),
            characteristic_points=int(data.get("characteristic_points", 0)),
            skill_points=int(data.get("skill_points", 0)),
            skills=[
                CharacterSkill(str(s["name"]), int(s["level"])) for s in data.get("skills", [])
            ],
            ability_points=int(data.get("ability_points", 0)),
            trait_points=int(data.get("trait_points", 0)),
            traits=[str(t) for t in data.get("traits", [])],
            abilities=[str(a) for a in data.get("abilities", [])],
            wallet=Wallet(int(data.get("wallet", 0))),
            equipment={
                EquipmentSlot(slot): [str(n) for n in names]
                for slot, names in data.get("equipment", {}).items()
                if names
            },
            equipped_weapons=[str(w) for w in data.get("equipped_weapons", [])],
            inventory=[
                InventoryItem(ItemKind(i["kind"]), str(i["name"]))
                for i in data.get("inventory", [])
            ],
        )
        resources = data.get("resources", {})
        saved = {
            kind: Resource(int(resources[kind.value]["current"]), int(resources[kind.value]["max"]))
            for kind in ResourceKind
            if kind.value in resources
        }
    except KeyError as e:
        raise ValueError(f"Character document missing field {e.args[0]!r}") from e
    except (TypeError, AttributeError) as e:
        raise ValueError(f"Character document is malformed: {e}") from e

    _check_consistency(character)

    character.refresh_effects(catalogs)
    for kind, resource in saved.items():
        getattr(character, kind.value).set_current(resource.current)
    return character


def _check_consistency(character: Character) -> None:
    """Reject documents no sequence of accepted intents could have produced."""
    if character.level < 1 or character.experience < 0:
        raise ValueError("Character level must be >= 1 and experience >= 0")
    if character.experience >= xp_to_next_level(character.level):
        raise ValueError(
            f"Character experience {character.experience} reaches the next level "
            f"threshold {xp_to_next_level(character.level)}"
        )
    if not 0 <= character.pending_levels < character.level:
        raise ValueError(f"Invalid pending levels: {character.pending_levels}")

    pools = {
        "characteristic_points": character.characteristic_points,
        "skill_points": character.skill_points,
        "ability_points": character.ability_points,
        "trait_points": character.trait_points,
    }
    negative = [name for name, value in pools.items() if value < 0]
    if negative:
        raise ValueError(f"Negative point pools: {', '.join(negative)}")

    skill_names = [skill.name for skill in character.skills]
    if len(set(skill_names)) != len(skill_names):
        raise ValueError("Character document lists a skill more than once")

    if len(character.equipped_weapons) > MAX_EQUIPPED_WEAPONS:
        raise ValueError(
            f"At most {MAX_EQUIPPED_WEAPONS} weapons can be equipped, "
            f"got {len(character.equipped_weapons)}"
        )
    for slot, names in character.equipment.items():
        if len(names) > 1 and not slot.stacking:
            raise ValueError(f"Slot '{slot.value}' holds {len(names)} items")

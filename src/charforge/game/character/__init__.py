"""Character value types: characteristics, skills, effects, resources and gear references."""

from .characteristics import (
    CHARACTERISTIC_SHORT_NAMES,
    CharacteristicKind,
    Characteristics,
    parse_characteristic,
    upgrade_cost,
)
from .effects import (
    ActiveEffects,
    Effect,
    LevelUpGrant,
    Protection,
    Resist,
    effect_from_dict,
    effect_to_dict,
)
from .items import EquipmentSlot, InventoryItem, ItemKind
from .race import CharacterClass, Race, Size
from .resources import Resource, ResourceKind
from .skills import CharacterSkill, SkillDefinition

__all__ = [
    "CHARACTERISTIC_SHORT_NAMES",
    "ActiveEffects",
    "CharacterClass",
    "CharacterSkill",
    "CharacteristicKind",
    "Characteristics",
    "Effect",
    "EquipmentSlot",
    "InventoryItem",
    "ItemKind",
    "LevelUpGrant",
    "Protection",
    "Race",
    "Resist",
    "Resource",
    "ResourceKind",
    "Size",
    "SkillDefinition",
    "effect_from_dict",
    "effect_to_dict",
    "parse_characteristic",
    "upgrade_cost",
]

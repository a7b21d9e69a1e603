"""Read-only catalogs of skills, abilities, traits and gear."""

from .definitions import (
    Ability,
    AbilityCheck,
    AbilityRequirements,
    AbilityType,
    AbilityUpgrade,
    Catalogs,
    CharacterTrait,
    ClassAbilities,
    Definition,
    Equipment,
    Item,
    MeleeKind,
    RangeKind,
    TraitCondition,
    Weapon,
    WeaponCategory,
    WeaponGrip,
    definition_kind,
)
from .loader import CatalogLoadError, CatalogValidationError, load_catalogs

__all__ = [
    "Ability",
    "AbilityCheck",
    "AbilityRequirements",
    "AbilityType",
    "AbilityUpgrade",
    "Catalogs",
    "CatalogLoadError",
    "CatalogValidationError",
    "CharacterTrait",
    "ClassAbilities",
    "Definition",
    "Equipment",
    "Item",
    "MeleeKind",
    "RangeKind",
    "TraitCondition",
    "Weapon",
    "WeaponCategory",
    "WeaponGrip",
    "definition_kind",
    "load_catalogs",
]

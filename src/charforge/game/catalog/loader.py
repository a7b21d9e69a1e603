"""
Catalog loader module for charforge.

Handles loading skill, ability, trait, equipment, weapon and item definitions
from YAML files and validating them into :class:`Catalogs`.
"""

from collections.abc import Callable
from pathlib import Path
from types import MappingProxyType
from typing import Any, TypeVar

import structlog
import yaml

from charforge.config import get_settings
from charforge.game.character.characteristics import parse_characteristic
from charforge.game.character.effects import Effect, effect_from_dict
from charforge.game.character.items import EquipmentSlot
from charforge.game.character.race import CharacterClass
from charforge.game.character.skills import SkillDefinition

from .definitions import (
    Ability,
    AbilityCheck,
    AbilityRequirements,
    AbilityType,
    AbilityUpgrade,
    Catalogs,
    CharacterTrait,
    ClassAbilities,
    Equipment,
    Item,
    MeleeKind,
    RangeKind,
    TraitCondition,
    Weapon,
    WeaponCategory,
    WeaponGrip,
)

logger = structlog.get_logger(__name__)

T = TypeVar("T")

SKILLS_FILE = "skills.yaml"
ABILITIES_FILE = "abilities.yaml"
TRAITS_FILE = "traits.yaml"
EQUIPMENT_FILE = "equipment.yaml"
WEAPONS_FILE = "weapons.yaml"
ITEMS_FILE = "items.yaml"


class CatalogLoadError(Exception):
    """Raised when a catalog file cannot be read or parsed."""

    pass


class CatalogValidationError(Exception):
    """Raised when a catalog entry is missing fields or has invalid values."""

    pass


def load_yaml_file(file_path: Path) -> Any:
    """
    Load and parse a YAML file.

    Args:
        file_path: Path to the YAML file

    Returns:
        The parsed document

    Raises:
        CatalogLoadError: If the file cannot be read, parsed, or is empty
    """
    try:
        with open(file_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise CatalogLoadError(f"File not found: {file_path}") from e
    except yaml.YAMLError as e:
        raise CatalogLoadError(f"YAML parsing error in {file_path}: {e}") from e
    except OSError as e:
        raise CatalogLoadError(f"Error loading {file_path}: {e}") from e

    if not data:
        raise CatalogLoadError(f"Empty YAML file: {file_path}")

    return data


def _require(entry: dict[str, Any], fields: list[str], label: str, source: Path) -> None:
    """Raise if any of ``fields`` is missing from ``entry``."""
    for name in fields:
        if name not in entry:
            raise CatalogValidationError(f"{label} in {source} missing required field: {name}")


def _require_mapping(value: Any, label: str, source: Path) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise CatalogValidationError(f"{label} in {source} must be a mapping")
    return value


def _convert(convert: Callable[[], T], label: str, source: Path) -> T:
    """Run a conversion, turning value errors into validation errors."""
    try:
        return convert()
    except (ValueError, TypeError, KeyError, AttributeError) as e:
        raise CatalogValidationError(f"{label} in {source} is invalid: {e}") from e


def _parse_effects(raw: Any, label: str, source: Path) -> tuple[Effect, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise CatalogValidationError(f"{label} in {source} has invalid effects (must be a list)")
    return tuple(_convert(lambda e=e: effect_from_dict(e), label, source) for e in raw)


def _parse_condition(raw: Any, label: str, source: Path) -> TraitCondition | None:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise CatalogValidationError(f"{label} in {source} has invalid condition")
    _require(raw, ["characteristic", "level"], f"{label} condition", source)
    return _convert(
        lambda: TraitCondition(parse_characteristic(raw["characteristic"]), int(raw["level"])),
        label,
        source,
    )


def _parse_class(raw: str, source: Path) -> CharacterClass:
    return _convert(lambda: CharacterClass(str(raw).lower()), f"Class '{raw}'", source)


def parse_skills(data: Any, source: Path) -> dict[CharacterClass, Any]:
    """
    Parse the skills document: ``class -> {skill name: {dependency: ...}}``.

    Raises:
        CatalogValidationError: If an entry is invalid
    """
    if not isinstance(data, dict):
        raise CatalogValidationError(f"Skills in {source} must be a mapping of classes")

    skills: dict[CharacterClass, Any] = {}
    for class_name, entries in data.items():
        character_class = _parse_class(class_name, source)
        class_skills: dict[str, SkillDefinition] = {}
        entries = _require_mapping(entries or {}, f"Skills of '{class_name}'", source)
        for skill_name, entry in entries.items():
            label = f"Skill '{skill_name}'"
            _require_mapping(entry, label, source)
            _require(entry, ["dependency"], label, source)
            dependency = _convert(lambda: parse_characteristic(entry["dependency"]), label, source)
            class_skills[skill_name] = SkillDefinition(name=skill_name, dependency=dependency)
        skills[character_class] = MappingProxyType(class_skills)

    return skills


def _parse_check(raw: Any, label: str, source: Path) -> AbilityCheck | None:
    if raw is None:
        return None
    if not isinstance(raw, dict) or len(raw) != 1:
        raise CatalogValidationError(
            f"{label} in {source} has invalid check (use 'skill' or 'characteristic')"
        )
    if "skill" in raw:
        return AbilityCheck(skill=str(raw["skill"]))
    if "characteristic" in raw:
        kind = _convert(lambda: parse_characteristic(raw["characteristic"]), label, source)
        return AbilityCheck(characteristic=kind)
    raise CatalogValidationError(f"{label} in {source} has unknown check {list(raw)[0]!r}")


def _parse_ability(name: str, entry: dict[str, Any], source: Path) -> Ability:
    label = f"Ability '{name}'"
    _require_mapping(entry, label, source)
    _require(entry, ["description", "type"], label, source)

    requirements = None
    if entry.get("requirements") is not None:
        raw = entry["requirements"]
        requirements = _convert(
            lambda: AbilityRequirements(
                mp=raw.get("mp"),
                hp=raw.get("hp"),
                action_points=raw.get("action_points"),
                range=raw.get("range"),
            ),
            label,
            source,
        )

    additional = None
    if entry.get("additional") is not None:
        raw = _require_mapping(entry["additional"], f"{label} additional", source)
        _require(raw, ["condition", "description"], f"{label} additional", source)
        additional = AbilityUpgrade(
            condition=_parse_condition(raw["condition"], label, source),
            description=str(raw["description"]),
        )

    position = None
    if entry.get("learn_screen_position") is not None:
        raw = entry["learn_screen_position"]
        position = _convert(lambda: (int(raw["row"]), int(raw["column"])), label, source)

    enemy_check = None
    if entry.get("enemy_check") is not None:
        enemy_check = _convert(lambda: parse_characteristic(entry["enemy_check"]), label, source)

    can_learn_after = entry.get("can_learn_after") or []
    if not isinstance(can_learn_after, list):
        raise CatalogValidationError(f"{label} in {source} has invalid can_learn_after")

    return Ability(
        name=name,
        description=str(entry["description"]),
        ability_type=_convert(lambda: AbilityType(str(entry["type"]).lower()), label, source),
        requirements=requirements,
        check=_parse_check(entry.get("check"), label, source),
        enemy_check=enemy_check,
        self_only=bool(entry.get("self_only", False)),
        additional=additional,
        learn_screen_position=position,
        can_learn_after=tuple(str(n) for n in can_learn_after),
    )


def parse_abilities(data: Any, source: Path) -> dict[CharacterClass, ClassAbilities]:
    """Parse the abilities document: ``class -> {innate: {...}, acquire: {...}}``."""
    if not isinstance(data, dict):
        raise CatalogValidationError(f"Abilities in {source} must be a mapping of classes")

    abilities: dict[CharacterClass, ClassAbilities] = {}
    for class_name, groups in data.items():
        character_class = _parse_class(class_name, source)
        label = f"Abilities of '{class_name}'"
        groups = _require_mapping(groups or {}, label, source)
        innate = {
            name: _parse_ability(name, entry, source)
            for name, entry in _require_mapping(
                groups.get("innate") or {}, f"{label} innate", source
            ).items()
        }
        acquire = {
            name: _parse_ability(name, entry, source)
            for name, entry in _require_mapping(
                groups.get("acquire") or {}, f"{label} acquire", source
            ).items()
        }
        abilities[character_class] = ClassAbilities(
            innate=MappingProxyType(innate), acquire=MappingProxyType(acquire)
        )

    return abilities


def parse_traits(data: Any, source: Path) -> dict[str, CharacterTrait]:
    """Parse the traits document: ``name -> {description, effects, condition}``."""
    if not isinstance(data, dict):
        raise CatalogValidationError(f"Traits in {source} must be a mapping of names")

    traits: dict[str, CharacterTrait] = {}
    for name, entry in data.items():
        label = f"Trait '{name}'"
        _require_mapping(entry, label, source)
        _require(entry, ["description"], label, source)
        traits[name] = CharacterTrait(
            name=name,
            description=str(entry["description"]),
            effects=_parse_effects(entry.get("effects"), label, source),
            condition=_parse_condition(entry.get("condition"), label, source),
        )

    return traits


def _entry_list(data: Any, key: str, source: Path) -> list[dict[str, Any]]:
    if not isinstance(data, dict) or key not in data:
        raise CatalogLoadError(f"Missing '{key}' key in {source}")
    entries = data[key]
    if not isinstance(entries, list):
        raise CatalogLoadError(f"'{key}' must be a list in {source}")
    return entries


def _index_by_name(entries: list[T], source: Path) -> dict[str, T]:
    indexed: dict[str, T] = {}
    for entry in entries:
        if entry.name in indexed:
            logger.warning("duplicate_catalog_entry", name=entry.name, file=str(source))
            continue
        indexed[entry.name] = entry
    return indexed


def _entry_label(kind: str, entry: Any, source: Path) -> str:
    """Label for a list entry, which must be a mapping."""
    if not isinstance(entry, dict):
        raise CatalogValidationError(f"{kind} entry {entry!r} in {source} must be a mapping")
    return f"{kind} '{entry.get('name', 'unknown')}'"


def parse_equipment_entry(entry: dict[str, Any], source: Path) -> Equipment:
    """Validate one equipment mapping and build its definition."""
    label = _entry_label("Equipment", entry, source)
    _require(entry, ["name", "slot"], label, source)
    slot = entry["slot"]
    if str(slot).lower() not in {s.value for s in EquipmentSlot}:
        raise CatalogValidationError(
            f"{label} in {source} has invalid slot '{slot}' "
            f"(must be one of: {', '.join(s.value for s in EquipmentSlot)})"
        )
    return Equipment(
        name=str(entry["name"]),
        description=str(entry.get("description", "")),
        slot=EquipmentSlot(str(slot).lower()),
        effects=_parse_effects(entry.get("effects"), label, source),
    )


def parse_weapon_entry(entry: dict[str, Any], source: Path) -> Weapon:
    """Validate one weapon mapping and build its definition."""
    label = _entry_label("Weapon", entry, source)
    _require(entry, ["name", "damage", "category", "subtype", "grip"], label, source)

    def build() -> Weapon:
        category = WeaponCategory(str(entry["category"]).lower())
        subtype_enum = RangeKind if category == WeaponCategory.RANGED else MeleeKind
        return Weapon(
            name=str(entry["name"]),
            damage=str(entry["damage"]),
            attack=int(entry.get("attack", 0)),
            category=category,
            subtype=subtype_enum(str(entry["subtype"]).lower()),
            grip=WeaponGrip(str(entry["grip"]).lower()),
            range=int(entry.get("range", 1)),
            effects=_parse_effects(entry.get("effects"), label, source),
            condition=entry.get("condition"),
        )

    return _convert(build, label, source)


def parse_item_entry(entry: dict[str, Any], source: Path) -> Item:
    """Validate one generic item mapping and build its definition."""
    label = _entry_label("Item", entry, source)
    _require(entry, ["name"], label, source)
    return Item(name=str(entry["name"]), description=str(entry.get("description", "")))


def _load_optional(directory: Path, filename: str) -> tuple[Any, Path] | None:
    path = directory / filename
    if not path.exists():
        logger.warning("catalog_file_not_found", file=str(path))
        return None
    return load_yaml_file(path), path


def load_catalogs(data_dir: Path | None = None) -> Catalogs:
    """
    Load every catalog file from a directory.

    Missing files produce empty registries (with a warning); malformed files
    raise.

    Args:
        data_dir: Directory containing the YAML files. If None, uses the
            configured data directory.

    Returns:
        The loaded catalogs

    Raises:
        CatalogLoadError: If a file cannot be loaded
        CatalogValidationError: If an entry is invalid
    """
    if data_dir is None:
        data_dir = get_settings().data_dir

    if not data_dir.is_dir():
        raise CatalogLoadError(f"Not a directory: {data_dir}")

    skills: dict = {}
    abilities: dict = {}
    traits: dict = {}
    equipment: dict = {}
    weapons: dict = {}
    items: dict = {}

    if loaded := _load_optional(data_dir, SKILLS_FILE):
        skills = parse_skills(*loaded)
    if loaded := _load_optional(data_dir, ABILITIES_FILE):
        abilities = parse_abilities(*loaded)
    if loaded := _load_optional(data_dir, TRAITS_FILE):
        traits = parse_traits(*loaded)
    if loaded := _load_optional(data_dir, EQUIPMENT_FILE):
        data, path = loaded
        equipment = _index_by_name(
            [parse_equipment_entry(e, path) for e in _entry_list(data, "equipment", path)], path
        )
    if loaded := _load_optional(data_dir, WEAPONS_FILE):
        data, path = loaded
        weapons = _index_by_name(
            [parse_weapon_entry(e, path) for e in _entry_list(data, "weapons", path)], path
        )
    if loaded := _load_optional(data_dir, ITEMS_FILE):
        data, path = loaded
        items = _index_by_name(
            [parse_item_entry(e, path) for e in _entry_list(data, "items", path)], path
        )

    catalogs = Catalogs(
        skills=skills,
        abilities=abilities,
        traits=traits,
        equipment=equipment,
        weapons=weapons,
        items=items,
    )

    logger.info(
        "catalogs_loaded",
        data_dir=str(data_dir),
        classes=len(skills),
        traits=len(traits),
        equipment=len(equipment),
        weapons=len(weapons),
        items=len(items),
    )

    return catalogs

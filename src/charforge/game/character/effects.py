"""Gameplay effects and the read-only view over a character's active effects.

An effect is an additive modifier tagged by kind and magnitude. Effects come
from the character's race and size, known traits, equipped weapons and
equipped gear. Aggregation always sums per bucket, so the order of sources
never changes a total.

Effects are written in catalog data as flat mappings with a ``type`` tag::

    - {type: resist, kind: fire, magnitude: 2}
    - {type: characteristic, kind: intellect, magnitude: 1}
    - {type: mana, dependent: willpower, per_point: 1}
    - {type: on_level_up, grant: skill_points, magnitude: 1}
"""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from .characteristics import CharacteristicKind, Characteristics, parse_characteristic


class Resist(StrEnum):
    """Elemental and spiritual resistances."""

    FIRE = "fire"
    ICE = "ice"
    LIGHTNING = "lightning"
    POISON = "poison"
    SPIRIT = "spirit"
    DARK = "dark"


class Protection(StrEnum):
    """Protection categories against incoming attacks."""

    MELEE = "melee"
    RANGE = "range"
    MAGIC = "magic"
    BODY = "body"
    MIND = "mind"


class LevelUpGrant(StrEnum):
    """Point pools that grow every time a level is gained."""

    ABILITY_POINTS = "ability_points"
    SKILL_POINTS = "skill_points"
    CHARACTERISTIC_POINTS = "characteristic_points"


@dataclass(frozen=True)
class ResistEffect:
    kind: Resist
    magnitude: int


@dataclass(frozen=True)
class ProtectionEffect:
    kind: Protection
    magnitude: int


@dataclass(frozen=True)
class SkillEffect:
    skill: str
    magnitude: int


@dataclass(frozen=True)
class InitiativeEffect:
    magnitude: int


@dataclass(frozen=True)
class CharacteristicEffect:
    kind: CharacteristicKind
    magnitude: int


@dataclass(frozen=True)
class ActionPointsEffect:
    magnitude: int


@dataclass(frozen=True)
class ArmorEffect:
    magnitude: int


@dataclass(frozen=True)
class ManaEffect:
    """Extra maximum mana per effective level of ``dependent``."""

    dependent: CharacteristicKind
    per_point: int


@dataclass(frozen=True)
class LevelUpEffect:
    """Points added to ``grant`` for every level gained."""

    grant: LevelUpGrant
    magnitude: int


Effect = (
    ResistEffect
    | ProtectionEffect
    | SkillEffect
    | InitiativeEffect
    | CharacteristicEffect
    | ActionPointsEffect
    | ArmorEffect
    | ManaEffect
    | LevelUpEffect
)

EFFECT_TYPES: dict[str, type] = {
    "resist": ResistEffect,
    "protection": ProtectionEffect,
    "skill": SkillEffect,
    "initiative": InitiativeEffect,
    "characteristic": CharacteristicEffect,
    "action_points": ActionPointsEffect,
    "armor": ArmorEffect,
    "mana": ManaEffect,
    "on_level_up": LevelUpEffect,
}

_EFFECT_TAGS = {effect_type: tag for tag, effect_type in EFFECT_TYPES.items()}


def effect_from_dict(data: Mapping[str, Any]) -> Effect:
    """
    Build an effect from its tagged mapping form.

    Args:
        data: Mapping with a ``type`` key and the fields of that effect type

    Returns:
        The effect value

    Raises:
        ValueError: If the tag is unknown or a field is missing or invalid
    """
    tag = str(data.get("type", "")).lower()
    if tag not in EFFECT_TYPES:
        raise ValueError(
            f"Unknown effect type {tag!r} (must be one of: {', '.join(EFFECT_TYPES)})"
        )

    try:
        if tag == "resist":
            return ResistEffect(Resist(str(data["kind"]).lower()), int(data["magnitude"]))
        if tag == "protection":
            return ProtectionEffect(Protection(str(data["kind"]).lower()), int(data["magnitude"]))
        if tag == "skill":
            return SkillEffect(str(data["skill"]), int(data["magnitude"]))
        if tag == "characteristic":
            return CharacteristicEffect(parse_characteristic(data["kind"]), int(data["magnitude"]))
        if tag == "mana":
            return ManaEffect(parse_characteristic(data["dependent"]), int(data["per_point"]))
        if tag == "on_level_up":
            return LevelUpEffect(LevelUpGrant(str(data["grant"]).lower()), int(data["magnitude"]))
        return EFFECT_TYPES[tag](int(data["magnitude"]))
    except KeyError as e:
        raise ValueError(f"Effect {tag!r} missing field {e.args[0]!r}") from e
    except TypeError as e:
        raise ValueError(f"Effect {tag!r} has an invalid field: {e}") from e


def effect_to_dict(effect: Effect) -> dict[str, Any]:
    """Inverse of :func:`effect_from_dict`."""
    data: dict[str, Any] = {"type": _EFFECT_TAGS[type(effect)]}
    for name, value in vars(effect).items():
        data[name] = value.value if isinstance(value, StrEnum) else value
    return data


def describe_effect(effect: Effect) -> str:
    """
    Describe an effect in one short line.

    Examples:
        >>> describe_effect(ResistEffect(Resist.FIRE, 2))
        'Fire Resist +2'
        >>> describe_effect(LevelUpEffect(LevelUpGrant.SKILL_POINTS, 1))
        '+1 Skill Points per level'
    """
    if isinstance(effect, ResistEffect):
        return f"{effect.kind.value.title()} Resist {effect.magnitude:+}"
    if isinstance(effect, ProtectionEffect):
        return f"{effect.kind.value.title()} Protection {effect.magnitude:+}"
    if isinstance(effect, SkillEffect):
        return f"{effect.skill} {effect.magnitude:+}"
    if isinstance(effect, InitiativeEffect):
        return f"Initiative {effect.magnitude:+}"
    if isinstance(effect, CharacteristicEffect):
        return f"{effect.kind.short_name} {effect.magnitude:+}"
    if isinstance(effect, ActionPointsEffect):
        return f"Action Points {effect.magnitude:+}"
    if isinstance(effect, ArmorEffect):
        return f"Armor {effect.magnitude:+}"
    if isinstance(effect, ManaEffect):
        return f"Mana {effect.per_point:+}/point of {effect.dependent.short_name}"
    grant = effect.grant.value.replace("_", " ").title()
    return f"{effect.magnitude:+} {grant} per level"


class ActiveEffects:
    """
    Immutable view over a list of effects with the aggregate queries.

    Every per-kind fold starts from the full enumeration, so absent kinds are
    reported as 0 rather than missing.
    """

    __slots__ = ("_effects",)

    def __init__(self, effects: Iterable[Effect] = ()) -> None:
        self._effects: tuple[Effect, ...] = tuple(effects)

    def __iter__(self) -> Iterator[Effect]:
        return iter(self._effects)

    def __len__(self) -> int:
        return len(self._effects)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ActiveEffects):
            return self._effects == other._effects
        return NotImplemented

    def __repr__(self) -> str:
        return f"ActiveEffects({list(self._effects)!r})"

    @property
    def effects(self) -> tuple[Effect, ...]:
        return self._effects

    def resists(self) -> dict[Resist, int]:
        totals = dict.fromkeys(Resist, 0)
        for effect in self._effects:
            if isinstance(effect, ResistEffect):
                totals[effect.kind] += effect.magnitude
        return totals

    def protections(self) -> dict[Protection, int]:
        totals = dict.fromkeys(Protection, 0)
        for effect in self._effects:
            if isinstance(effect, ProtectionEffect):
                totals[effect.kind] += effect.magnitude
        return totals

    def initiative_bonus(self) -> int:
        return sum(e.magnitude for e in self._effects if isinstance(e, InitiativeEffect))

    def armor(self) -> int:
        return sum(e.magnitude for e in self._effects if isinstance(e, ArmorEffect))

    def action_points_bonus(self) -> int:
        return sum(e.magnitude for e in self._effects if isinstance(e, ActionPointsEffect))

    def skill_bonus(self, name: str) -> int:
        return sum(
            e.magnitude for e in self._effects if isinstance(e, SkillEffect) and e.skill == name
        )

    def characteristic_bonuses(self) -> dict[CharacteristicKind, int]:
        """Summed bonus per characteristic; only characteristics with effects appear."""
        bonuses: dict[CharacteristicKind, int] = {}
        for effect in self._effects:
            if isinstance(effect, CharacteristicEffect):
                bonuses[effect.kind] = bonuses.get(effect.kind, 0) + effect.magnitude
        return bonuses

    def effective_level(self, stats: Characteristics, kind: CharacteristicKind) -> int:
        """Base level plus characteristic bonuses, floored at 0."""
        return effective_level(stats, kind, self.characteristic_bonuses())

    def level_up_grants(self) -> dict[LevelUpGrant, int]:
        totals = dict.fromkeys(LevelUpGrant, 0)
        for effect in self._effects:
            if isinstance(effect, LevelUpEffect):
                totals[effect.grant] += effect.magnitude
        return totals

    def mana_bonus(self, stats: Characteristics) -> int:
        """Extra maximum mana from mana-scaling effects."""
        bonuses = self.characteristic_bonuses()
        return sum(
            effective_level(stats, e.dependent, bonuses) * e.per_point
            for e in self._effects
            if isinstance(e, ManaEffect)
        )


def effective_level(
    stats: Characteristics,
    kind: CharacteristicKind,
    bonuses: Mapping[CharacteristicKind, int] | None = None,
) -> int:
    """
    Effective level of a characteristic.

    Args:
        stats: Base characteristic levels
        kind: Characteristic to evaluate
        bonuses: Summed characteristic bonuses (absent kinds count as 0)

    Returns:
        ``max(0, base + bonus)``
    """
    bonus = bonuses.get(kind, 0) if bonuses else 0
    return max(0, stats.get_level(kind) + bonus)

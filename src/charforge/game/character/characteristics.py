"""Characteristics (primary attributes) for charforge characters.

Eight characteristics describe a character. Each has an integer level that is
raised with characteristic points using triangular costing: going from level
L to L+1 costs L+1 points.
"""

from dataclasses import dataclass, fields
from enum import StrEnum


class CharacteristicKind(StrEnum):
    """The eight primary characteristics, in display order."""

    STRENGTH = "strength"
    DEXTERITY = "dexterity"
    ENDURANCE = "endurance"
    PERCEPTION = "perception"
    MAGIC = "magic"
    WILLPOWER = "willpower"
    INTELLECT = "intellect"
    CHARISMA = "charisma"

    @property
    def short_name(self) -> str:
        """Three-letter label (e.g. "STR")."""
        return CHARACTERISTIC_SHORT_NAMES[self]


CHARACTERISTIC_SHORT_NAMES = {
    CharacteristicKind.STRENGTH: "STR",
    CharacteristicKind.DEXTERITY: "DEX",
    CharacteristicKind.ENDURANCE: "END",
    CharacteristicKind.PERCEPTION: "PER",
    CharacteristicKind.MAGIC: "MAG",
    CharacteristicKind.WILLPOWER: "WIL",
    CharacteristicKind.INTELLECT: "INT",
    CharacteristicKind.CHARISMA: "CHA",
}

# Alternate spellings found in catalog data
CHARACTERISTIC_ALIASES = {
    "intelligence": CharacteristicKind.INTELLECT,
    "agility": CharacteristicKind.DEXTERITY,
}

MIN_CHARACTERISTIC_LEVEL = 1


def parse_characteristic(value: str) -> CharacteristicKind:
    """
    Resolve a characteristic from its name, short label or alias.

    Args:
        value: Text such as "Dexterity", "dex", "DEX" or "Agility"

    Returns:
        The matching CharacteristicKind

    Raises:
        ValueError: If the text names no characteristic
    """
    key = value.strip().lower()

    if key in CHARACTERISTIC_ALIASES:
        return CHARACTERISTIC_ALIASES[key]

    for kind in CharacteristicKind:
        if key in (kind.value, kind.short_name.lower()):
            return kind

    raise ValueError(f"Unknown characteristic: {value!r}")


def upgrade_cost(level: int) -> int:
    """Points needed to raise a level-``level`` value by one."""
    return level + 1


@dataclass
class Characteristics:
    """Levels of all eight characteristics."""

    strength: int = MIN_CHARACTERISTIC_LEVEL
    dexterity: int = MIN_CHARACTERISTIC_LEVEL
    endurance: int = MIN_CHARACTERISTIC_LEVEL
    perception: int = MIN_CHARACTERISTIC_LEVEL
    magic: int = MIN_CHARACTERISTIC_LEVEL
    willpower: int = MIN_CHARACTERISTIC_LEVEL
    intellect: int = MIN_CHARACTERISTIC_LEVEL
    charisma: int = MIN_CHARACTERISTIC_LEVEL

    def __post_init__(self) -> None:
        """Validate characteristic floors."""
        for f in fields(self):
            if getattr(self, f.name) < MIN_CHARACTERISTIC_LEVEL:
                raise ValueError(
                    f"{f.name} must be >= {MIN_CHARACTERISTIC_LEVEL}, got {getattr(self, f.name)}"
                )

    def get_level(self, kind: CharacteristicKind) -> int:
        """Get the base level of a characteristic."""
        return getattr(self, kind.value)

    def set_level(self, kind: CharacteristicKind, level: int) -> None:
        """Set the base level of a characteristic."""
        if level < MIN_CHARACTERISTIC_LEVEL:
            raise ValueError(f"{kind.value} must be >= {MIN_CHARACTERISTIC_LEVEL}, got {level}")
        setattr(self, kind.value, level)

    def as_dict(self) -> dict[str, int]:
        """Characteristic levels keyed by name, in display order."""
        return {kind.value: self.get_level(kind) for kind in CharacteristicKind}

    @classmethod
    def from_dict(cls, data: dict[str, int]) -> "Characteristics":
        """Build from a name -> level mapping; missing entries default to 1."""
        levels = {parse_characteristic(name).value: int(level) for name, level in data.items()}
        return cls(**levels)

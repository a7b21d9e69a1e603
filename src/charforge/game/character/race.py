"""Races, sizes and classes available to characters."""

from enum import StrEnum

from .effects import Effect, Protection, ProtectionEffect, Resist, ResistEffect


class Size(StrEnum):
    """Body size of a race."""

    MEDIUM = "medium"


class Race(StrEnum):
    """Playable races."""

    DARK_HALF_ELF = "dark_half_elf"

    @property
    def size(self) -> Size:
        return RACE_SIZES[self]

    @property
    def base_action_points(self) -> int:
        return RACE_BASE_ACTION_POINTS[self]


class CharacterClass(StrEnum):
    """Playable classes. Skills and abilities are catalogued per class."""

    BARD = "bard"


RACE_SIZES = {
    Race.DARK_HALF_ELF: Size.MEDIUM,
}

RACE_BASE_ACTION_POINTS = {
    Race.DARK_HALF_ELF: 10,
}

RACE_EFFECTS: dict[Race, tuple[Effect, ...]] = {
    Race.DARK_HALF_ELF: (
        ResistEffect(Resist.LIGHTNING, 1),
        ResistEffect(Resist.SPIRIT, 1),
    ),
}

# Ranged protection is a property of body size rather than of a characteristic
SIZE_EFFECTS: dict[Size, tuple[Effect, ...]] = {
    Size.MEDIUM: (ProtectionEffect(Protection.RANGE, 10),),
}


def race_effects(race: Race) -> tuple[Effect, ...]:
    """Effects granted by a race and its size."""
    return RACE_EFFECTS.get(race, ()) + SIZE_EFFECTS.get(race.size, ())

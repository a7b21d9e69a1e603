"""Experience and leveling system for charforge."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from charforge.game.character.effects import LevelUpGrant

from .aggregator import level_up_grants

if TYPE_CHECKING:
    from charforge.game.character.model import Character

# A trait point is granted on every level divisible by this
TRAIT_POINT_LEVEL_INTERVAL = 3


def xp_to_next_level(level: int) -> int:
    """
    Calculate XP needed to go from current level to next level.

    Args:
        level: Current character level

    Returns:
        XP needed to reach the next level

    Examples:
        Level 1→2: 20 XP
        Level 2→3: 30 XP
        Level 3→4: 40 XP
    """
    return (level + 1) * 10


def xp_for_level(level: int) -> int:
    """Total XP earned on the way from level 1 to ``level``."""
    return sum(xp_to_next_level(n) for n in range(1, level))


def xp_progress(character: "Character") -> tuple[int, int]:
    """
    Character's XP progress toward next level.

    Returns:
        Tuple of (XP within the current level, XP needed for the next level)
    """
    return (character.experience, xp_to_next_level(character.level))


def apply_experience(character: "Character", delta: int) -> int:
    """
    Add experience and advance levels.

    A single delta may cross several thresholds; each crossing subtracts the
    threshold of the level being left and adds to ``pending_levels`` until
    :func:`apply_level_up` grants its points. Negative deltas are ignored.

    Args:
        character: Character to update in place
        delta: Experience gained

    Returns:
        Number of levels crossed
    """
    if delta <= 0:
        return 0

    character.experience += delta
    levels_crossed = 0
    while character.experience >= xp_to_next_level(character.level):
        character.experience -= xp_to_next_level(character.level)
        character.level += 1
        levels_crossed += 1

    character.pending_levels += levels_crossed
    return levels_crossed


@dataclass(frozen=True)
class LevelUpResult:
    """Points granted by one level-up application."""

    levels: int
    ability_points: int = 0
    skill_points: int = 0
    characteristic_points: int = 0
    trait_points: int = 0


def trait_points_for_levels(previous_level: int, new_level: int) -> int:
    """Trait points earned between two levels, computed from the levels alone."""
    return (
        new_level // TRAIT_POINT_LEVEL_INTERVAL
        - previous_level // TRAIT_POINT_LEVEL_INTERVAL
    )


def apply_level_up(character: "Character", levels_crossed: int) -> LevelUpResult:
    """
    Grant the points for levels already reached.

    ``character.level`` must already include the crossed levels (as left by
    :func:`apply_experience`). Only levels still counted in
    ``character.pending_levels`` are granted, so no level pays out twice. For
    each level every on-level-up grant is applied once; a negative grant can
    shrink a pool but never below zero.

    Args:
        character: Character to update in place
        levels_crossed: Levels gained since the last grant

    Returns:
        Totals actually granted per pool
    """
    levels_crossed = min(levels_crossed, character.pending_levels)
    if levels_crossed <= 0:
        return LevelUpResult(levels=0)

    # Pending levels are always the most recent ones
    previous_level = character.level - character.pending_levels
    new_level = previous_level + levels_crossed
    character.pending_levels -= levels_crossed

    pools = {
        LevelUpGrant.ABILITY_POINTS: "ability_points",
        LevelUpGrant.SKILL_POINTS: "skill_points",
        LevelUpGrant.CHARACTERISTIC_POINTS: "characteristic_points",
    }
    granted = dict.fromkeys(LevelUpGrant, 0)
    grants = level_up_grants(character.stats, character.effects)

    # Pools clamp at 0 after every level
    for _ in range(levels_crossed):
        for grant, attribute in pools.items():
            before = getattr(character, attribute)
            after = max(0, before + grants[grant])
            setattr(character, attribute, after)
            granted[grant] += after - before

    trait_points = trait_points_for_levels(previous_level, new_level)
    character.trait_points += trait_points

    return LevelUpResult(
        levels=levels_crossed,
        ability_points=granted[LevelUpGrant.ABILITY_POINTS],
        skill_points=granted[LevelUpGrant.SKILL_POINTS],
        characteristic_points=granted[LevelUpGrant.CHARACTERISTIC_POINTS],
        trait_points=trait_points,
    )

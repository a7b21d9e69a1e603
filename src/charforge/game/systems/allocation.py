"""Point-buy allocation of characteristic and skill points.

Both pools use triangular costing: raising a value from level L to L+1 costs
L+1 points. Skills are further capped by the effective level of their
governing characteristic.

Functions here return the number of points spent or refunded; 0 means the
request was rejected and nothing changed. Downgrades are only offered while a
character is being built.
"""

from collections.abc import Mapping
from typing import Protocol

from charforge.game.character.characteristics import (
    MIN_CHARACTERISTIC_LEVEL,
    CharacteristicKind,
    Characteristics,
    upgrade_cost,
)
from charforge.game.character.effects import effective_level
from charforge.game.character.skills import CharacterSkill, SkillDefinition, find_skill


class PointSheet(Protocol):
    """Anything holding characteristics, skills and their point pools."""

    stats: Characteristics
    characteristic_points: int
    skill_points: int
    skills: list[CharacterSkill]


def adjust_skill_points_for_intellect(sheet: PointSheet, delta: int) -> None:
    """
    Move the skill-point pool by a change in Intellect.

    Intellect is the only characteristic coupled to another pool. Raising it
    by one grants one skill point; lowering it takes one back, which can
    leave a draft's pool negative.
    """
    sheet.skill_points += delta


def upgrade_characteristic(sheet: PointSheet, kind: CharacteristicKind) -> int:
    """
    Raise a characteristic by one level.

    Returns:
        Points spent, or 0 if the pool cannot cover the cost
    """
    level = sheet.stats.get_level(kind)
    cost = upgrade_cost(level)
    if sheet.characteristic_points < cost:
        return 0

    sheet.characteristic_points -= cost
    sheet.stats.set_level(kind, level + 1)
    if kind == CharacteristicKind.INTELLECT:
        adjust_skill_points_for_intellect(sheet, 1)
    return cost


def downgrade_characteristic(sheet: PointSheet, kind: CharacteristicKind) -> int:
    """
    Lower a characteristic by one level, refunding its current level.

    Skills left above their new cap are not touched; see
    :func:`find_over_limit_skills`.

    Returns:
        Points refunded, or 0 if the characteristic is already at its floor
    """
    level = sheet.stats.get_level(kind)
    if level <= MIN_CHARACTERISTIC_LEVEL:
        return 0

    sheet.characteristic_points += level
    sheet.stats.set_level(kind, level - 1)
    if kind == CharacteristicKind.INTELLECT:
        adjust_skill_points_for_intellect(sheet, -1)
    return level


def skill_cap(
    stats: Characteristics,
    dependency: CharacteristicKind,
    bonuses: Mapping[CharacteristicKind, int] | None = None,
) -> int:
    """Highest level a skill governed by ``dependency`` may reach."""
    return effective_level(stats, dependency, bonuses)


def skill_upgrade_cost(sheet: PointSheet, name: str, cap: int) -> int | None:
    """
    Cost of raising a skill by one level.

    Returns:
        The cost, or None if the skill is already at (or above) its cap
    """
    skill = find_skill(sheet.skills, name)
    if skill is None:
        return 1 if cap >= 1 else None
    if skill.level >= cap:
        return None
    return upgrade_cost(skill.level)


def upgrade_skill(sheet: PointSheet, name: str, cap: int) -> int:
    """
    Raise a skill by one level, learning it at level 1 if unknown.

    Args:
        sheet: Sheet to update in place
        name: Skill name
        cap: Current cap from :func:`skill_cap`

    Returns:
        Points spent, or 0 if capped or unaffordable
    """
    cost = skill_upgrade_cost(sheet, name, cap)
    if cost is None or max(0, sheet.skill_points) < cost:
        return 0

    sheet.skill_points -= cost
    skill = find_skill(sheet.skills, name)
    if skill is None:
        sheet.skills.append(CharacterSkill(name=name, level=1))
    else:
        skill.level += 1
    return cost


def downgrade_skill(sheet: PointSheet, name: str) -> int:
    """
    Lower a skill by one level, refunding its current level.

    A skill lowered from level 1 is forgotten.

    Returns:
        Points refunded, or 0 if the skill is unknown
    """
    skill = find_skill(sheet.skills, name)
    if skill is None:
        return 0

    refund = skill.level
    sheet.skill_points += refund
    if skill.level == 1:
        sheet.skills.remove(skill)
    else:
        skill.level -= 1
    return refund


def find_over_limit_skills(
    sheet: PointSheet,
    skill_defs: Mapping[str, SkillDefinition],
    bonuses: Mapping[CharacteristicKind, int] | None = None,
) -> list[str]:
    """
    Names of skills whose level exceeds their cap.

    Such skills are reported, never demoted. Skills missing from
    ``skill_defs`` are skipped.
    """
    over_limit = []
    for skill in sheet.skills:
        definition = skill_defs.get(skill.name)
        if definition is None:
            continue
        if skill.level > skill_cap(sheet.stats, definition.dependency, bonuses):
            over_limit.append(skill.name)
    return over_limit

"""Character skills.

A skill is a named capability governed by one characteristic. Its level can
never be raised above that characteristic's effective level.
"""

from dataclasses import dataclass

from .characteristics import CharacteristicKind


@dataclass(frozen=True)
class SkillDefinition:
    """Catalog entry for a skill: only the governing characteristic."""

    name: str
    dependency: CharacteristicKind


@dataclass
class CharacterSkill:
    """A skill known by a character, with its level."""

    name: str
    level: int = 1

    def __post_init__(self) -> None:
        """Validate skill level."""
        if self.level < 1:
            raise ValueError(f"Skill level must be >= 1, got {self.level}")


def find_skill(skills: list[CharacterSkill], name: str) -> CharacterSkill | None:
    """Find a known skill by name."""
    for skill in skills:
        if skill.name == name:
            return skill
    return None

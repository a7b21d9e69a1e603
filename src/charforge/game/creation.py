"""Character creation.

A :class:`CharacterDraft` is a character under construction. Unlike a
finished character it allows refunds (downgrades) and a negative skill-point
pool; :meth:`CharacterDraft.finalize` checks everything is settled before
producing a :class:`Character`.
"""

from dataclasses import dataclass, field
from uuid import UUID, uuid4

import structlog

from charforge.config import Settings, get_settings
from charforge.game.catalog.definitions import Catalogs
from charforge.game.character.characteristics import CharacteristicKind, Characteristics
from charforge.game.character.model import Character
from charforge.game.character.race import CharacterClass, Race
from charforge.game.character.skills import CharacterSkill
from charforge.game.systems import allocation

logger = structlog.get_logger(__name__)


class CharacterCreationError(Exception):
    """Raised when a draft cannot become a character."""

    def __init__(self, problems: list[str]) -> None:
        self.problems = problems
        super().__init__("; ".join(problems))


@dataclass
class CharacterDraft:
    """Editable build of a new character."""

    name: str
    race: Race
    character_class: CharacterClass
    stats: Characteristics = field(default_factory=Characteristics)
    characteristic_points: int = 0
    skill_points: int = 0
    skills: list[CharacterSkill] = field(default_factory=list)
    traits: list[str] = field(default_factory=list)
    trait_count: int = 3
    max_name_length: int = 100
    id: UUID = field(default_factory=uuid4)

    @classmethod
    def new(
        cls,
        name: str,
        race: Race,
        character_class: CharacterClass,
        settings: Settings | None = None,
    ) -> "CharacterDraft":
        """
        Start a draft with the configured budget.

        Every characteristic starts at 1; the skill-point pool starts at the
        configured base plus Intellect.
        """
        if settings is None:
            settings = get_settings()
        stats = Characteristics()
        return cls(
            name=name,
            race=race,
            character_class=character_class,
            stats=stats,
            characteristic_points=settings.starting_characteristic_points,
            skill_points=settings.starting_skill_points + stats.intellect,
            trait_count=settings.starting_trait_count,
            max_name_length=settings.max_name_length,
        )

    def upgrade_characteristic(self, kind: CharacteristicKind) -> int:
        return allocation.upgrade_characteristic(self, kind)

    def downgrade_characteristic(self, kind: CharacteristicKind) -> int:
        return allocation.downgrade_characteristic(self, kind)

    def upgrade_skill(self, name: str, catalogs: Catalogs) -> int:
        """Raise a class skill; the cap comes from base characteristics."""
        definition = catalogs.get_skill(self.character_class, name)
        if definition is None:
            return 0
        cap = allocation.skill_cap(self.stats, definition.dependency)
        return allocation.upgrade_skill(self, name, cap)

    def downgrade_skill(self, name: str) -> int:
        return allocation.downgrade_skill(self, name)

    def choose_trait(self, name: str, catalogs: Catalogs) -> bool:
        """
        Pick a starting trait.

        Returns:
            False if the trait is unknown, already chosen, or the picks are full
        """
        if name in self.traits or len(self.traits) >= self.trait_count:
            return False
        if catalogs.get_trait(name) is None:
            return False
        self.traits.append(name)
        return True

    def drop_trait(self, name: str) -> bool:
        if name not in self.traits:
            return False
        self.traits.remove(name)
        return True

    def over_limit_skills(self, catalogs: Catalogs) -> list[str]:
        return allocation.find_over_limit_skills(self, catalogs.class_skills(self.character_class))

    def problems(self, catalogs: Catalogs) -> list[str]:
        """Everything preventing :meth:`finalize`; empty when the draft is complete."""
        problems = []
        name = self.name.strip()
        if not name:
            problems.append("Name must not be empty")
        elif len(name) > self.max_name_length:
            problems.append(f"Name must be at most {self.max_name_length} characters")

        if self.characteristic_points != 0:
            problems.append(
                f"{self.characteristic_points} characteristic points must be spent exactly"
            )
        if self.skill_points != 0:
            problems.append(f"{self.skill_points} skill points must be spent exactly")

        over_limit = self.over_limit_skills(catalogs)
        if over_limit:
            problems.append(f"Skills above their characteristic: {', '.join(over_limit)}")

        if len(self.traits) != self.trait_count:
            problems.append(f"Exactly {self.trait_count} traits must be chosen")
        unknown = [name for name in self.traits if catalogs.get_trait(name) is None]
        if unknown:
            problems.append(f"Unknown traits: {', '.join(unknown)}")

        return problems

    def finalize(self, catalogs: Catalogs) -> Character:
        """
        Build the level 1 character.

        Effects and resources are computed and resources start full.

        Raises:
            CharacterCreationError: If :meth:`problems` reports anything
        """
        problems = self.problems(catalogs)
        if problems:
            logger.info("character_creation_rejected", name=self.name, problems=problems)
            raise CharacterCreationError(problems)

        character = Character(
            id=self.id,
            name=self.name.strip(),
            race=self.race,
            character_class=self.character_class,
            stats=Characteristics(**self.stats.as_dict()),
            skills=[CharacterSkill(s.name, s.level) for s in self.skills],
            traits=list(self.traits),
        )
        character.refresh_effects(catalogs)
        character.restore_resources()

        logger.info(
            "character_created",
            character_id=str(character.id),
            name=character.name,
            race=character.race.value,
            character_class=character.character_class.value,
        )
        return character

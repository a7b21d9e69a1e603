"""The character aggregate."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from charforge.game.systems import aggregator
from charforge.game.systems.economy import Wallet

from .characteristics import CharacteristicKind, Characteristics
from .effects import ActiveEffects, Effect, LevelUpGrant, Protection, Resist
from .items import SLOT_ORDER, EquipmentSlot, InventoryItem
from .race import CharacterClass, Race
from .resources import Resource
from .skills import CharacterSkill, find_skill

if TYPE_CHECKING:
    from charforge.game.catalog.definitions import Catalogs


@dataclass
class Character:
    """
    A player character.

    Every field except the effect cache is source state. The cache is only
    rewritten by :meth:`refresh_effects`, which every mutator of race, traits,
    equipment or weapons calls before returning.
    """

    name: str
    race: Race
    character_class: CharacterClass
    id: UUID = field(default_factory=uuid4)

    level: int = 1
    experience: int = 0
    # Levels reached whose level-up points have not been granted yet
    pending_levels: int = 0

    hp: Resource = field(default_factory=lambda: Resource.full(0))
    mana: Resource = field(default_factory=lambda: Resource.full(0))
    action_points: Resource = field(default_factory=lambda: Resource.full(0))

    stats: Characteristics = field(default_factory=Characteristics)
    characteristic_points: int = 0
    skill_points: int = 0
    skills: list[CharacterSkill] = field(default_factory=list)
    ability_points: int = 0
    trait_points: int = 0

    traits: list[str] = field(default_factory=list)
    abilities: list[str] = field(default_factory=list)

    wallet: Wallet = field(default_factory=Wallet)
    equipment: dict[EquipmentSlot, list[str]] = field(default_factory=dict)
    equipped_weapons: list[str] = field(default_factory=list)
    inventory: list[InventoryItem] = field(default_factory=list)

    _active_effects: tuple[Effect, ...] = field(default=(), init=False, repr=False)

    @property
    def active_effects(self) -> tuple[Effect, ...]:
        """Effects from race, traits and equipped gear as of the last refresh."""
        return self._active_effects

    @property
    def effects(self) -> ActiveEffects:
        """Query view over :attr:`active_effects`."""
        return ActiveEffects(self._active_effects)

    def refresh_effects(self, catalogs: "Catalogs") -> None:
        """Recompute the effect cache, then the resource maxima."""
        self._active_effects = aggregator.recompute_effects(
            self.race, self.traits, self.equipment, self.equipped_weapons, catalogs
        )
        aggregator.refresh_resources(self)

    def restore_resources(self) -> None:
        """Fill hit points, mana and action points."""
        for resource in (self.hp, self.mana, self.action_points):
            resource.restore_full()

    def effective_level(self, kind: CharacteristicKind) -> int:
        return self.effects.effective_level(self.stats, kind)

    def get_skill(self, name: str) -> CharacterSkill | None:
        return find_skill(self.skills, name)

    def skill_total(self, name: str) -> int:
        """Skill level plus skill bonuses; 0 for an unknown skill with no bonus."""
        skill = self.get_skill(name)
        return (skill.level if skill else 0) + self.effects.skill_bonus(name)

    @property
    def initiative(self) -> int:
        return aggregator.initiative(self.stats, self.effects)

    @property
    def armor(self) -> int:
        return self.effects.armor()

    def resists(self) -> dict[Resist, int]:
        return self.effects.resists()

    def protections(self) -> dict[Protection, int]:
        """Class default protections plus protection effects."""
        return aggregator.total_protections(self.stats, self.effects)

    def level_up_grants(self) -> dict[LevelUpGrant, int]:
        return aggregator.level_up_grants(self.stats, self.effects)

    def equipped_gear(self) -> list[tuple[EquipmentSlot, str]]:
        """Equipped gear flattened in slot order, then insertion order."""
        return [
            (slot, name)
            for slot in sorted(self.equipment, key=SLOT_ORDER.__getitem__)
            for name in self.equipment[slot]
        ]

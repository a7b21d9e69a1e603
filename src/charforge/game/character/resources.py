"""Capped character resources (hit points, mana, action points)."""

from dataclasses import dataclass
from enum import StrEnum


class ResourceKind(StrEnum):
    """The three capped resources of a character."""

    HP = "hp"
    MANA = "mana"
    ACTION_POINTS = "action_points"


@dataclass
class Resource:
    """
    A consumable resource with a current and a maximum value.

    ``current`` is clamped into ``[0, max]`` on every mutation.
    """

    current: int
    max: int

    def __post_init__(self) -> None:
        """Clamp values on construction."""
        self.max = max(0, self.max)
        self.current = min(max(0, self.current), self.max)

    @classmethod
    def full(cls, maximum: int) -> "Resource":
        """Create a resource filled to its maximum."""
        return cls(current=maximum, max=maximum)

    @property
    def spent(self) -> int:
        """Amount missing from the maximum."""
        return self.max - self.current

    def spend(self, amount: int) -> bool:
        """
        Spend some of the resource.

        Args:
            amount: Amount to spend

        Returns:
            True if spent, False if not enough was available (nothing changes)
        """
        if amount < 0 or self.current < amount:
            return False
        self.current -= amount
        return True

    def restore(self, amount: int) -> None:
        """Restore up to the maximum."""
        if amount <= 0:
            return
        self.current = min(self.current + amount, self.max)

    def restore_full(self) -> None:
        """Fill to the maximum."""
        self.current = self.max

    def set_current(self, value: int) -> None:
        """Set the current value, clamped into range."""
        self.current = min(max(0, value), self.max)

    def resize(self, new_max: int) -> None:
        """
        Change the maximum while keeping the amount already spent.

        Args:
            new_max: New maximum (negative values are treated as 0)
        """
        new_max = max(0, new_max)
        if new_max == self.max:
            return
        spent = self.spent
        self.max = new_max
        self.current = max(0, new_max - spent)

"""Wallet and currency formatting for charforge.

Money uses three denominations:
- Copper (smallest unit)
- Silver (10 copper)
- Gold (100 silver = 1000 copper)

All money is stored internally as copper.
"""

from dataclasses import dataclass
from enum import IntEnum


class CurrencyUnit(IntEnum):
    """Currency denominations in copper."""

    COPPER = 1
    SILVER = 10
    GOLD = 1000


CURRENCY_NAMES = {
    CurrencyUnit.COPPER: ("copper", "copper"),
    CurrencyUnit.SILVER: ("silver", "silver"),
    CurrencyUnit.GOLD: ("gold", "gold"),
}

CURRENCY_SHORT = {
    CurrencyUnit.COPPER: "c",
    CurrencyUnit.SILVER: "s",
    CurrencyUnit.GOLD: "g",
}

_UNIT_WORDS = {
    "gold": CurrencyUnit.GOLD,
    "silver": CurrencyUnit.SILVER,
    "copper": CurrencyUnit.COPPER,
}


@dataclass
class Wallet:
    """A non-negative amount of money held as copper."""

    total: int = 0

    def __post_init__(self) -> None:
        self.total = max(0, int(self.total))

    @classmethod
    def from_parts(cls, gold: int = 0, silver: int = 0, copper: int = 0) -> "Wallet":
        """
        Create a wallet from a denomination breakdown.

        Example:
            >>> Wallet.from_parts(1, 23, 4).total
            1234
        """
        return cls(
            gold * CurrencyUnit.GOLD + silver * CurrencyUnit.SILVER + copper * CurrencyUnit.COPPER
        )

    @property
    def gold(self) -> int:
        return self.total // CurrencyUnit.GOLD

    @property
    def silver(self) -> int:
        return (self.total % CurrencyUnit.GOLD) // CurrencyUnit.SILVER

    @property
    def copper(self) -> int:
        return self.total % CurrencyUnit.SILVER

    def add(self, delta: int) -> int:
        """
        Apply a signed change; the result never drops below zero.

        Returns:
            New total
        """
        self.total = max(0, self.total + delta)
        return self.total

    def __str__(self) -> str:
        return format_money(self.total)


def format_money(copper: int, compact: bool = False) -> str:
    """
    Format money amount for display.

    Args:
        copper: Amount in copper (smallest unit)
        compact: If True, use short format (e.g., "1g 23s 4c")

    Returns:
        Formatted string like "1 gold, 23 silver, and 4 copper"
    """
    if copper <= 0:
        return "0c" if compact else "no money"

    wallet = Wallet(copper)
    amounts = [
        (CurrencyUnit.GOLD, wallet.gold),
        (CurrencyUnit.SILVER, wallet.silver),
        (CurrencyUnit.COPPER, wallet.copper),
    ]

    if compact:
        return " ".join(f"{amount}{CURRENCY_SHORT[unit]}" for unit, amount in amounts if amount)

    parts = [
        f"{amount} {CURRENCY_NAMES[unit][0 if amount == 1 else 1]}"
        for unit, amount in amounts
        if amount
    ]
    if len(parts) == 1:
        return parts[0]
    if len(parts) == 2:
        return f"{parts[0]} and {parts[1]}"
    return ", ".join(parts[:-1]) + f", and {parts[-1]}"


def parse_money(text: str) -> int | None:
    """
    Parse a money amount from text.

    Accepts formats like:
    - "100" (assumed copper)
    - "5 silver"
    - "2g 3s" (compact)
    - "1 gold, 5 silver and 2 copper"

    Returns:
        Amount in copper, or None if parsing fails
    """
    text = text.lower().strip()
    if not text:
        return None

    try:
        return max(0, int(text))
    except ValueError:
        pass

    total = 0
    parts = text.replace(",", " ").split()

    i = 0
    while i < len(parts):
        part = parts[i]

        if part == "and":
            i += 1
            continue

        # Compact format (e.g. "5s", "3c")
        if len(part) > 1 and part[:-1].isdigit():
            unit = next((u for u, short in CURRENCY_SHORT.items() if short == part[-1]), None)
            if unit is None:
                return None
            total += int(part[:-1]) * unit
            i += 1
            continue

        if part.isdigit() and i + 1 < len(parts) and parts[i + 1] in _UNIT_WORDS:
            total += int(part) * _UNIT_WORDS[parts[i + 1]]
            i += 2
            continue

        if part.isdigit():
            total += int(part)
            i += 1
            continue

        return None

    return total

"""Playing cards and the standard 52-card deck."""

from __future__ import annotations

from dataclasses import dataclass

RANKS: tuple[str, ...] = ("2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K", "A")
SUITS: tuple[str, ...] = ("h", "d", "c", "s")


@dataclass(frozen=True, order=True)
class Card:
    """A playing card identified by its rank text and one-letter suit.

    Ordering compares the rank text first and then the suit, as plain strings.
    """

    rank: str
    suit: str

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"


def make_deck() -> list[Card]:
    """Return a fresh, unshuffled deck: every suit of each rank, ranks ascending."""
    return [Card(rank, suit) for rank in RANKS for suit in SUITS]
"""Hand ranking for Texas Hold'em: best five cards out of hole and board cards."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from enum import IntEnum
from itertools import combinations

from headsup.cards import Card

RANK_VALUES: dict[str, int] = {
    "2": 2, "3": 3, "4": 4, "5": 5, "6": 6, "7": 7, "8": 8, "9": 9,
    "10": 10, "J": 11, "Q": 12, "K": 13, "A": 14,
}

# Scores are held as 32-bit signed integers and saturate at this value.
MAX_SCORE = 2**31 - 1

_RANK_WEIGHT = 10_000_000_000
_FIRST_MULTIPLIER = 100_000_000
_HAND_SIZE = 5


class HandRank(IntEnum):
    """Categories of five-card poker hands, weakest first."""

    HIGH_CARD = 0
    PAIR = 1
    TWO_PAIR = 2
    THREE_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_KIND = 7
    STRAIGHT_FLUSH = 8


def _value(card: Card) -> int:
    try:
        return RANK_VALUES[card.rank]
    except KeyError:
        raise ValueError(f"unknown card rank: {card.rank!r}") from None


class PokerEvaluator:
    """Scores poker hands so that a higher score is a better hand."""

    def evaluate_hand(self, hole_cards: Iterable[Card], community_cards: Iterable[Card]) -> int:
        """Return the best score of any five cards; 0 when fewer than five are given."""
        all_cards = [*hole_cards, *community_cards]
        if len(all_cards) < _HAND_SIZE:
            return 0
        return max(
            (self.evaluate_five_card_hand(combo) for combo in combinations(all_cards, _HAND_SIZE)),
            default=0,
        )

    def evaluate_five_card_hand(self, hand: Sequence[Card]) -> int:
        """Return the score of exactly the given cards."""
        values = sorted((_value(card) for card in hand), reverse=True)
        counts = Counter(values)
        # Ranks in descending order, each with its multiplicity.
        freq = sorted(counts.items(), key=lambda item: item[0], reverse=True)

        is_flush = self.check_flush(hand)
        straight_high = self.check_straight(hand)
        is_straight = straight_high is not None

        if is_flush and is_straight:
            return self.make_score(HandRank.STRAIGHT_FLUSH, [straight_high])

        for rank, count in freq:
            if count == 4:
                kicker = next((v for v in values if v != rank), 0)
                return self.make_score(HandRank.FOUR_KIND, [rank, kicker])

        triple = next((rank for rank, count in freq if count >= 3), 0)
        if triple:
            pair = next((rank for rank, count in freq if rank != triple and count >= 2), 0)
            if pair:
                return self.make_score(HandRank.FULL_HOUSE, [triple, pair])

        if is_flush:
            return self.make_score(HandRank.FLUSH, values)
        if is_straight:
            return self.make_score(HandRank.STRAIGHT, [straight_high])

        for rank, count in freq:
            if count == 3:
                kickers = [v for v in values if v != rank]
                return self.make_score(HandRank.THREE_KIND, [rank, *kickers[:2]])

        pairs = [rank for rank, count in freq if count >= 2]
        if len(pairs) >= 2:
            top, second = pairs[0], pairs[1]
            kicker = next((v for v in values if v not in (top, second)), 0)
            return self.make_score(HandRank.TWO_PAIR, [top, second, kicker])

        for rank, count in freq:
            if count == 2:
                kickers = [v for v in values if v != rank]
                return self.make_score(HandRank.PAIR, [rank, *kickers[:3]])

        return self.make_score(HandRank.HIGH_CARD, values)

    def make_score(self, hand_rank: int, values: Iterable[int]) -> int:
        """Pack a hand category and up to five tie-break values into one score.

        The result saturates at ``MAX_SCORE``.
        """
        score = int(hand_rank) * _RANK_WEIGHT
        multiplier = _FIRST_MULTIPLIER
        for value in values:
            if multiplier < 1:
                break
            score += value * multiplier
            multiplier //= 100
        return min(score, MAX_SCORE)

    def check_flush(self, hand: Sequence[Card]) -> bool:
        """True when the hand is non-empty and every card shares one suit."""
        if not hand:
            return False
        suit = hand[0].suit
        return all(card.suit == suit for card in hand)

    def check_straight(self, hand: Sequence[Card]) -> int | None:
        """Return the straight's high card value, or None if the five cards are no straight.

        The ace-low straight (A-2-3-4-5) has a high value of 5.
        """
        if len(hand) != _HAND_SIZE:
            return None
        values = sorted({_value(card) for card in hand})
        if len(values) < _HAND_SIZE:
            return None
        if all(b - a == 1 for a, b in zip(values, values[1:])):
            return values[-1]
        if values == [RANK_VALUES[r] for r in ("2", "3", "4", "5", "A")]:
            return 5
        return None
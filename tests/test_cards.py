import pytest

from headsup.cards import RANKS, SUITS, Card, make_deck


def test_card_str_joins_rank_and_suit():
    assert str(Card("10", "d")) == "10d"
    assert str(Card("A", "s")) == "As"


def test_deck_has_52_distinct_cards():
    deck = make_deck()
    assert len(deck) == 52
    assert len(set(deck)) == 52


def test_deck_covers_every_rank_and_suit():
    deck = make_deck()
    assert {(c.rank, c.suit) for c in deck} == {(r, s) for r in RANKS for s in SUITS}


def test_deck_order_groups_suits_within_each_rank():
    deck = make_deck()
    first_four = deck[:4]
    assert [c.rank for c in first_four] == [RANKS[0]] * 4
    assert [c.suit for c in first_four] == list(SUITS)
    assert deck[-1] == Card(RANKS[-1], SUITS[-1])


def test_make_deck_returns_independent_lists():
    a = make_deck()
    b = make_deck()
    a.pop()
    assert len(b) == 52
    assert a == b[:-1]


def test_card_equality_and_hash():
    assert Card("K", "h") == Card("K", "h")
    assert hash(Card("K", "h")) == hash(Card("K", "h"))
    assert Card("K", "h") != Card("K", "d")


def test_card_ordering_compares_rank_text_then_suit():
    # Rank comparison is lexical on the rank text.
    assert Card("10", "h") < Card("2", "h")
    assert Card("5", "c") < Card("5", "d")
    assert sorted([Card("9", "s"), Card("9", "c")]) == [Card("9", "c"), Card("9", "s")]


def test_card_is_immutable():
    card = Card("Q", "c")
    with pytest.raises(AttributeError):
        card.rank = "K"  # type: ignore[misc]
    assert card.rank == "Q"
    assert str(card) == "Qc"
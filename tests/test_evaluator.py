import re
from itertools import combinations

import pytest

from headsup.cards import Card
from headsup.evaluator import MAX_SCORE, HandRank, PokerEvaluator


def cards(text):
    result = []
    for token in text.split():
        match = re.fullmatch(r"(10|[2-9JQKA])([hdcs])", token)
        assert match, token
        result.append(Card(match.group(1), match.group(2)))
    return result


@pytest.fixture
def ev():
    return PokerEvaluator()


def test_hand_rank_order(ev):
    assert ev.make_score(HandRank.HIGH_CARD, []) == 0
    assert ev.make_score(HandRank.HIGH_CARD, [14]) == 1400000000
    assert ev.make_score(HandRank.STRAIGHT_FLUSH, []) == MAX_SCORE
    assert sorted(HandRank) == list(HandRank)


def test_fewer_than_five_cards_scores_zero(ev):
    assert ev.evaluate_hand(cards("Ah Kh"), cards("Qh Jh")) == 0
    assert ev.evaluate_hand([], []) == 0


def test_make_score_high_card_packing(ev):
    assert ev.make_score(HandRank.HIGH_CARD, [14, 13, 11, 9, 7]) == 1413110907


def test_make_score_ignores_values_beyond_five(ev):
    assert ev.make_score(0, [2, 3, 4, 5, 6, 7]) == ev.make_score(0, [2, 3, 4, 5, 6])


def test_make_score_saturates_for_made_hands(ev):
    assert ev.make_score(HandRank.PAIR, [2]) == MAX_SCORE
    assert ev.make_score(HandRank.STRAIGHT_FLUSH, [14]) == MAX_SCORE


def test_high_card_ordering(ev):
    ace_high = ev.evaluate_five_card_hand(cards("Ah 9d 7c 4s 2h"))
    king_high = ev.evaluate_five_card_hand(cards("Kh Qd Jc 9s 7h"))
    assert ace_high > king_high
    assert ace_high < MAX_SCORE


def test_kicker_breaks_high_card_tie(ev):
    better = ev.evaluate_five_card_hand(cards("Ah 9d 7c 4s 3h"))
    worse = ev.evaluate_five_card_hand(cards("Ad 9h 7s 4c 2d"))
    assert better > worse


def test_high_card_independent_of_card_order(ev):
    hand = cards("Ah 9d 7c 4s 2h")
    assert ev.evaluate_five_card_hand(hand) == ev.evaluate_five_card_hand(list(reversed(hand)))


def test_pair_scores_saturate(ev):
    assert ev.evaluate_five_card_hand(cards("2h 2d 7c 4s 9h")) == MAX_SCORE
    assert ev.evaluate_five_card_hand(cards("As Ks Qs Js 10s")) == MAX_SCORE


def test_check_flush(ev):
    assert ev.check_flush(cards("Ah 9h 7h 4h 2h")) is True
    assert ev.check_flush(cards("Ah 9h 7h 4h 2d")) is False
    assert ev.check_flush([]) is False


def test_check_straight_wheel(ev):
    assert ev.check_straight(cards("Ah 2d 3c 4s 5h")) == 5


def test_check_straight_broadway(ev):
    assert ev.check_straight(cards("10h Jd Qc Ks Ah")) == 14


def test_check_straight_rejects_non_straights(ev):
    assert ev.check_straight(cards("2h 3d 4c 5s 7h")) is None
    assert ev.check_straight(cards("2h 2d 3c 4s 5h")) is None
    assert ev.check_straight(cards("2h 3d 4c 5s")) is None
    assert ev.check_straight(cards("Kh Ad 2c 3s 4h")) is None


def test_unknown_rank_raises(ev):
    with pytest.raises(ValueError):
        ev.evaluate_five_card_hand([Card("1", "h")] + cards("2d 3c 4s 5h"))


def test_evaluate_hand_is_best_of_all_combinations(ev):
    hole = cards("Ah 3d")
    board = cards("Kc 9s 7h 5d 2c")
    best = max(ev.evaluate_five_card_hand(c) for c in combinations(hole + board, 5))
    assert ev.evaluate_hand(hole, board) == best
    assert ev.evaluate_hand(hole, board) == ev.evaluate_five_card_hand(cards("Ah Kc 9s 7h 5d"))


def test_evaluate_hand_at_least_each_five_card_subset(ev):
    hole = cards("Qh Jd")
    board = cards("8c 6s 4h 3d 2c")
    score = ev.evaluate_hand(hole, board)
    for combo in combinations(hole + board, 5):
        assert score >= ev.evaluate_five_card_hand(combo)
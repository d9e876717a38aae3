import io
import random

import pytest

from headsup.demo import main, play_random_game
from headsup.game import HUGame


def _play(seed, max_actions=50):
    out = io.StringIO()
    state = play_random_game(HUGame(), random.Random(seed), out, max_actions)
    return state, out.getvalue()


@pytest.mark.parametrize("seed", range(20))
def test_hand_finishes_with_zero_sum_returns(seed):
    state, _ = _play(seed)
    assert state.game_over is True
    returns = state.returns()
    assert sum(returns) == pytest.approx(0.0)
    assert all(r >= -state.game.initial_stack - 1e-9 for r in returns)


@pytest.mark.parametrize("seed", range(10))
def test_chips_are_conserved(seed):
    state, _ = _play(seed)
    game = state.game
    total = sum(state.players_stack) + state.total_pot()
    assert total == pytest.approx(game.initial_stack * game.num_players)


def test_log_structure():
    _, text = _play(7)
    assert text.startswith("Initial State:\n")
    assert "Final State:" in text
    assert "Returns: [" in text
    assert "chooses DEAL" in text


def test_same_seed_gives_same_log():
    _, first = _play(42)
    _, second = _play(42)
    assert first == second


def test_zero_actions_forces_end():
    state, text = _play(1, max_actions=0)
    assert "Max actions reached" in text
    assert state.game_over is True
    assert len(state.cards) == 4
    assert sum(state.returns()) == pytest.approx(0.0)


def test_single_action_deals_then_forces_end():
    state, text = _play(3, max_actions=1)
    assert "Game Turn: 1" in text
    assert "Game Turn: 2" not in text
    assert state.game_over is True


def test_main_prints_hand(capsys):
    assert main(["--seed", "5"]) == 0
    captured = capsys.readouterr().out
    assert "Initial State:" in captured
    assert "Returns: [" in captured


def test_main_respects_max_actions(capsys):
    assert main(["--seed", "5", "--max-actions", "0"]) == 0
    assert "Max actions reached" in capsys.readouterr().out
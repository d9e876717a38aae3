"""Betting actions and their text forms."""

from __future__ import annotations

from collections.abc import Iterable
from enum import IntEnum


class Action(IntEnum):
    """Everything that can happen at a decision or chance point of a hand."""

    UNKNOWN = -1
    DEAL = 0
    FOLD = 1
    CHECK = 2
    CALL = 3
    BET_RAISE = 4
    ALL_IN = 5
    POST_SB = 6
    POST_BB = 7


def action_to_string(action: Action | int, amount: float = 0.0) -> str:
    """Return the display name of an action.

    A bet or raise shows its amount with two decimals; values that are not a
    known action read as ``UNKNOWN``.
    """
    try:
        action = Action(action)
    except ValueError:
        return Action.UNKNOWN.name
    if action is Action.BET_RAISE:
        return f"{action.name}({amount:.2f})"
    return action.name


def format_actions(actions: Iterable[tuple[Action, float]]) -> str:
    """Render ``(action, amount)`` pairs as a bracketed, comma-separated list."""
    return "[" + ", ".join(action_to_string(action, amount) for action, amount in actions) + "]"


def format_rewards(rewards: Iterable[float]) -> str:
    """Render per-player rewards as a bracketed, comma-separated list."""
    return "[" + ", ".join(f"{reward:g}" for reward in rewards) + "]"
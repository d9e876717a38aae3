"""Plays one heads-up hand between two random agents and prints every step."""

from __future__ import annotations

import argparse
import random
import sys
from typing import TextIO

from headsup.actions import Action, action_to_string, format_actions, format_rewards
from headsup.game import HUGame, HUState

DEFAULT_MAX_ACTIONS = 50


def _choose_action(
    state: HUState,
    legal: list[tuple[Action, float]],
    rng: random.Random,
    out: TextIO,
) -> tuple[Action, float]:
    """Pick a random legal action type and turn it into a concrete action and amount."""
    chosen, _ = rng.choice(legal)
    out.write(f"Player {state.current_player()} considers {action_to_string(chosen)}")
    if chosen is not Action.BET_RAISE:
        return chosen, 0.0

    player = state.current_player()
    min_target = state.min_bet_raise_total_amount()
    max_target = state.max_bet_raise_total_amount()
    legal_types = {action for action, _ in legal}

    if min_target >= max_target and max_target > state.pot_contribution_this_round[player]:
        out.write(
            f" (effectively ALL_IN as min_bet_target={min_target:.2f}"
            f" >= max_bet_target={max_target:.2f})"
        )
        return Action.ALL_IN, 0.0
    if min_target < max_target:
        target = min_target
        if min_target + state.game.big_blind_amount <= max_target:
            target = min_target + state.game.big_blind_amount
        target = max(min(target, max_target), min_target)
        out.write(f" with total target contribution: {target:.2f}")
        return Action.BET_RAISE, target
    if state.players_stack[player] > 0 and Action.ALL_IN in legal_types:
        out.write(" (fallback to ALL_IN)")
        return Action.ALL_IN, 0.0
    if Action.CHECK in legal_types:
        out.write(" (fallback to CHECK)")
        return Action.CHECK, 0.0
    first = legal[0][0]
    out.write(f" (fallback to first legal: {action_to_string(first)})")
    return first, 0.0


def play_random_game(
    game: HUGame | None = None,
    rng: random.Random | None = None,
    out: TextIO | None = None,
    max_actions: int = DEFAULT_MAX_ACTIONS,
) -> HUState:
    """Play one hand with random agents, writing a log to ``out``; return the final state."""
    game = game if game is not None else HUGame()
    rng = rng if rng is not None else random.Random()
    out = out if out is not None else sys.stdout

    state = game.new_initial_state(rng)
    out.write(f"Initial State:\n{state.to_string()}\n")

    actions_taken = 0
    while not state.game_over and actions_taken < max_actions:
        actions_taken += 1
        out.write("\n-----------------------------------\n")
        out.write(f"Game Turn: {actions_taken}\n")
        out.write(state.to_string())

        legal = state.legal_actions()
        out.write(f"Legal actions for player {state.current_player()}: {format_actions(legal)}\n")

        if state.is_chance_node():
            out.write(f"Player {state.current_player()} (Chance Node) chooses DEAL\n")
            state.apply_action(Action.DEAL)
            continue

        if not legal:
            out.write(
                f"No legal actions available for player {state.current_player()}."
                " Game might be stuck or over.\n"
            )
            if not state.game_over:
                state.game_over = True
                state.advance_round_if_needed_to_showdown()
            break

        action, amount = _choose_action(state, legal, rng, out)
        out.write(f" -> Applying: {action_to_string(action)}\n")
        try:
            state.apply_action(action, amount if action is Action.BET_RAISE else 0.0)
        except (RuntimeError, ValueError) as exc:
            err = sys.stderr
            err.write(f"Error applying action: {exc}\n")
            err.write(f"Current state before error:\n{state.to_string()}\n")
            err.write(f"Applied action: {action_to_string(action)}\n")
            if action is Action.BET_RAISE:
                err.write(f"Bet amount: {amount:.2f}\n")
            break

    if actions_taken >= max_actions and not state.game_over:
        out.write("\nMax actions reached, game might be in a loop. Forcing end.\n")
        state.game_over = True
        state.advance_round_if_needed_to_showdown()

    out.write("\n===================================\n")
    out.write(f"Final State:\n{state.to_string()}\n")
    out.write(f"Returns: {format_rewards(state.returns())}\n")
    return state


def main(argv: list[str] | None = None) -> int:
    """Command-line entry point: play and print one random hand."""
    parser = argparse.ArgumentParser(description="Play one random heads-up Hold'em hand.")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    parser.add_argument(
        "--max-actions",
        type=int,
        default=DEFAULT_MAX_ACTIONS,
        help="safety limit on the number of steps",
    )
    args = parser.parse_args(argv)
    play_random_game(HUGame(), random.Random(args.seed), sys.stdout, args.max_actions)
    return 0


if __name__ == "__main__":
    sys.exit(main())
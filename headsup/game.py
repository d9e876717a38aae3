"""Heads-up no-limit Hold'em: game configuration and hand state."""

from __future__ import annotations

import math
import random
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from headsup.actions import Action, action_to_string
from headsup.cards import Card, make_deck
from headsup.evaluator import PokerEvaluator

EPS = 1e-5

PREFLOP = "preflop"
FLOP = "flop"
TURN = "turn"
RIVER = "river"
SHOWDOWN = "showdown"

_NEXT_ROUND = {PREFLOP: FLOP, FLOP: TURN, TURN: RIVER, RIVER: SHOWDOWN}
# Community cards still to come before the round after the key is reached.
_RUNOUT_LIMIT = {PREFLOP: 3, FLOP: 4, TURN: 5}
_BOARD_SIZE = {FLOP: 3, TURN: 4, RIVER: 5}
_NO_RECORD = (Action.DEAL, Action.POST_SB, Action.POST_BB)


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


def _num(value: float) -> str:
    return f"{value:g}"


@dataclass(frozen=True)
class HUGame:
    """Fixed parameters of a heads-up game."""

    num_players: int = 2
    initial_stack: float = 100.0
    small_blind_amount: float = 0.5
    big_blind_amount: float = 1.0
    rake_percentage: float = 0.07
    pot_fraction_bet_sizes: tuple[float, ...] = (0.33, 0.5, 0.75, 1.0)
    fixed_bet_sizes_bb: tuple[float, ...] = (2.5, 3.0, 4.0)
    all_in_threshold: float = 1.5
    force_all_in_threshold: float = 0.2
    merging_threshold: float = 0.1

    def new_initial_state(self, rng: random.Random | None = None) -> HUState:
        """Start a hand with blinds posted and a shuffled deck."""
        return HUState(self, rng)


class HUState:
    """The state of one hand: stacks, pot, cards and whose turn it is."""

    def __init__(self, game: HUGame, rng: random.Random | None = None) -> None:
        self.game = game
        self.rng = rng if rng is not None else random.Random()
        n = game.num_players
        sb, bb = game.small_blind_amount, game.big_blind_amount

        self.action_fixed_amounts: dict[Action, float] = {Action.POST_SB: sb, Action.POST_BB: bb}
        self.cumulative_pot = sb + bb
        self.active_players: set[int] = {0, 1}
        self.current_bet_to_match = bb

        self.current_round_bets: list[Action] = [Action.UNKNOWN] * n
        self.pot_contribution_this_round: list[float] = [0.0] * n
        self.players_stack: list[float] = [game.initial_stack] * n
        self.cumulative_pot_contribution: list[float] = [0.0] * n
        self.game_over = False

        self.pot_contribution_this_round[0] = sb
        self.players_stack[0] -= sb
        self.current_round_bets[0] = Action.POST_SB
        self.pot_contribution_this_round[1] = bb
        self.players_stack[1] -= bb
        self.current_round_bets[1] = Action.POST_BB

        self.next_player_idx = 0
        self.last_bet_or_raise_increment_this_round = bb
        self.last_aggressor_idx_this_round: int | None = 1

        self.cards: list[Card] = []
        self.community_cards: list[Card] = []
        self.round_action_history: dict[str, list[tuple[int, Action, float]]] = {}
        self.deck: list[Card] = make_deck()
        self.rng.shuffle(self.deck)
        self.round = PREFLOP

    @property
    def current_bet(self) -> float:
        """The contribution every active player must match this round."""
        return self.current_bet_to_match

    def fixed_amount(self, action: Action) -> float:
        """The fixed amount of a blind-posting action, 0.0 for anything else."""
        return self.action_fixed_amounts.get(action, 0.0)

    def current_player(self) -> int | None:
        """Index of the player to act, or None once the hand is over."""
        if self.game_over:
            return None
        return self.next_player_idx

    def is_chance_node(self) -> bool:
        """True when cards must be dealt before anyone can act."""
        if self.round == PREFLOP:
            return len(self.cards) < self.game.num_players * 2
        size = _BOARD_SIZE.get(self.round)
        return size is not None and len(self.community_cards) < size

    def _first_to_act(self) -> int:
        return 0 if 0 in self.active_players else 1

    def _burn_and_deal(self, count: int) -> None:
        if self.deck:
            self.deck.pop()
        for _ in range(count):
            if self.deck:
                self.community_cards.append(self.deck.pop())

    def deal_cards(self) -> None:
        """Deal whatever the current round is still missing."""
        board = len(self.community_cards)
        if self.round == PREFLOP and not self.cards:
            for _ in range(self.game.num_players):
                self.cards.append(self.deck.pop())
                self.cards.append(self.deck.pop())
            self.next_player_idx = 0
        elif self.round == FLOP and board == 0:
            self._burn_and_deal(3)
            self.next_player_idx = self._first_to_act()
        elif self.round == TURN and board == 3:
            self._burn_and_deal(1)
            self.next_player_idx = self._first_to_act()
        elif self.round == RIVER and board == 4:
            self._burn_and_deal(1)
            self.next_player_idx = self._first_to_act()

    def _require_player(self) -> int:
        player = self.current_player()
        if player is None:
            raise RuntimeError("the hand is over; no player is to act")
        return player

    def min_bet_raise_total_amount(self) -> float:
        """Smallest total contribution this round for a bet or raise by the player to act."""
        player = self._require_player()
        if self.current_bet_to_match == 0.0:
            return self.pot_contribution_this_round[player] + self.game.big_blind_amount
        return self.current_bet_to_match + self.last_bet_or_raise_increment_this_round

    def max_bet_raise_total_amount(self) -> float:
        """Total contribution this round if the player to act goes all in."""
        player = self._require_player()
        return self.pot_contribution_this_round[player] + self.players_stack[player]

    def legal_actions(
        self,
        pot_fraction_bet_sizes: Iterable[float] | None = None,
        fixed_bet_sizes_bb: Iterable[float] | None = None,
    ) -> list[tuple[Action, float]]:
        """Return the (action, amount) pairs open to the player to act, sorted.

        CALL carries the amount to call, ALL_IN the remaining stack and
        BET_RAISE the total contribution for the round it would reach.
        """
        if pot_fraction_bet_sizes is None:
            pot_fraction_bet_sizes = self.game.pot_fraction_bet_sizes
        if fixed_bet_sizes_bb is None:
            fixed_bet_sizes_bb = self.game.fixed_bet_sizes_bb
        if self.game_over:
            return []
        if self.is_chance_node():
            return [(Action.DEAL, 0.0)]

        player = self.current_player()
        if player is None or player not in self.active_players:
            return []

        sb, bb = self.game.small_blind_amount, self.game.big_blind_amount
        stack = self.players_stack[player]
        contrib = self.pot_contribution_this_round[player]
        to_call = self.current_bet_to_match - contrib
        if stack <= EPS and to_call > EPS:
            return []

        can_check = to_call <= EPS
        legal: list[tuple[Action, float]] = []
        if can_check:
            legal.append((Action.CHECK, 0.0))
            if self.current_bet_to_match > EPS and stack > EPS:
                legal.append((Action.FOLD, 0.0))
        else:
            if stack > EPS:
                legal.append((Action.FOLD, 0.0))
            if stack > EPS and to_call < stack - EPS:
                legal.append((Action.CALL, to_call))

        if stack > EPS:
            all_in_total = contrib + stack
            opening = self.current_bet_to_match == 0
            last_inc = self.last_bet_or_raise_increment_this_round
            if opening:
                min_target = contrib + bb
            else:
                min_target = self.current_bet_to_match + max(bb, last_inc)

            legal.append((Action.ALL_IN, stack))

            if all_in_total > min_target + EPS:
                pot = self.total_pot()
                targets: list[float] = []
                for fraction in pot_fraction_bet_sizes:
                    if opening:
                        targets.append(contrib + max(pot * fraction, bb))
                    else:
                        pot_if_called = pot + max(0.0, to_call)
                        extra = max(pot_if_called * fraction, max(bb, last_inc))
                        targets.append(self.current_bet_to_match + extra)
                targets.extend(multiple * bb for multiple in fixed_bet_sizes_bb)

                seen: set[float] = set()
                for raw in targets:
                    target = _round_half_away(raw / sb) * sb
                    if (
                        target >= min_target - EPS
                        and target < all_in_total - EPS
                        and target - contrib <= stack + EPS
                        and target not in seen
                        and target - contrib > EPS
                    ):
                        legal.append((Action.BET_RAISE, target))
                        seen.add(target)

        if can_check and stack <= EPS:
            legal = [entry for entry in legal if entry[0] is not Action.FOLD]

        result: list[tuple[Action, float]] = []
        for action, amount in sorted(legal, key=lambda entry: (entry[0], entry[1])):
            if result and result[-1][0] == action and abs(result[-1][1] - amount) < EPS:
                continue
            result.append((action, amount))
        return result

    def betting_round_complete(self) -> bool:
        """True when nobody still has to act in the current betting round."""
        if len(self.active_players) <= 1:
            return True

        bb = self.game.big_blind_amount
        if self.round == PREFLOP and self.current_bet_to_match == bb:
            if self.pot_contribution_this_round[0] == bb:
                if self.next_player_idx == 1:
                    return False
                if self.current_round_bets[1] is Action.CHECK:
                    return True

        for p in sorted(self.active_players):
            if (
                self.players_stack[p] > 0
                and self.pot_contribution_this_round[p] < self.current_bet_to_match
            ):
                return False

        if self.current_bet_to_match < EPS and all(
            self.current_round_bets[p] is Action.CHECK for p in self.active_players
        ):
            return True

        return (
            self.last_aggressor_idx_this_round is not None
            and self.next_player_idx == self.last_aggressor_idx_this_round
        )

    def advance_to_next_player(self) -> None:
        """Pass the turn to the other active player."""
        if not self.active_players:
            self.game_over = True
            return
        for p in sorted(self.active_players):
            if p != self.next_player_idx:
                self.next_player_idx = p
                return
        if len(self.active_players) == 1:
            self.next_player_idx = min(self.active_players)

    def _collect_round(self) -> None:
        for p, contribution in enumerate(self.pot_contribution_this_round):
            self.cumulative_pot_contribution[p] += contribution
        self.pot_contribution_this_round = [0.0] * self.game.num_players
        self.current_bet_to_match = 0.0
        self.last_bet_or_raise_increment_this_round = 0.0
        self.last_aggressor_idx_this_round = None

    def advance_round(self) -> None:
        """Close the betting round and move on to the next street."""
        self._collect_round()
        self.current_round_bets = [Action.UNKNOWN] * self.game.num_players
        self.round = _NEXT_ROUND.get(self.round, self.round)

        if self.round != SHOWDOWN:
            if 0 in self.active_players:
                self.next_player_idx = 0
            elif 1 in self.active_players:
                self.next_player_idx = 1
            else:
                self.game_over = True

    def should_end_game(self) -> bool:
        """True when no more betting can take place."""
        if len(self.active_players) <= 1 or self.round == SHOWDOWN:
            return True
        return all(self.players_stack[p] <= 0 for p in self.active_players)

    def apply_action(self, action: Action, amount: float = 0.0) -> None:
        """Apply an action for the player to act, or DEAL at a chance node.

        For BET_RAISE ``amount`` is the total contribution for the round the
        player wants to reach; a bet that takes the whole stack becomes ALL_IN.
        """
        action = Action(action)
        if self.is_chance_node():
            if action is not Action.DEAL:
                raise ValueError("invalid action on a chance node; expected DEAL")
            self.deal_cards()
            return

        player = self._require_player()
        self.current_round_bets[player] = action
        history_amount = 0.0
        stack = self.players_stack[player]
        contrib = self.pot_contribution_this_round[player]

        if action is Action.FOLD:
            self.active_players.discard(player)
            if len(self.active_players) <= 1:
                self.game_over = True
        elif action is Action.CALL:
            to_put = self.current_bet_to_match - contrib
            if to_put >= stack:
                to_put = stack
                self.current_round_bets[player] = Action.ALL_IN
                action = Action.ALL_IN
            history_amount = to_put
            self.pot_contribution_this_round[player] += to_put
            self.players_stack[player] -= to_put
        elif action is Action.ALL_IN:
            history_amount = stack
            total = contrib + stack
            if total > self.current_bet_to_match:
                self.last_bet_or_raise_increment_this_round = total - self.current_bet_to_match
                self.current_bet_to_match = total
                self.last_aggressor_idx_this_round = player
            self.pot_contribution_this_round[player] = total
            self.players_stack[player] = 0.0
        elif action is Action.BET_RAISE:
            target = amount
            to_put = target - contrib
            history_amount = to_put
            if to_put >= stack - EPS:
                to_put = stack
                history_amount = stack
                self.current_round_bets[player] = Action.ALL_IN
                action = Action.ALL_IN
                target = contrib + stack
            previous_bet = self.current_bet_to_match
            self.pot_contribution_this_round[player] += to_put
            self.players_stack[player] -= to_put
            self.current_bet_to_match = target
            self.last_aggressor_idx_this_round = player
            increment = target if previous_bet < EPS else target - previous_bet
            self.last_bet_or_raise_increment_this_round = max(increment, 0.0)

        self.cumulative_pot = sum(self.pot_contribution_this_round) + sum(
            self.cumulative_pot_contribution
        )

        if action not in _NO_RECORD:
            self.round_action_history.setdefault(self.round, []).append(
                (player, self.current_round_bets[player], history_amount)
            )

        if self.game_over:
            self.advance_round_if_needed_to_showdown()
            return

        self.advance_to_next_player()
        if self.betting_round_complete():
            self.advance_round()
            if self.should_end_game():
                self.advance_round_if_needed_to_showdown()
                self.game_over = True

    def advance_round_if_needed_to_showdown(self) -> None:
        """Run the board out while every remaining player is all in, then end the hand."""
        while self.round != SHOWDOWN and len(self.active_players) > 1:
            all_in = all(self.players_stack[p] <= 0 for p in self.active_players)
            limit = _RUNOUT_LIMIT.get(self.round)
            if limit is not None and len(self.community_cards) < limit:
                self.deal_cards()
            if not all_in:
                break
            self._collect_round()
            self.round = _NEXT_ROUND[self.round]
        self.game_over = True

    def returns(self) -> list[float]:
        """Net chips won or lost by each player; all zeros until the hand is over."""
        n = self.game.num_players
        if not self.game_over:
            return [0.0] * n

        totals = [
            cum + this if this > 0 else cum
            for cum, this in zip(self.cumulative_pot_contribution, self.pot_contribution_this_round)
        ]
        pot = sum(totals)

        if len(self.active_players) == 1:
            (winner,) = self.active_players
            return [pot - totals[p] if p == winner else -totals[p] for p in range(n)]

        evaluator = PokerEvaluator()
        scores = {
            p: evaluator.evaluate_hand(
                [self.cards[2 * p], self.cards[2 * p + 1]], self.community_cards
            )
            for p in sorted(self.active_players)
        }
        best = max(scores.values())
        winners = sum(1 for score in scores.values() if score == best)
        prize = pot / winners
        return [
            prize - totals[p] if scores.get(p) == best else -totals[p] for p in range(n)
        ]

    def _hole_cards(self, player: int) -> str:
        if len(self.cards) >= (player + 1) * 2:
            return f"{self.cards[player * 2]}{self.cards[player * 2 + 1]}"
        return ""

    def to_string(self, show_cards: bool = True) -> str:
        """Multi-line description of the state; hole cards only when ``show_cards``."""
        lines = [f"Round: {self.round}"]
        lines.append("Community Cards: " + "".join(f"{card} " for card in self.community_cards))
        lines.append("Players:")
        for p in range(self.game.num_players):
            line = (
                f"  Player {p}: Stack={_num(self.players_stack[p])}"
                f", PotContRound={_num(self.pot_contribution_this_round[p])}"
                f", CumPotCont={_num(self.cumulative_pot_contribution[p])}"
            )
            hole = self._hole_cards(p)
            if show_cards and hole:
                line += f", Cards={hole}"
            if p in self.active_players:
                line += " (Active)"
            lines.append(line)
        aggressor = self.last_aggressor_idx_this_round
        lines.append(f"Current Bet to Match: {_num(self.current_bet_to_match)}")
        lines.append(f"Last Raise Inc: {_num(self.last_bet_or_raise_increment_this_round)}")
        lines.append(f"Last Aggressor: {-1 if aggressor is None else aggressor}")
        lines.append(f"Next Player: {self.next_player_idx}")
        lines.append(f"Status: {'Game Over' if self.game_over else 'In Progress'}")
        lines.append(f"Is Chance Node: {'Yes' if self.is_chance_node() else 'No'}")
        lines.append("")
        lines.append("Round Action History:")
        for name in sorted(self.round_action_history):
            entries = "".join(
                f"[P{p} {action_to_string(act, amt)}] "
                for p, act, amt in self.round_action_history[name]
            )
            lines.append(f"  {name}: {entries}")
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.to_string()

    def player_hole_cards_str(self, player_idx: int, full_info: bool = True) -> str:
        """A player's hole cards, "??" when hidden, empty before the deal."""
        if not full_info and player_idx != self.current_player() and not self.game_over:
            return "??"
        return self._hole_cards(player_idx)

    def community_cards_str(self) -> str:
        """The board, each card followed by a space."""
        return "".join(f"{card} " for card in self.community_cards)

    def total_pot(self) -> float:
        """Everything put in by both players in all rounds so far."""
        return sum(self.cumulative_pot_contribution) + sum(self.pot_contribution_this_round)

    def calculate_spr_after_call(self, bet_total_contribution: float, opponent_idx: int) -> float:
        """Opponent's stack-to-pot ratio once the player to act puts in the given total."""
        player = self._require_player()
        pot_after_call = self.total_pot() + (
            bet_total_contribution - self.pot_contribution_this_round[player]
        )
        return self.players_stack[opponent_idx] / pot_after_call

    def merge_bet_sizes(
        self, bet_sizes: Sequence[float], merging_threshold: float | None = None
    ) -> list[float]:
        """Drop bet sizes too close, relative to the pot, to a larger one kept."""
        if merging_threshold is None:
            merging_threshold = self.game.merging_threshold
        pot = self.total_pot()
        remaining = sorted(bet_sizes, reverse=True)
        merged: list[float] = []
        while remaining:
            size = remaining.pop(0)
            merged.append(size)
            x_percent = size / pot * 100.0
            remaining = [
                other
                for other in remaining
                if not (100.0 + x_percent) / (100.0 + other / pot * 100.0) < 1.0 + merging_threshold
            ]
        return merged
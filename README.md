# headsup

A small engine for two-player (heads-up) no-limit Texas Hold'em. It covers
posting the blinds, dealing, betting rounds, legal-action generation with
pot-fraction and fixed big-blind bet sizes, all-in handling and running the
board out, showdown with a best-five-of-seven hand evaluator, and
per-player returns.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `headsup.cards`: `Card` (rank text and one-letter suit; `str(card)` gives
  e.g. `"10h"`) and `make_deck()`, an unshuffled 52-card deck.
- `headsup.evaluator`: `PokerEvaluator` and the `HandRank` categories.
- `headsup.actions`: the `Action` enum, `action_to_string()`,
  `format_actions()` and `format_rewards()`.
- `headsup.game`: `HUGame` (table settings) and `HUState` (one hand).
- `headsup.demo`: `play_random_game()` and the `headsup-demo` command.

## Playing a hand in code

```python
import random

from headsup.game import HUGame
from headsup.actions import Action, format_actions, format_rewards

game = HUGame()
state = game.new_initial_state(random.Random(7))

while not state.game_over:
    if state.is_chance_node():
        state.apply_action(Action.DEAL)
        continue
    legal = state.legal_actions()
    print(format_actions(legal))
    action, amount = random.choice(legal)
    state.apply_action(action, amount)

print(state.to_string())
print(format_rewards(state.returns()))
```

`HUGame` is a frozen dataclass holding the table settings: number of
players (2), starting stack (100), small blind (0.5), big blind (1.0),
pot-fraction bet sizes (0.33, 0.5, 0.75, 1.0), fixed sizes in big blinds
(2.5, 3, 4), a rake percentage and a merging threshold (0.1) used by
`HUState.merge_bet_sizes()`. `new_initial_state()` takes an optional
`random.Random` used to shuffle the deck.

`HUState.legal_actions()` uses the game's bet sizes unless others are
passed. It returns sorted `(Action, amount)` pairs: `CALL` carries the
amount to call, `ALL_IN` the remaining stack, and `BET_RAISE` the total the
player would have put in during the current round. `apply_action()` takes
the same total for a `BET_RAISE`; a bet that would take the whole stack is
recorded as `ALL_IN`. Applying anything but `DEAL` at a chance node raises
`ValueError`; acting once the hand is over raises `RuntimeError`.
`current_player()` returns `None` once the hand is over.

Other helpers on `HUState`: `total_pot()`, `min_bet_raise_total_amount()`,
`max_bet_raise_total_amount()`, `calculate_spr_after_call()`,
`player_hole_cards_str()`, `community_cards_str()` and `to_string()`.

## Evaluating hands

```python
from headsup.cards import Card
from headsup.evaluator import PokerEvaluator

evaluator = PokerEvaluator()
hole = [Card("A", "h"), Card("A", "d")]
board = [Card("K", "c"), Card("K", "s"), Card("2", "h")]
score = evaluator.evaluate_hand(hole, board)
```

A higher score means a stronger hand; equal scores split the pot. Fewer
than five cards score 0. `check_straight()` returns the straight's high card
value (5 for the ace-low straight) or `None`.

## Demo

The `headsup-demo` command plays one hand between two random agents and
prints every state, the chosen actions and the final returns:

```
headsup-demo
headsup-demo --seed 42 --max-actions 50
```

`--seed` makes the deck and the agents' choices repeatable; `--max-actions`
limits the number of steps before the hand is forced to an end. The same
game can be run from code with `headsup.demo.play_random_game(game, rng,
out, max_actions)`, which returns the final `HUState`.

## What it does not do

- There is no interactive play: the demo's agents choose at random, and no
  command asks a person for moves.
- The rake percentage is stored on `HUGame` but is not taken from the pot in
  `returns()`.
- Only two players are supported; there are no side pots.
"""Heads-up no-limit Texas Hold'em: cards, hand evaluation, game state and a random-play demo."""

__version__ = "0.1.0"
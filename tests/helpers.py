"""Deterministic deck helpers shared by the tests."""

from random import Random

from core.cards import Deck


class StackedRandom(Random):
    """Random source that never shuffles and always draws the first remaining card."""

    def randrange(self, *args, **kwargs) -> int:
        return 0

    def shuffle(self, x, *args, **kwargs) -> None:
        return None


def stacked_deck(*tokens: str) -> Deck:
    """A deck that deals ``tokens`` in the given order."""
    return Deck.from_tokens(tokens, rng=StackedRandom())

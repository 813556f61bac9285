"""Cards, hands and the blackjack session engine."""

from core.cards import Card, Deck, Face, Suit
from core.hand import Hand

__all__ = [
    "Card",
    "Deck",
    "Face",
    "Suit",
    "Hand",
]

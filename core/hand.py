"""Hand scoring for blackjack."""

from dataclasses import dataclass, field
from typing import Iterable, Iterator

from core.cards import Card

BLACKJACK = 21


@dataclass
class Hand:
    """The ordered cards held by one party, player or dealer."""

    cards: list[Card] = field(default_factory=list)

    @classmethod
    def from_tokens(cls, tokens: Iterable[str]) -> "Hand":
        """Rebuild a hand from exported tokens."""
        return cls(cards=[Card.parse(token) for token in tokens])

    def add_card(self, card: Card) -> None:
        """Add a card to the hand."""
        self.cards.append(card)

    @property
    def score(self) -> int:
        """
        Calculate the hand score.

        Only the first ace may count as 11, and only while the other cards
        total 10 or less. Every further ace counts as 1.
        """
        total = 0
        aces = 0

        for card in self:
            if card.is_ace:
                aces += 1
            else:
                total += card.value

        if aces:
            total += 11 if total <= 10 else 1
            total += aces - 1

        return total

    @property
    def is_busted(self) -> bool:
        """Check if the hand has busted (score > 21)."""
        return self.score > BLACKJACK

    def tokens(self) -> list[str]:
        """Return the cards as ordered tokens."""
        return [card.render() for card in self]

    def export(self) -> tuple[int, list[str]]:
        """Return ``(score, tokens)`` for persistence and responses."""
        return self.score, self.tokens()

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = ", ".join(str(card) for card in self.cards)
        return f"{cards_str} ({self.score})"

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, score={self.score})"

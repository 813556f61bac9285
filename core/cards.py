"""Card and Deck classes - immutable card representations and their tokens."""

from dataclasses import dataclass
from enum import Enum
from random import Random
from typing import Iterable, Iterator

from core.errors import NoSeparatorError, UnknownFaceError, UnknownSuitError

TOKEN_SEPARATOR = ":"


class Suit(Enum):
    """Card suits, valued by their token text."""

    HEARTS = "HEARTS"
    SPADES = "SPADES"
    CLUBS = "CLUBS"
    DIAMONDS = "DIAMONDS"

    def __str__(self) -> str:
        return self.value.title()


class Face(Enum):
    """Card faces, valued by their token text."""

    ACE = "ACE"
    TWO = "TWO"
    THREE = "THREE"
    FOUR = "FOUR"
    FIVE = "FIVE"
    SIX = "SIX"
    SEVEN = "SEVEN"
    EIGHT = "EIGHT"
    NINE = "NINE"
    TEN = "TEN"
    JACK = "JACK"
    QUEEN = "QUEEN"
    KING = "KING"
    # Parseable, but never dealt
    JOKER = "JOKER"

    def __str__(self) -> str:
        return self.value.title()

    @property
    def blackjack_value(self) -> int:
        """Return the blackjack point value (Ace = 11, court cards and Joker = 10)."""
        return _FACE_VALUES[self]

    @property
    def is_ace(self) -> bool:
        """Check if this face is an Ace."""
        return self is Face.ACE


_FACE_VALUES: dict[Face, int] = {
    Face.ACE: 11,
    Face.TWO: 2,
    Face.THREE: 3,
    Face.FOUR: 4,
    Face.FIVE: 5,
    Face.SIX: 6,
    Face.SEVEN: 7,
    Face.EIGHT: 8,
    Face.NINE: 9,
    Face.TEN: 10,
    Face.JACK: 10,
    Face.QUEEN: 10,
    Face.KING: 10,
    Face.JOKER: 10,
}

STANDARD_FACES: tuple[Face, ...] = tuple(f for f in Face if f is not Face.JOKER)


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    suit: Suit
    face: Face

    def __str__(self) -> str:
        return f"{self.face} of {self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.suit.name}, {self.face.name})"

    @property
    def value(self) -> int:
        """Return the blackjack point value."""
        return self.face.blackjack_value

    @property
    def is_ace(self) -> bool:
        """Check if this card is an Ace."""
        return self.face.is_ace

    def render(self) -> str:
        """Return the canonical ``SUIT:FACE`` token, e.g. ``HEARTS:ACE``."""
        return f"{self.suit.value}{TOKEN_SEPARATOR}{self.face.value}"

    @classmethod
    def parse(cls, token: str) -> "Card":
        """
        Create a card from a ``SUIT:FACE`` token, ignoring case.

        Raises:
            NoSeparatorError: the token has no ``:``
            UnknownFaceError: the face part is not a known face
            UnknownSuitError: the suit part is not a known suit
        """
        text = token.strip().upper()
        suit_str, separator, face_str = text.rpartition(TOKEN_SEPARATOR)
        if not separator:
            raise NoSeparatorError(token)

        try:
            face = Face(face_str)
        except ValueError:
            raise UnknownFaceError(token) from None
        try:
            suit = Suit(suit_str)
        except ValueError:
            raise UnknownSuitError(token) from None

        return cls(suit, face)


def standard_cards() -> list[Card]:
    """Return the 52 standard cards in suit then face order."""
    return [Card(suit, face) for suit in Suit for face in STANDARD_FACES]


class Deck:
    """A 52-card deck drawn from at random positions."""

    def __init__(self, rng: Random | None = None, shuffle: bool = True) -> None:
        """
        Initialize a full standard deck.

        Args:
            rng: Random source used for shuffling and drawing
            shuffle: Shuffle the cards right away
        """
        self._rng = rng or Random()
        self._cards: list[Card] = standard_cards()
        if shuffle:
            self.shuffle()

    @classmethod
    def from_tokens(cls, tokens: Iterable[str], rng: Random | None = None) -> "Deck":
        """Rebuild a deck from exported tokens, keeping their order."""
        deck = cls(rng=rng, shuffle=False)
        deck._cards = [Card.parse(token) for token in tokens]
        return deck

    def shuffle(self) -> None:
        """Shuffle the remaining cards."""
        self._rng.shuffle(self._cards)

    def draw(self) -> Card | None:
        """Remove and return a random remaining card, or None when empty."""
        if not self._cards:
            return None
        return self._cards.pop(self._rng.randrange(len(self._cards)))

    def export(self) -> list[str]:
        """Return the remaining cards as ordered tokens."""
        return [card.render() for card in self]

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards remaining."""
        return len(self._cards)

"""Pytest fixtures for blackjack session tests."""

import pytest
from random import Random

from api.session import InMemorySessionStore, set_session_store
from core.cards import Card, Deck, Face, Suit
from core.game import BlackjackGame
from core.hand import Hand
from tests.helpers import StackedRandom, stacked_deck


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def stacked_rng():
    """Random source drawing cards in stored order."""
    return StackedRandom()


@pytest.fixture
def deck(rng):
    """A shuffled deck."""
    return Deck(rng=rng)


@pytest.fixture
def empty_hand():
    """An empty hand."""
    return Hand()


@pytest.fixture
def soft_21_hand():
    """Ace and Ten."""
    return Hand([Card(Suit.SPADES, Face.ACE), Card(Suit.HEARTS, Face.TEN)])


@pytest.fixture
def hard_16_hand():
    """A hard 16 hand (10-6)."""
    return Hand([Card(Suit.SPADES, Face.TEN), Card(Suit.HEARTS, Face.SIX)])


@pytest.fixture
def store():
    """A fresh in-memory record store, also installed as the API's store."""
    store = InMemorySessionStore()
    set_session_store(store)
    yield store
    set_session_store(None)


@pytest.fixture
def make_game(store):
    """
    Build a game from face names without touching the store.

    Cards are given as face names (``"TEN"``); suits are filled in as Spades
    for the player, Hearts for the dealer and Clubs for the deck.
    """

    def _make(
        player: list[str],
        dealer: list[str],
        deck: list[str] | None = None,
        bet: int = 50,
        player_stay: bool = False,
        dealer_stay: bool = False,
    ) -> BlackjackGame:
        return BlackjackGame(
            store,
            player_id=1,
            bet=bet,
            deck=stacked_deck(*(f"CLUBS:{face}" for face in deck or [])),
            player=Hand.from_tokens(f"SPADES:{face}" for face in player),
            dealer=Hand.from_tokens(f"HEARTS:{face}" for face in dealer),
            player_stay=player_stay,
            dealer_stay=dealer_stay,
        )

    return _make

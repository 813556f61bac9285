"""Unit of work around a single game operation.

Each request restores (or creates) one game, runs one operation on it, and
must then save it, or remove it once the payout was claimed. These context
managers run that last step in a ``finally`` block so it happens on every
exit path, including when the operation itself raised.
"""

from contextlib import asynccontextmanager
from random import Random
from typing import AsyncIterator

from core.cards import Deck
from core.game.engine import BlackjackGame
from core.game.record import RecordStore


@asynccontextmanager
async def game_session(
    store: RecordStore,
    player_id: int,
    rng: Random | None = None,
) -> AsyncIterator[BlackjackGame]:
    """Restore a player's game for one operation, then save or remove it."""
    game = await BlackjackGame.restore(store, player_id, rng=rng)
    try:
        yield game
    finally:
        await game.finalize()


@asynccontextmanager
async def new_game_session(
    store: RecordStore,
    player_id: int,
    bet: int,
    deck: Deck | None = None,
    rng: Random | None = None,
) -> AsyncIterator[BlackjackGame]:
    """Create a player's game for one operation, then save or remove it."""
    game = await BlackjackGame.create(store, player_id, bet, deck=deck, rng=rng)
    try:
        yield game
    finally:
        await game.finalize()

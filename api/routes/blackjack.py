"""Blackjack session API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Path

from api.schemas import GameResponse, SessionCountResponse
from api.session import get_session_store
from core.game import game_session, new_game_session

router = APIRouter()

PlayerId = Annotated[int, Path(ge=0, description="Player identifier")]
Bet = Annotated[int, Path(ge=1, description="Bet amount")]


@router.get("/")
async def active_sessions() -> SessionCountResponse:
    """Count games still in progress."""
    store = await get_session_store()
    return SessionCountResponse(count=await store.count_in_progress())


@router.get("/{player_id}")
async def user_info(player_id: PlayerId) -> GameResponse:
    """Get the player's current game."""
    store = await get_session_store()
    async with game_session(store, player_id) as game:
        return GameResponse.from_game(game)


@router.post("/{player_id}/create/{bet}")
async def create_game(player_id: PlayerId, bet: Bet) -> GameResponse:
    """Start a new game with a bet."""
    store = await get_session_store()
    async with new_game_session(store, player_id, bet) as game:
        return GameResponse.from_game(game)


@router.post("/{player_id}/hit")
async def player_hit(player_id: PlayerId) -> GameResponse:
    """Player takes another card."""
    store = await get_session_store()
    async with game_session(store, player_id) as game:
        game.player_hit()
        return GameResponse.from_game(game)


@router.post("/{player_id}/stay")
async def player_stay(player_id: PlayerId) -> GameResponse:
    """Player stays and the dealer plays out its hand."""
    store = await get_session_store()
    async with game_session(store, player_id) as game:
        game.player_stay()
        return GameResponse.from_game(game)


@router.post("/{player_id}/claim")
async def claim(player_id: PlayerId) -> GameResponse:
    """Settle a finished game and close the session."""
    store = await get_session_store()
    async with game_session(store, player_id) as game:
        game.claim()
        return GameResponse.from_game(game)

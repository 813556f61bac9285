"""Pydantic schemas for API responses."""

from pydantic import BaseModel

from core.game import BlackjackGame
from core.hand import Hand


class HandResponse(BaseModel):
    """Hand representation."""

    score: int
    cards: list[str]

    @classmethod
    def from_hand(cls, hand: Hand) -> "HandResponse":
        score, cards = hand.export()
        return cls(score=score, cards=cards)


class GameResponse(BaseModel):
    """Current state of a player's game."""

    player_id: int
    bet: int
    status: str
    first_turn: bool
    player_stay: bool
    dealer_stay: bool
    gain: int
    player_hand: HandResponse
    dealer_hand: HandResponse

    @classmethod
    def from_game(cls, game: BlackjackGame) -> "GameResponse":
        return cls(
            player_id=game.player_id,
            bet=game.bet,
            status=game.status.name,
            first_turn=game.first_turn,
            player_stay=game.player_stay_status,
            dealer_stay=game.dealer_stay_status,
            gain=game.gain,
            player_hand=HandResponse.from_hand(game.player),
            dealer_hand=HandResponse.from_hand(game.dealer),
        )


class SessionCountResponse(BaseModel):
    """Number of games still in progress."""

    count: int


class ErrorResponse(BaseModel):
    """Structured failure."""

    kind: str
    message: str

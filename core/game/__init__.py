"""Game engine, session record and unit of work."""

from core.game.state import GameState
from core.game.record import RecordStore, SessionRecord
from core.game.engine import BlackjackGame
from core.game.session import game_session, new_game_session

__all__ = [
    "GameState",
    "RecordStore",
    "SessionRecord",
    "BlackjackGame",
    "game_session",
    "new_game_session",
]

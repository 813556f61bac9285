"""Game state enumeration."""

from enum import Enum, auto


class GameState(Enum):
    """
    Session outcome states.

    There is no separate bust state: a bust is resolved into a win or a
    loss by the status rules of ``BlackjackGame.status``.
    """

    IN_PROGRESS = auto()
    PLAYER_WON = auto()
    PLAYER_LOST = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()

    @property
    def is_over(self) -> bool:
        """Check if the game has reached a terminal state."""
        return self is not GameState.IN_PROGRESS

    @property
    def outcome(self) -> bool | None:
        """Return the persisted outcome flag (None while in progress)."""
        if self is GameState.IN_PROGRESS:
            return None
        return self is GameState.PLAYER_WON

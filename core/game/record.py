"""Persisted session record and the record store interface."""

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass
class SessionRecord:
    """
    Stored form of one player's game.

    A record without a ``bet`` cannot be resumed; ``outcome`` is None while
    the game is in progress, True when the player won and False when the
    player lost.
    """

    player_id: int
    bet: int | None = None
    outcome: bool | None = None
    deck: list[str] = field(default_factory=list)
    player_hand: list[str] = field(default_factory=list)
    dealer_hand: list[str] = field(default_factory=list)
    player_stay: bool = False
    dealer_stay: bool = False
    first_turn: bool = True

    @property
    def in_progress(self) -> bool:
        """Check if the recorded game has no outcome yet."""
        return self.outcome is None

    def to_dict(self) -> dict[str, Any]:
        """Serialize for storage."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SessionRecord":
        """Deserialize from storage."""
        return cls(
            player_id=int(data["player_id"]),
            bet=data["bet"],
            outcome=data["outcome"],
            deck=list(data["deck"]),
            player_hand=list(data["player_hand"]),
            dealer_hand=list(data["dealer_hand"]),
            player_stay=data["player_stay"],
            dealer_stay=data["dealer_stay"],
            first_turn=data["first_turn"],
        )


class RecordStore(ABC):
    """
    Abstract store holding at most one record per player id.

    Implementations raise ``StorageError`` for any backend failure and must
    make each player's reads observe that player's latest write.
    """

    @abstractmethod
    async def get(self, player_id: int) -> SessionRecord | None:
        """Get the record for a player."""
        ...

    @abstractmethod
    async def upsert(self, record: SessionRecord) -> SessionRecord:
        """Insert or replace the record for ``record.player_id``."""
        ...

    @abstractmethod
    async def delete(self, player_id: int) -> None:
        """Delete the record for a player (no-op when absent)."""
        ...

    @abstractmethod
    async def count_in_progress(self) -> int:
        """Count records whose game has no outcome yet."""
        ...

    async def exists(self, player_id: int) -> bool:
        """Check if a record exists for a player."""
        return await self.get(player_id) is not None

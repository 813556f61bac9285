"""Error taxonomy for the blackjack session engine.

Every failure the engine can report is a ``BlackjackError`` subclass with a
stable ``kind`` string. The transport layer maps kinds to status codes; the
engine itself never decides how an error is shown to a client.
"""


class BlackjackError(Exception):
    """Base class for all engine errors."""

    kind = "blackjack"
    message = "Blackjack error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)

    @property
    def detail(self) -> str:
        """Return the human readable message."""
        return str(self)


# Card parsing


class CardParseError(BlackjackError, ValueError):
    """A persisted card token could not be parsed."""

    kind = "card_parse"
    message = "Invalid card token"

    def __init__(self, token: str, message: str | None = None) -> None:
        self.token = token
        super().__init__(f"{message or self.message}: {token!r}")


class NoSeparatorError(CardParseError):
    """Token has no ``SUIT:FACE`` separator."""

    message = "No SUIT:FACE separator found"


class UnknownSuitError(CardParseError):
    """Token names a suit that does not exist."""

    message = "No matching suit found"


class UnknownFaceError(CardParseError):
    """Token names a face that does not exist."""

    message = "Invalid card face given"


# Session lifecycle


class GameOverError(BlackjackError):
    kind = "game_over"
    message = "The game is over"


class InvalidResultCountError(BlackjackError):
    """Zero or several records were found for one player id."""

    kind = "invalid_result_count"
    message = "More than or less than 1 game result found"

    def __init__(self, count: int, message: str | None = None) -> None:
        self.count = count
        super().__init__(message)


class SessionNotFoundError(InvalidResultCountError):
    kind = "not_found"
    message = "No game session exists for this player"

    def __init__(self, player_id: int) -> None:
        self.player_id = player_id
        super().__init__(0, f"No game session exists for player {player_id}")


class SessionExistsError(BlackjackError):
    kind = "cannot_create"
    message = "Failed to create, bet must be claimed before recreating a session"

    def __init__(self, player_id: int) -> None:
        self.player_id = player_id
        super().__init__()


class NoCardError(BlackjackError):
    kind = "no_card"
    message = "No card was able to be drawn"


# Turn errors


class PlayerAlreadyPressedStayError(BlackjackError):
    kind = "player_already_pressed_stay"
    message = "You already pressed stay"


class DealerAlreadyPressedStayError(BlackjackError):
    kind = "dealer_already_pressed_stay"
    message = "The dealer already pressed stay"


class PlayerAlreadyWonError(BlackjackError):
    kind = "player_already_won"
    message = "You already won"


class PlayerAlreadyLostError(BlackjackError):
    kind = "player_already_lost"
    message = "You already lost"


class DealerAlreadyWonError(BlackjackError):
    kind = "dealer_already_won"
    message = "The dealer already won"


class DealerAlreadyLostError(BlackjackError):
    kind = "dealer_already_lost"
    message = "The dealer already lost"


class PlayerNotDoneYetError(BlackjackError):
    kind = "player_not_done_yet"
    message = "Player is not done yet"


# Settlement


class GameNotOverError(BlackjackError):
    kind = "game_not_over"
    message = "Game is not over yet"


class AlreadyClaimedError(BlackjackError):
    kind = "already_claimed"
    message = "The payout was already claimed"


# Storage


class StorageError(BlackjackError):
    """Wraps a failure of the record store, including connection failures."""

    kind = "storage"
    message = "Session storage failed"

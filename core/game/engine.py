"""Blackjack session engine: one player against the dealer, persisted per player."""

import logging
from random import Random

from core.cards import Card, Deck
from core.errors import (
    AlreadyClaimedError,
    DealerAlreadyLostError,
    DealerAlreadyPressedStayError,
    DealerAlreadyWonError,
    GameNotOverError,
    GameOverError,
    NoCardError,
    PlayerAlreadyLostError,
    PlayerAlreadyPressedStayError,
    PlayerAlreadyWonError,
    PlayerNotDoneYetError,
    SessionExistsError,
    SessionNotFoundError,
    StorageError,
)
from core.game.record import RecordStore, SessionRecord
from core.game.state import GameState
from core.hand import BLACKJACK, Hand

logger = logging.getLogger(__name__)

# A hand reaching this many cards wins outright ("five-card charlie")
CHARLIE_CARDS = 5

DEALER_STANDS_ON = 17


class BlackjackGame:
    """
    Live game for one player, restored from and saved back to a record store.

    Turn operations are synchronous and never touch the store; ``save``,
    ``remove`` and ``finalize`` are the only persistence points. Use the
    ``game_session`` / ``new_game_session`` context managers so that every
    instance is saved or removed exactly once.
    """

    def __init__(
        self,
        store: RecordStore,
        player_id: int,
        bet: int,
        deck: Deck,
        player: Hand | None = None,
        dealer: Hand | None = None,
        player_stay: bool = False,
        dealer_stay: bool = False,
        first_turn: bool = True,
    ) -> None:
        self._store = store
        self.player_id = player_id
        self.bet = bet
        self.deck = deck
        self.player = player if player is not None else Hand()
        self.dealer = dealer if dealer is not None else Hand()
        self.player_stay_status = player_stay
        self.dealer_stay_status = dealer_stay
        self.first_turn = first_turn
        self.claimed = False
        self.gain = 0

    # Lifecycle

    @classmethod
    async def create(
        cls,
        store: RecordStore,
        player_id: int,
        bet: int,
        deck: Deck | None = None,
        rng: Random | None = None,
    ) -> "BlackjackGame":
        """
        Start a new game and write its record.

        Args:
            store: Record store holding the player's session
            player_id: Player the session belongs to
            bet: Amount at stake
            deck: Deck to deal from (a freshly shuffled one by default)
            rng: Random source for the default deck

        Raises:
            SessionExistsError: the player already has a record
            NoCardError: the deck ran out during the initial deal
        """
        if await store.exists(player_id):
            raise SessionExistsError(player_id)

        game = cls(store, player_id, bet, deck if deck is not None else Deck(rng=rng))

        # Deal: player, player, dealer, dealer
        for hand in (game.player, game.player, game.dealer, game.dealer):
            hand.add_card(game._draw())

        # A fresh record never carries an outcome, even after a natural on the deal
        record = game.to_record()
        record.outcome = None
        await store.upsert(record)
        logger.info("Created blackjack session for player %s with bet %s", player_id, bet)
        return game

    @classmethod
    async def restore(
        cls,
        store: RecordStore,
        player_id: int,
        rng: Random | None = None,
    ) -> "BlackjackGame":
        """
        Load a player's game from the store.

        Args:
            store: Record store holding the player's session
            player_id: Player the session belongs to
            rng: Random source for drawing from the restored deck

        Raises:
            SessionNotFoundError: no record exists for the player
            GameOverError: the record's bet was already settled
            CardParseError: a stored card token is corrupt
        """
        record = await store.get(player_id)
        if record is None:
            raise SessionNotFoundError(player_id)
        return cls.from_record(store, record, rng=rng)

    @classmethod
    def from_record(
        cls,
        store: RecordStore,
        record: SessionRecord,
        rng: Random | None = None,
    ) -> "BlackjackGame":
        """Rebuild a live game from its stored record."""
        if record.bet is None:
            raise GameOverError()

        return cls(
            store,
            player_id=record.player_id,
            bet=record.bet,
            deck=Deck.from_tokens(record.deck, rng=rng),
            player=Hand.from_tokens(record.player_hand),
            dealer=Hand.from_tokens(record.dealer_hand),
            player_stay=record.player_stay,
            dealer_stay=record.dealer_stay,
            first_turn=record.first_turn,
        )

    def to_record(self) -> SessionRecord:
        """Return the stored form of the current state."""
        return SessionRecord(
            player_id=self.player_id,
            bet=self.bet,
            outcome=self.status.outcome,
            deck=self.deck.export(),
            player_hand=self.player.tokens(),
            dealer_hand=self.dealer.tokens(),
            player_stay=self.player_stay_status,
            dealer_stay=self.dealer_stay_status,
            first_turn=self.first_turn,
        )

    async def save(self) -> None:
        """Upsert the current state into the store."""
        await self._store.upsert(self.to_record())

    async def remove(self) -> None:
        """Delete the player's record from the store."""
        await self._store.delete(self.player_id)

    async def finalize(self) -> None:
        """
        Persist the outcome of this instance: remove it once claimed, save it otherwise.

        Runs after the caller already has its result, so storage failures
        are logged rather than raised.
        """
        try:
            if self.claimed:
                await self.remove()
            else:
                await self.save()
        except StorageError:
            action = "remove" if self.claimed else "save"
            logger.warning(
                "Failed to %s blackjack session for player %s",
                action,
                self.player_id,
                exc_info=True,
            )

    # Status

    @property
    def status(self) -> GameState:
        """Evaluate the game state from the current hands and stay flags."""
        player_score = self.player.score
        dealer_score = self.dealer.score

        if len(self.player) == CHARLIE_CARDS:
            return GameState.PLAYER_WON
        # TODO: confirm whether a dealer charlie should be a dealer win
        if len(self.dealer) == CHARLIE_CARDS:
            return GameState.PLAYER_WON

        if player_score == BLACKJACK:
            return GameState.PLAYER_WON
        if dealer_score == BLACKJACK:
            return GameState.PLAYER_LOST

        if not (self.player_stay_status and self.dealer_stay_status):
            return GameState.IN_PROGRESS

        # Push goes to the house
        if player_score == dealer_score:
            return GameState.PLAYER_LOST
        if self.player.is_busted:
            return GameState.PLAYER_LOST
        if self.dealer.is_busted:
            return GameState.PLAYER_WON
        if player_score > dealer_score:
            return GameState.PLAYER_WON
        return GameState.PLAYER_LOST

    # Turns

    def _draw(self) -> Card:
        card = self.deck.draw()
        if card is None:
            raise NoCardError()
        return card

    def player_hit(self) -> Card:
        """
        Player takes another card.

        Raises:
            PlayerAlreadyWonError / PlayerAlreadyLostError: the game is over
            PlayerAlreadyPressedStayError: the player already stayed
            NoCardError: the deck is empty
        """
        status = self.status
        if status is GameState.PLAYER_WON:
            raise PlayerAlreadyWonError()
        if status is GameState.PLAYER_LOST:
            raise PlayerAlreadyLostError()
        if self.player_stay_status:
            raise PlayerAlreadyPressedStayError()

        card = self._draw()
        self.first_turn = False
        self.player.add_card(card)
        logger.debug("Player %s hit %s, score %s", self.player_id, card, self.player.score)
        return card

    def player_stay(self) -> None:
        """Player stays; the dealer then plays out its hand. Repeated calls do nothing."""
        if self.player_stay_status:
            return

        self.player_stay_status = True
        self.dealer_play()

    def dealer_hit(self) -> Card:
        """Dealer takes another card."""
        status = self.status
        if status is GameState.PLAYER_WON:
            raise DealerAlreadyLostError()
        if status is GameState.PLAYER_LOST:
            raise DealerAlreadyWonError()
        if self.dealer_stay_status:
            raise DealerAlreadyPressedStayError()

        card = self._draw()
        self.dealer.add_card(card)
        return card

    def dealer_play(self) -> None:
        """
        Dealer draws until reaching 17 or the game is decided, then stays.

        Raises:
            PlayerNotDoneYetError: the player has not stayed yet
        """
        if not self.player_stay_status:
            raise PlayerNotDoneYetError()

        self.first_turn = False

        while self.status is GameState.IN_PROGRESS and self.dealer.score < DEALER_STANDS_ON:
            self.dealer_hit()

        self.dealer_stay_status = True
        logger.debug(
            "Dealer stays for player %s at %s: %s",
            self.player_id,
            self.dealer.score,
            self.status,
        )

    # Settlement

    def claim(self) -> int:
        """
        Settle a finished game and return the gain (+bet on a win, -bet on a loss).

        Raises:
            GameNotOverError: the game is still in progress; nothing changes
            AlreadyClaimedError: this instance was already settled
        """
        if self.claimed:
            raise AlreadyClaimedError()

        status = self.status
        if not status.is_over:
            raise GameNotOverError()

        self.claimed = True
        self.gain = self.bet if status is GameState.PLAYER_WON else -self.bet
        logger.info("Player %s claimed %s (%s)", self.player_id, self.gain, status)
        return self.gain

    def __repr__(self) -> str:
        return (
            f"BlackjackGame(player_id={self.player_id}, bet={self.bet}, "
            f"player={self.player.score}, dealer={self.dealer.score}, status={self.status.name})"
        )

"""Blackjack table with a round lifecycle state machine."""

import logging
import threading
from random import Random
from typing import Any

from transitions import Machine

from blackjack.cards import Deck
from blackjack.errors import (
    BlackjackError,
    HandNotLockedError,
    PlayerInvalidError,
    TableInPlayError,
    TableNotInPlayError,
    TablePlayerAlreadyJoinedError,
)
from blackjack.events import EventEmitter, EventHandler, EventType
from blackjack.player import Player
from blackjack.state import TABLE_TRANSITIONS, PlayState

logger = logging.getLogger(__name__)

CARDS_PER_HAND = 2


class Table:
    """
    Blackjack table using a state machine.

    The table owns the deck and the list of seated players, and moves a
    round through NOT_IN_PLAY → IN_PLAY → ENDGAME. Every action is checked
    against the current state first and raises without side effects when
    it is not allowed. Presentation layers observe the table through
    events.

    Locks nest table → hand → player, with the deck innermost. ``play_state`` and
    ``deck`` are single attribute reads and never take the table lock, so
    a hand can check them while holding its own lock.
    """

    # State machine states
    STATES = [s.name.lower() for s in PlayState]

    def __init__(self, pack_count: int = 1, rng: Random | None = None) -> None:
        """
        Initialize a new table.

        Args:
            pack_count: Number of 52-card packs the deck is rebuilt from every deal
            rng: Random number generator for reproducible games
        """
        if pack_count < 0:
            raise ValueError("pack_count cannot be negative")

        self._lock = threading.RLock()
        self._pack_count = pack_count
        self._rng = rng
        self._deck: Deck | None = self._build_deck()
        self._players: list[Player] = []
        self.events = EventEmitter()

        # Initialize state machine
        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=TABLE_TRANSITIONS,
            initial="not_in_play",
            auto_transitions=False,
            model_attribute="_machine_state",
            after_state_change="_log_state_change",
        )

    @property
    def play_state(self) -> PlayState:
        """Get current play state as enum."""
        return PlayState[self._machine_state.upper()]  # type: ignore[attr-defined]

    @property
    def pack_count(self) -> int:
        """Return the number of packs used to build each deck."""
        return self._pack_count

    @property
    def deck(self) -> Deck | None:
        """Return the current deck."""
        return self._deck

    @deck.setter
    def deck(self, deck: Deck | None) -> None:
        with self._lock:
            self._deck = deck

    @property
    def players(self) -> list[Player]:
        """Return a snapshot of the seated players."""
        with self._lock:
            return list(self._players)

    def subscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to table events."""
        self.events.subscribe(handler, event_type)

    def join(self, player: Player) -> None:
        """
        Seat a player at the table.

        Raises:
            TableInPlayError: A round is in progress or finishing
            TablePlayerAlreadyJoinedError: The player is already seated here
        """
        if player is None:
            raise PlayerInvalidError()

        with self._lock, player._lock:
            if self.play_state != PlayState.NOT_IN_PLAY:
                raise TableInPlayError()
            if any(p is player for p in self._players):
                raise TablePlayerAlreadyJoinedError()
            self._players.append(player)
            player.seat(self)

        logger.info("%s joined the table", player.name)
        self.events.emit_new(EventType.PLAYER_JOINED, player=player.name)

    def reset(self) -> None:
        """
        Return the table to NOT_IN_PLAY, revoking every player's hands.

        Raises:
            TableInPlayError: A round is in progress
        """
        with self._lock:
            self._reset()
        self.events.emit_new(EventType.TABLE_RESET)

    def deal(self) -> list[BlackjackError]:
        """
        Start a round: reset, rebuild the deck, and deal two cards to each player.

        A failure for one player does not stop the others from being dealt.

        Returns:
            Errors raised while dealing, in player order (empty on success).
            If the table cannot be reset, a single-element list with that
            error and nothing is dealt.
        """
        errors: list[BlackjackError] = []
        pending: list[tuple[EventType, dict[str, Any]]] = []

        with self._lock:
            try:
                self._reset()
            except BlackjackError as exc:
                return [exc]
            pending.append((EventType.TABLE_RESET, {}))

            # Deck is rebuilt rather than reshuffled
            self._deck = self._build_deck()
            pending.append(
                (EventType.DECK_BUILT, {"cards": len(self._deck), "packs": self._pack_count})
            )

            for player in self._players:
                try:
                    hand = player.new_hand()
                    for _ in range(CARDS_PER_HAND):
                        card = hand.draw()
                        pending.append(
                            (EventType.CARD_DEALT, {"player": player.name, "card": str(card)})
                        )
                    hand.evaluate_score()
                except BlackjackError as exc:
                    logger.warning("Could not deal to %s: %s", player.name, exc)
                    errors.append(exc)
                    pending.append(
                        (EventType.DEAL_FAILED, {"player": player.name, "error": str(exc)})
                    )
                    continue

                if hand.is_natural:
                    pending.append((EventType.PLAYER_BLACKJACK, {"player": player.name}))

            self.start_round()  # type: ignore[attr-defined]
            player_count = len(self._players)

        for event_type, data in pending:
            self.events.emit_new(event_type, **data)

        logger.info("Round started with %d player(s), %d deal error(s)", player_count, len(errors))
        self.events.emit_new(EventType.ROUND_STARTED, players=player_count, errors=len(errors))
        return errors

    def end_round(self) -> None:
        """
        Move the round to ENDGAME once every hand is locked.

        Raises:
            TableNotInPlayError: No round is in progress
            HandNotLockedError: Some hand is still open
        """
        with self._lock:
            if self.play_state != PlayState.IN_PLAY:
                raise TableNotInPlayError()

            results = []
            for player in self._players:
                for hand in player.hands:
                    if not hand.locked:
                        raise HandNotLockedError()
                    score = hand.score()
                    results.append({"player": player.name, "score": score.best, "valid": score.valid})

            self.finish_round()  # type: ignore[attr-defined]

        logger.info("Round ended")
        self.events.emit_new(EventType.ROUND_ENDED, results=results)

    def _reset(self) -> None:
        # Only a table that is idle or finished may be reset
        if self.play_state not in (PlayState.NOT_IN_PLAY, PlayState.ENDGAME):
            raise TableInPlayError()
        for player in self._players:
            player.clear_hands()
        self.reopen_table()  # type: ignore[attr-defined]

    def _build_deck(self) -> Deck:
        return Deck.build(self._pack_count, include_joker=False, rng=self._rng)

    def _log_state_change(self) -> None:
        logger.debug("Table state is now %s", self.play_state)

    def __repr__(self) -> str:
        return f"Table(packs={self._pack_count}, players={len(self.players)}, state={self.play_state.name})"

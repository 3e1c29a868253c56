"""Hand state and scoring for blackjack."""

import logging
import threading
import weakref
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterator

from transitions import Machine

from blackjack.cards import Card, Rank
from blackjack.errors import (
    HandBustError,
    HandInvalidError,
    HandLockedError,
    HandNoPlayerError,
    InvalidCardError,
    PlayerInvalidError,
    PlayerNoTableError,
    TableNotInPlayError,
)
from blackjack.events import EventType
from blackjack.state import HAND_TRANSITIONS, HandState, PlayState

if TYPE_CHECKING:
    from blackjack.player import Player
    from blackjack.table import Table

logger = logging.getLogger(__name__)

BLACKJACK = 21


@dataclass(frozen=True, slots=True)
class HandScore:
    """Point-in-time view of a hand's score and status.

    Unpacks as ``best, worst, locked, valid``.
    """

    best: int
    worst: int
    locked: bool
    valid: bool

    def __iter__(self) -> Iterator[Any]:
        return iter((self.best, self.worst, self.locked, self.valid))

    @property
    def is_soft(self) -> bool:
        """Check if at least one ace is being counted as 11."""
        return self.valid and self.best != self.worst


class Hand:
    """
    A player's hand of cards on a table.

    The hand keeps its cards in draw order and caches the best and worst
    scores from the last evaluation. It starts OPEN and moves to LOCKED
    either when the player sticks or when scoring finds it bust; there is
    no way back. The player and table references are weak; the player owns
    the hand.

    All mutations hold the hand's lock for their full duration.
    """

    STATES = [s.value for s in HandState]

    def __init__(self, player: "Player | None" = None, table: "Table | None" = None) -> None:
        """
        Initialize an empty hand.

        Args:
            player: Owning player
            table: Table the hand is played on (normally the player's table)
        """
        self._lock = threading.RLock()
        self._cards: list[Card] = []
        self._player_ref = weakref.ref(player) if player is not None else None
        self._table_ref = weakref.ref(table) if table is not None else None
        self._best = 0
        self._worst = 0
        self._valid = True

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=HAND_TRANSITIONS,
            initial=HandState.OPEN.value,
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @classmethod
    def for_player(cls, player: "Player | None") -> "Hand":
        """Create a hand bound to ``player`` and the table it is seated at."""
        if player is None:
            raise PlayerInvalidError()
        table = player.table
        if table is None:
            raise PlayerNoTableError()
        return cls(player=player, table=table)

    @property
    def player(self) -> "Player | None":
        """Return the owning player, if still attached."""
        return self._player_ref() if self._player_ref is not None else None

    @property
    def table(self) -> "Table | None":
        """Return the table this hand is played on, if still attached."""
        return self._table_ref() if self._table_ref is not None else None

    @property
    def state(self) -> HandState:
        """Get current hand state as enum."""
        return HandState(self._machine_state)  # type: ignore[attr-defined]

    @property
    def locked(self) -> bool:
        """Check if the hand can no longer be played."""
        return self.state == HandState.LOCKED

    @property
    def valid(self) -> bool:
        """Check if the hand is not bust."""
        with self._lock:
            return self._valid

    @property
    def cards(self) -> list[Card]:
        """Return a snapshot of the cards in draw order."""
        with self._lock:
            return list(self._cards)

    @property
    def is_bust(self) -> bool:
        """Check if the hand has gone bust."""
        return not self.valid

    @property
    def is_soft(self) -> bool:
        """Check if the best score counts an ace as 11."""
        return self.score().is_soft

    @property
    def is_natural(self) -> bool:
        """Check if the hand is a natural blackjack (21 with 2 cards)."""
        with self._lock:
            return len(self._cards) == 2 and self._valid and self._best == BLACKJACK

    def score(self) -> HandScore:
        """Return the score and status as of the last evaluation."""
        with self._lock:
            return self._snapshot()

    def hit(self) -> Card:
        """
        Draw a card from the table's deck and re-score the hand.

        Going bust is not an error here: the hand simply ends up locked and
        invalid. Deck errors propagate unchanged.

        Returns:
            The card drawn
        """
        with self._lock:
            table = self._check_can_play()
            card = table.deck.draw_random()
            self._cards.append(card)
            self._evaluate_score()
            score = self._snapshot()

        logger.debug("Hit drew %s, score now %d/%d", card, score.best, score.worst)
        self._emit(EventType.PLAYER_HIT, card=str(card), best=score.best, worst=score.worst)
        if not score.valid:
            self._emit(EventType.PLAYER_BUSTS, best=score.best)
        return card

    def stick(self) -> None:
        """End play on this hand, keeping its current cards."""
        with self._lock:
            if self.locked:
                raise HandLockedError()
            self.lock_hand()  # type: ignore[attr-defined]
            self._evaluate_score()
            score = self._snapshot()

        self._emit(EventType.PLAYER_STICK, best=score.best)

    def evaluate_score(self) -> HandScore:
        """
        Recalculate and store the best and worst scores.

        Called by every action that changes the cards; public so the table
        can score freshly dealt hands. A bust hand is invalidated and locked.
        """
        with self._lock:
            self._evaluate_score()
            return self._snapshot()

    def add_card(self, card: Card) -> None:
        """Append a card without any play checks or re-scoring."""
        with self._lock:
            self._cards.append(card)

    def draw(self) -> Card:
        """Draw a card from the table's deck without play checks or re-scoring.

        Used for the opening deal, before the table is in play.
        """
        with self._lock:
            table = self.table
            if table is None or table.deck is None:
                raise HandInvalidError()
            card = table.deck.draw_random()
            self._cards.append(card)
            return card

    def detach(self) -> None:
        """Drop the player and table references, waiting for any in-flight action."""
        with self._lock:
            self._player_ref = None
            self._table_ref = None

    def _check_can_play(self) -> "Table":
        table = self.table
        if table is None or table.deck is None:
            raise HandInvalidError()
        if not self._valid:
            raise HandBustError()
        if self.locked:
            raise HandLockedError()

        player = self.player
        if player is None:
            raise HandNoPlayerError()
        seat = player.table
        if seat is None:
            raise PlayerNoTableError()
        if seat.play_state != PlayState.IN_PLAY:
            raise TableNotInPlayError()
        return table

    def _evaluate_score(self) -> None:
        self._best = 0
        self._worst = 0

        # A scorable hand always has at least the two opening cards
        if len(self._cards) < 2:
            raise HandInvalidError()

        total = 0
        aces = 0
        for card in self._cards:
            if card.rank == Rank.JOKER or not card.is_valid():
                raise InvalidCardError(f"card in hand is invalid: {card!r}")
            if card.is_ace:
                aces += 1
            else:
                total += Rank(card.rank).hard_value
        worst = total + aces

        # Aces go last; each is 11 only while that keeps the running total at 21 or less
        for _ in range(aces):
            total += 11 if total + 11 <= BLACKJACK else 1

        self._best = total
        self._worst = worst

        if total > BLACKJACK and self._valid:
            self._valid = False
            if not self.locked:
                self.lock_hand()  # type: ignore[attr-defined]
            logger.debug("Hand bust with %d", total)

    def _snapshot(self) -> HandScore:
        return HandScore(self._best, self._worst, self.locked, self._valid)

    def _emit(self, event_type: EventType, **data: Any) -> None:
        table = self.table
        if table is None:
            return
        player = self.player
        table.events.emit_new(event_type, player=player.name if player else None, **data)

    def __bool__(self) -> bool:
        # Machine only attaches to truthy models, and an empty hand has len 0
        return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        score = self.score()
        cards_str = " ".join(card.short_name for card in self.cards)
        value_str = f"({score.best})"
        if score.is_soft:
            value_str = f"(soft {score.best})"
        if self.is_natural:
            value_str = "(BLACKJACK)"
        if not score.valid:
            value_str = "(BUST)"
        return f"{cards_str} {value_str}"

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, state={self.state.name})"

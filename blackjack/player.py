"""Players seated at a blackjack table."""

import logging
import threading
import weakref
from typing import TYPE_CHECKING

from blackjack.hand import Hand

if TYPE_CHECKING:
    from blackjack.table import Table

logger = logging.getLogger(__name__)


class Player:
    """
    Someone sat at a Table.

    A player owns its hands and knows (weakly) which table it is seated
    at. Players are created unseated so they can later move between tables.
    """

    def __init__(self, name: str = "Player") -> None:
        """Initialize an unseated player with no hands."""
        self.name = name
        self._lock = threading.RLock()
        self._table_ref: "weakref.ref[Table] | None" = None
        self._hands: list[Hand] = []

    @property
    def table(self) -> "Table | None":
        """Return the table this player is seated at, if any."""
        with self._lock:
            return self._table_ref() if self._table_ref is not None else None

    @property
    def hands(self) -> list[Hand]:
        """Return a snapshot of the player's hands."""
        with self._lock:
            return list(self._hands)

    @property
    def current_hand(self) -> Hand | None:
        """Return the first hand, if one has been dealt."""
        with self._lock:
            return self._hands[0] if self._hands else None

    def seat(self, table: "Table | None") -> None:
        """Record the table this player sits at. Called by Table.join."""
        with self._lock:
            self._table_ref = weakref.ref(table) if table is not None else None

    def new_hand(self) -> Hand:
        """
        Create a hand bound to this player and its table.

        Raises:
            PlayerNoTableError: The player is not seated
        """
        with self._lock:
            hand = Hand.for_player(self)
            self._hands.append(hand)
            return hand

    def clear_hands(self) -> None:
        """
        Discard all hands.

        The hand list is swapped out under the player lock. Each old hand's
        lock is then taken (so any in-flight hit or stick finishes first)
        and the hand is detached from this player and its table.
        """
        with self._lock:
            old_hands = self._hands
            self._hands = []

        for hand in old_hands:
            hand.detach()
        if old_hands:
            logger.debug("Cleared %d hand(s) for %s", len(old_hands), self.name)

    def __repr__(self) -> str:
        return f"Player({self.name!r}, hands={len(self.hands)})"

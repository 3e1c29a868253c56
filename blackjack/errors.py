"""Blackjack engine exceptions.

Every condition the engine signals is an expected, recoverable error that
derives from :class:`BlackjackError`. The three intermediate classes group
them by cause so callers can catch a whole family at once.
"""


class BlackjackError(Exception):
    """Base class for all engine errors."""

    default_message = "blackjack error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


# Structural errors


class StructuralError(BlackjackError):
    """An object is malformed or missing a required association."""

    default_message = "object is not correctly instantiated"


class HandInvalidError(StructuralError):
    default_message = "hand is not correctly instantiated"


class InvalidCardError(StructuralError):
    default_message = "card in hand is invalid"


class PlayerInvalidError(StructuralError):
    default_message = "player is invalid"


class PlayerNoTableError(StructuralError):
    default_message = "player has no table assigned"


class HandNoPlayerError(StructuralError):
    default_message = "hand is not associated with a player"


# State machine violations


class StateError(BlackjackError):
    """An action is not legal in the current hand or table state."""

    default_message = "action not allowed in current state"


class HandLockedError(StateError):
    default_message = "hand is locked"


class HandNotLockedError(StateError):
    default_message = "hand is not locked"


class HandBustError(StateError):
    default_message = "hand is bust"


class TableInPlayError(StateError):
    default_message = "table is in play"


class TableNotInPlayError(StateError):
    default_message = "table is not in play"


class TablePlayerAlreadyJoinedError(StateError):
    default_message = "player already on table"


# Resource exhaustion


class DeckError(BlackjackError):
    """The deck cannot satisfy the request."""

    default_message = "deck error"


class DeckEmptyError(DeckError):
    default_message = "deck is empty"


class DeckUninitializedError(DeckError):
    default_message = "deck is uninitialized"

"""Table and hand state enumerations."""

from enum import Enum, IntEnum


class PlayState(IntEnum):
    """
    Table play-state machine states.

    Flow: NOT_IN_PLAY → IN_PLAY → ENDGAME → NOT_IN_PLAY
    """

    # No round in progress; players may join
    NOT_IN_PLAY = 0

    # Hands dealt, players hitting and sticking
    IN_PLAY = 1

    # Reserved for a dealer phase. Nothing transitions here.
    DEALER_PLAY = 2

    # All hands locked, round finished
    ENDGAME = 3

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


class HandState(Enum):
    """
    Hand state machine states.

    Flow: OPEN → LOCKED (by stick, or automatically on bust)
    """

    OPEN = "open"
    LOCKED = "locked"

    def __str__(self) -> str:
        return self.name.title()


# Transition tables for transitions.Machine, keyed by lowercase state names.
# DEALER_PLAY appears in no transition.
TABLE_TRANSITIONS = [
    {"trigger": "reopen_table", "source": ["not_in_play", "endgame"], "dest": "not_in_play"},
    {"trigger": "start_round", "source": "not_in_play", "dest": "in_play"},
    {"trigger": "finish_round", "source": "in_play", "dest": "endgame"},
]

HAND_TRANSITIONS = [
    {"trigger": "lock_hand", "source": "open", "dest": "locked"},
]

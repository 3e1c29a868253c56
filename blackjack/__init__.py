"""Blackjack rules engine - decks, hands, players and tables. UI-agnostic."""

from blackjack.errors import (
    BlackjackError,
    DeckEmptyError,
    DeckError,
    DeckUninitializedError,
    HandBustError,
    HandInvalidError,
    HandLockedError,
    HandNoPlayerError,
    HandNotLockedError,
    InvalidCardError,
    PlayerInvalidError,
    PlayerNoTableError,
    StateError,
    StructuralError,
    TableInPlayError,
    TableNotInPlayError,
    TablePlayerAlreadyJoinedError,
)
from blackjack.cards import Card, Deck, Rank, Suit
from blackjack.state import HandState, PlayState
from blackjack.events import EventEmitter, EventType, GameEvent
from blackjack.hand import Hand, HandScore
from blackjack.player import Player
from blackjack.table import Table

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "Hand",
    "HandScore",
    "HandState",
    "Player",
    "Table",
    "PlayState",
    "EventEmitter",
    "EventType",
    "GameEvent",
    "BlackjackError",
    "StructuralError",
    "StateError",
    "DeckError",
    "HandInvalidError",
    "InvalidCardError",
    "PlayerInvalidError",
    "PlayerNoTableError",
    "HandNoPlayerError",
    "HandLockedError",
    "HandNotLockedError",
    "HandBustError",
    "TableInPlayError",
    "TableNotInPlayError",
    "TablePlayerAlreadyJoinedError",
    "DeckEmptyError",
    "DeckUninitializedError",
]

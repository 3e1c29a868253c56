"""Card and Deck classes - immutable cards and a thread-safe multi-pack deck."""

import logging
import threading
from dataclasses import dataclass
from enum import IntEnum
from random import Random
from typing import Iterable, Iterator

from blackjack.errors import DeckEmptyError, DeckUninitializedError

logger = logging.getLogger(__name__)

# Process-lifetime random source, seeded once at import.
_shared_rng = Random()

CARDS_PER_PACK = 52


class Suit(IntEnum):
    """Card suits. Zero is reserved for the joker."""

    JOKER = 0
    CLUB = 1
    DIAMOND = 2
    HEART = 3
    SPADE = 4

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def symbol(self) -> str:
        """Return the unicode suit symbol."""
        return {
            Suit.JOKER: "*",
            Suit.CLUB: "♣",
            Suit.DIAMOND: "♦",
            Suit.HEART: "♥",
            Suit.SPADE: "♠",
        }[self]

    @classmethod
    def playing(cls) -> list["Suit"]:
        """Return the four suits found in a standard pack."""
        return [s for s in cls if s is not cls.JOKER]


class Rank(IntEnum):
    """Card ranks. Zero is reserved for the joker, ace is low."""

    JOKER = 0
    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    def __str__(self) -> str:
        if Rank.TWO <= self <= Rank.TEN:
            return str(self.value)
        return self.name.lower()

    @property
    def short_name(self) -> str:
        """Return the one or two character rank token (A, 2..10, J, Q, K)."""
        if Rank.TWO <= self <= Rank.TEN:
            return str(self.value)
        return {
            Rank.JOKER: "JK",
            Rank.ACE: "A",
            Rank.JACK: "J",
            Rank.QUEEN: "Q",
            Rank.KING: "K",
        }[self]

    @property
    def is_ace(self) -> bool:
        """Check if this rank is an Ace."""
        return self == Rank.ACE

    @property
    def is_face(self) -> bool:
        """Check if this rank is a Jack, Queen or King."""
        return self >= Rank.JACK

    @property
    def hard_value(self) -> int:
        """Return the blackjack value with aces counted as 1 (faces = 10)."""
        if self.is_face:
            return 10
        return self.value

    @property
    def ace_high_value(self) -> int:
        """Return the rank value with aces moved above the King.

        Not used by blackjack scoring; handy for games comparing cards directly.
        """
        if self.is_ace:
            return 14
        return self.value

    @classmethod
    def playing(cls) -> list["Rank"]:
        """Return the thirteen ranks found in each suit of a pack."""
        return [r for r in cls if r is not cls.JOKER]


def _code_name(code: int, enum_cls: type[IntEnum]) -> str:
    try:
        return str(enum_cls(code))
    except ValueError:
        return "unknown"


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card.

    ``rank`` and ``suit`` are normally enum members. Cards built from raw
    codes with :meth:`from_codes` may hold plain integers outside the enums,
    which :meth:`is_valid` reports as invalid.
    """

    rank: Rank | int
    suit: Suit | int

    def __str__(self) -> str:
        return self.display_name()

    def __repr__(self) -> str:
        return f"Card({_code_name(self.rank, Rank).upper()}, {_code_name(self.suit, Suit).upper()})"

    @classmethod
    def joker(cls) -> "Card":
        """Return the joker sentinel card."""
        return cls(Rank.JOKER, Suit.JOKER)

    @classmethod
    def from_codes(cls, rank: int, suit: int) -> "Card":
        """Create a card from raw integer codes, keeping unknown codes as-is."""
        try:
            rank = Rank(rank)
        except ValueError:
            pass
        try:
            suit = Suit(suit)
        except ValueError:
            pass
        return cls(rank, suit)

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a string like '2♣', 'AS', 'Kh', '10d' or 'joker'."""
        s = s.strip().upper()
        if s in ("JOKER", "JK"):
            return cls.joker()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str = s[:-1]
        suit_str = s[-1]

        rank_map = {rank.short_name: rank for rank in Rank.playing()}
        rank_map["T"] = Rank.TEN

        suit_map = {
            "C": Suit.CLUB,
            "♣": Suit.CLUB,
            "D": Suit.DIAMOND,
            "♦": Suit.DIAMOND,
            "H": Suit.HEART,
            "♥": Suit.HEART,
            "S": Suit.SPADE,
            "♠": Suit.SPADE,
        }

        if rank_str not in rank_map:
            raise ValueError(f"Invalid rank: {rank_str}")
        if suit_str not in suit_map:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(rank_map[rank_str], suit_map[suit_str])

    @property
    def is_joker(self) -> bool:
        """Check if either field holds the joker code."""
        return self.rank == Rank.JOKER or self.suit == Suit.JOKER

    @property
    def is_ace(self) -> bool:
        """Check if this card is an Ace."""
        return self.rank == Rank.ACE

    @property
    def short_name(self) -> str:
        """Return a compact token such as 'A♠' or '10♥'."""
        if self.is_joker:
            return "JK"
        if not self.is_valid():
            return "??"
        return f"{Rank(self.rank).short_name}{Suit(self.suit).symbol}"

    def is_valid(self) -> bool:
        """Check that rank and suit are within the known code ranges."""
        return Rank.JOKER <= self.rank <= Rank.KING and Suit.JOKER <= self.suit <= Suit.SPADE

    def display_name(self) -> str:
        """Return a human readable name, e.g. 'nine of diamonds' or 'joker'."""
        if self.is_joker:
            return "joker"
        return f"{_code_name(self.rank, Rank)} of {_code_name(self.suit, Suit)}s"


class Deck:
    """
    A multiset of undrawn cards, safe to share between threads.

    A deck built with no ``cards`` argument has no backing storage and is
    *uninitialized*; draws from it fail differently than draws from a deck
    that has merely run out. Every operation that reads or mutates the card
    list holds the deck's lock.
    """

    def __init__(self, cards: Iterable[Card] | None = None, rng: Random | None = None) -> None:
        """
        Initialize a deck.

        Args:
            cards: Initial cards, in order. ``None`` leaves the deck uninitialized.
            rng: Random number generator for draws and shuffles
        """
        self._lock = threading.RLock()
        self._rng = rng or _shared_rng
        self._cards: list[Card] | None = list(cards) if cards is not None else None

    @classmethod
    def build(
        cls,
        pack_count: int = 1,
        include_joker: bool = False,
        rng: Random | None = None,
    ) -> "Deck":
        """
        Build a deck out of standard 52-card packs.

        Args:
            pack_count: Number of packs to concatenate (0 gives an empty deck)
            include_joker: Append one joker to each pack
            rng: Random number generator for draws and shuffles
        """
        if pack_count < 0:
            raise ValueError("pack_count cannot be negative")

        cards: list[Card] = []
        for _ in range(pack_count):
            cards.extend(Card(rank, suit) for suit in Suit.playing() for rank in Rank.playing())
            if include_joker:
                cards.append(Card.joker())
        logger.debug("Built deck of %d cards from %d pack(s)", len(cards), pack_count)
        return cls(cards, rng=rng)

    def _require_cards(self) -> list[Card]:
        if self._cards is None:
            raise DeckUninitializedError()
        if not self._cards:
            raise DeckEmptyError()
        return self._cards

    def draw_random(self) -> Card:
        """Remove and return a uniformly chosen card."""
        with self._lock:
            cards = self._require_cards()
            return cards.pop(self._rng.randrange(len(cards)))

    def draw_top(self) -> Card:
        """Remove and return the card at the top (position 0) of the deck."""
        with self._lock:
            return self._require_cards().pop(0)

    def push_bottom(self, card: Card) -> None:
        """Put a card back at the bottom of the deck. No validity checks."""
        with self._lock:
            if self._cards is None:
                raise DeckUninitializedError()
            self._cards.append(card)

    def shuffle(self) -> None:
        """Shuffle the remaining cards in place."""
        with self._lock:
            self._rng.shuffle(self._require_cards())

    @property
    def is_initialized(self) -> bool:
        """Check whether the deck has backing storage."""
        with self._lock:
            return self._cards is not None

    @property
    def cards(self) -> list[Card]:
        """Return a snapshot of the remaining cards, top first."""
        with self._lock:
            return list(self._cards or [])

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards remaining."""
        return len(self)

    def __len__(self) -> int:
        with self._lock:
            return len(self._cards) if self._cards is not None else 0

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __repr__(self) -> str:
        if not self.is_initialized:
            return "Deck(uninitialized)"
        return f"Deck({len(self)} cards)"

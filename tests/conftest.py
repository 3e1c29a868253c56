"""Pytest fixtures for blackjack engine tests."""

import pytest
from random import Random

from blackjack import Card, Deck, Hand, Player, Table


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def deck(rng):
    """A single-pack deck."""
    return Deck.build(1, rng=rng)


@pytest.fixture
def table(rng):
    """A new single-pack table."""
    return Table(pack_count=1, rng=rng)


@pytest.fixture
def player():
    """An unseated player."""
    return Player(name="Alice")


@pytest.fixture
def seated_player(table, player):
    """A player who has joined the table."""
    table.join(player)
    return player


@pytest.fixture
def dealt_table(table, seated_player):
    """A table with one player and a dealt round in play."""
    errors = table.deal()
    assert errors == []
    return table


@pytest.fixture
def dealt_hand(dealt_table, seated_player):
    """The opening hand of the seated player."""
    return seated_player.hands[0]


@pytest.fixture
def make_hand():
    """Build a scored, unattached hand from card strings like 'AS', '10H'."""

    def _make(*cards: str) -> Hand:
        hand = Hand()
        for token in cards:
            hand.add_card(Card.from_string(token))
        hand.evaluate_score()
        return hand

    return _make


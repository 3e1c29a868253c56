"""Tests for the single-player round loop."""

import io

import click
import pytest

from blackjack import BlackjackError, PlayState
from console.session import play_round


class TestPlayRound:
    """Tests for play_round."""

    def test_stick_straight_away(self, table, seated_player, capsys):
        """Test sticking on the opening hand ends the round."""
        play_round(table, seated_player, io.StringIO("s\n"))

        out = capsys.readouterr().out
        hand = seated_player.current_hand
        assert "Dealing new table......Table ready to play!" in out
        assert "Your hand:" in out
        assert f"Sticking with a score of {hand.score().best}" in out
        assert f"Congratulations on a score of {hand.score().best}!" in out
        assert hand.locked
        assert table.play_state == PlayState.ENDGAME

    def test_hit_until_bust(self, table, seated_player, capsys):
        """Test hitting repeatedly ends in a bust."""
        play_round(table, seated_player, io.StringIO("h\n" * 30))

        out = capsys.readouterr().out
        hand = seated_player.current_hand
        assert f"Bust! Your hand is worth {hand.score().best}" in out
        assert "Commiserations" in out
        assert len(hand) > 2
        assert table.play_state == PlayState.ENDGAME

    def test_invalid_then_stick(self, table, seated_player, capsys):
        """Test unknown input is re-asked without acting."""
        play_round(table, seated_player, io.StringIO("fold\nstand\n"))

        out = capsys.readouterr().out
        assert "Invalid action!" in out
        assert len(seated_player.current_hand) == 2

    def test_deal_error(self, dealt_table, seated_player):
        """Test a table that cannot be dealt stops the round."""
        with pytest.raises(BlackjackError, match="errors returned when dealing new table"):
            play_round(dealt_table, seated_player, io.StringIO("s\n"))

    def test_input_closed(self, table, seated_player):
        """Test running out of input aborts mid-round."""
        with pytest.raises(click.Abort):
            play_round(table, seated_player, io.StringIO(""))
        assert table.play_state == PlayState.IN_PLAY

    def test_rounds_repeat(self, table, seated_player):
        """Test a finished table can be played again."""
        play_round(table, seated_player, io.StringIO("s\n"))
        first = seated_player.current_hand
        play_round(table, seated_player, io.StringIO("s\n"))
        assert seated_player.current_hand is not first
        assert len(seated_player.hands) == 1

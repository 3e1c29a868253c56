"""Interactive terminal driver for the blackjack engine."""

"""Text rendering of hands and scores."""

from blackjack import Hand


def render_cards(hand: Hand) -> str:
    """One card per line, e.g. ' - ace of spades'."""
    return "\n".join(f" - {card}" for card in hand.cards)


def render_score(hand: Hand) -> str:
    """Describe the hand's current score for a player still deciding."""
    score = hand.score()
    if hand.is_natural:
        return f"Blackjack! Score: {score.best} (you should probably stick, just saying)"
    if score.best != score.worst:
        return f"Score: {score.best} ({score.worst} with aces counting as 1)"
    return f"Score: {score.best}"


def render_outcome(hand: Hand) -> str:
    """Final message once the round is over."""
    score = hand.score()
    if score.valid:
        return f"Congratulations on a score of {score.best}!"
    return f"Commiserations on a score of {score.best}!"

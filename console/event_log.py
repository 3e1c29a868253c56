"""Forward table events to the logging system."""

import logging

from blackjack import GameEvent, Table

logger = logging.getLogger("console.events")


def log_event(event: GameEvent) -> None:
    """Log a single table event at DEBUG."""
    logger.debug("%s %s", event.event_type.name, event.data)


def attach_event_logger(table: Table) -> None:
    """Subscribe the event logger to every event the table emits."""
    table.subscribe(log_event)

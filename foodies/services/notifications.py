"""Outcome notifications published by the coordinators."""
import logging
from enum import Enum
from typing import Callable, List, Optional

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class NotificationLevel(str, Enum):
    """Severity of a user-facing notification."""

    SUCCESS = "success"
    ERROR = "error"

    def __str__(self) -> str:
        return self.value


class OutcomeEvent(BaseModel):
    """A single user-facing outcome, e.g. "Item added to cart successfully!"."""

    operation: str
    level: NotificationLevel
    message: str
    status: Optional[int] = None


Subscriber = Callable[[OutcomeEvent], None]


class NotificationBus:
    """Fans outcome events out to subscribers such as a UI toast renderer."""

    def __init__(self):
        self._subscribers: List[Subscriber] = []

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        """Register a subscriber; returns a callable that unsubscribes it."""
        self._subscribers.append(subscriber)

        def unsubscribe() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

        return unsubscribe

    def publish(self, event: OutcomeEvent) -> None:
        """Deliver an event to every subscriber."""
        for subscriber in list(self._subscribers):
            try:
                subscriber(event)
            except Exception as e:
                logger.error(
                    f"[NOTIFY] Subscriber failed for {event.operation} - "
                    f"Error: {type(e).__name__}: {str(e)}",
                    exc_info=True,
                )

    def success(self, operation: str, message: str) -> None:
        self.publish(
            OutcomeEvent(
                operation=operation, level=NotificationLevel.SUCCESS, message=message
            )
        )

    def error(self, operation: str, message: str, status: Optional[int] = None) -> None:
        self.publish(
            OutcomeEvent(
                operation=operation,
                level=NotificationLevel.ERROR,
                message=message,
                status=status,
            )
        )


_notification_logger = logging.getLogger("foodies.notifications")


def log_outcome(event: OutcomeEvent) -> None:
    """Default subscriber: write each outcome to the log."""
    if event.level == NotificationLevel.SUCCESS:
        _notification_logger.info(f"[{event.operation}] {event.message}")
    else:
        _notification_logger.warning(
            f"[{event.operation}] {event.message} (status: {event.status})"
        )

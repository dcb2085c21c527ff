"""Shared outcome handling for the coordinators."""
import logging
from typing import Awaitable, Callable, Optional

from foodies.services.gateway.envelope import Envelope, Failure, FailureKind
from foodies.services.notifications import NotificationBus

logger = logging.getLogger(__name__)


class Coordinator:
    """
    Wraps gateway calls with user-facing notifications.

    Every call publishes at most one notification and returns exactly one
    envelope. Exceptions escaping the gateway are converted to a Failure
    with status 500; nothing is raised to the caller.
    """

    def __init__(self, notifier: NotificationBus):
        self.notifier = notifier

    async def run(
        self,
        operation: str,
        call: Callable[[], Awaitable[Envelope]],
        *,
        failure_message: str,
        unexpected_message: str,
        success_message: Optional[str] = None,
    ) -> Envelope:
        """
        Run one gateway call and publish its outcome.

        Args:
            operation: Tag used for logging and on the published event
            call: Zero-argument callable performing the gateway call
            failure_message: Shown when the envelope carries no message
            unexpected_message: Shown when the call raises
            success_message: Shown on success; fetches pass None and stay quiet

        Returns:
            The gateway envelope, or a Failure for an unexpected exception
        """
        try:
            result = await call()
        except Exception as e:
            logger.error(
                f"[{operation}] Unexpected error - Error: {type(e).__name__}: {str(e)}",
                exc_info=True,
            )
            self.notifier.error(operation, unexpected_message, status=500)
            return Failure.of(unexpected_message, status=500, kind=FailureKind.UNEXPECTED)

        if result.success:
            if success_message:
                self.notifier.success(operation, success_message)
            return result

        message = result.error.message or failure_message
        self.notifier.error(operation, message, status=result.error.status)
        return result

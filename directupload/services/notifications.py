"""
Notification port for user-visible upload events.

Upload surfaces receive a Notifier instead of reaching for a global
toast channel. LoggingNotifier is the default; a UI binds its own.
"""
import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class Notifier(ABC):
    """
    Fire-and-forget sink for user-visible messages.

    Implementations must not raise: a failing notification never changes
    the outcome of an upload.
    """

    @abstractmethod
    def success(self, title: str) -> None:
        """Show a success message."""
        pass

    @abstractmethod
    def error(self, title: str) -> None:
        """Show an error message."""
        pass


class LoggingNotifier(Notifier):
    """Notifier that writes notifications to the structured log."""

    def success(self, title: str) -> None:
        logger.info(title, extra={"event": "notification", "notification_level": "success"})

    def error(self, title: str) -> None:
        logger.error(title, extra={"event": "notification", "notification_level": "error"})

"""
User-facing notification channels for the contact form.
"""
from abc import ABC, abstractmethod

import structlog

from frontend.contact.models import Notification, NotificationKind


class BaseNotifier(ABC):
    """Abstract base class for notification channels."""

    @abstractmethod
    def notify(self, kind: NotificationKind, title: str, description: str) -> Notification:
        """Emit a one-shot notification and return it."""
        pass


class RecordingNotifier(BaseNotifier):
    """
    Keeps emitted notifications until the UI dismisses them.

    Used by views that render toasts from a queue, and by tests.
    """

    def __init__(self):
        self.notifications: list[Notification] = []

    def notify(self, kind: NotificationKind, title: str, description: str) -> Notification:
        notification = Notification(kind=kind, title=title, description=description)
        self.notifications.append(notification)
        return notification

    def dismiss(self, notification: Notification) -> None:
        if notification in self.notifications:
            self.notifications.remove(notification)

    def clear(self) -> None:
        self.notifications.clear()


class LoggingNotifier(BaseNotifier):
    """Writes notifications to the structured log (headless use)."""

    def __init__(self):
        self.logger = structlog.get_logger().bind(channel="notifier")

    def notify(self, kind: NotificationKind, title: str, description: str) -> Notification:
        notification = Notification(kind=kind, title=title, description=description)
        if kind == NotificationKind.ERROR:
            self.logger.warning("notification", kind=kind.value, title=title, description=description)
        else:
            self.logger.info("notification", kind=kind.value, title=title, description=description)
        return notification

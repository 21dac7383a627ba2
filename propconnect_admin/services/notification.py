"""Notification service collecting the toasts shown to the operator."""

import logging
from collections import deque

from propconnect_admin.models.enums import NotificationVariant
from propconnect_admin.models.notification import Notification

logger = logging.getLogger(__name__)


class Notifier:
    """
    Buffer of pending operator notifications.

    Notifications are kept until drained by the notifications endpoint; the oldest are
    dropped once `max_pending` is reached.
    """

    def __init__(self, max_pending: int = 50):
        self._pending: deque[Notification] = deque(maxlen=max_pending)

    def notify(
        self,
        title: str,
        description: str,
        variant: NotificationVariant = NotificationVariant.DEFAULT,
    ) -> Notification:
        """
        Record a notification and log it.

        Args:
            title: Short headline, e.g. "Login Failed".
            description: Sentence shown under the headline.
            variant: DESTRUCTIVE for failures, DEFAULT otherwise.

        Returns:
            Notification: The recorded notification.
        """
        notification = Notification(title=title, description=description, variant=variant)
        self._pending.append(notification)
        if variant == NotificationVariant.DESTRUCTIVE:
            logger.warning(f"{title}: {description}")
        else:
            logger.info(f"{title}: {description}")
        return notification

    def error(self, title: str, description: str) -> Notification:
        return self.notify(title, description, NotificationVariant.DESTRUCTIVE)

    @property
    def pending(self) -> list[Notification]:
        return list(self._pending)

    def drain(self) -> list[Notification]:
        """Return every pending notification, oldest first, and forget them."""
        drained = list(self._pending)
        self._pending.clear()
        return drained

"""Feeding reminder notifications.

The scheduler only produces reminder content; a notifier is whatever
actually delivers it at the due time.
"""

import itertools
import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional

from domain.models import RecordId


@dataclass(frozen=True)
class ScheduledNotification:
    notification_id: str
    starter_id: Optional[RecordId]
    fires_at: datetime
    title: str
    body: str


class FeedingNotifier(ABC):
    """Abstract notifier interface."""

    @abstractmethod
    def schedule(
        self,
        starter_id: Optional[RecordId],
        fires_at: datetime,
        title: str,
        body: str,
    ) -> str:
        """Schedule a notification.

        Args:
            starter_id: Starter the reminder belongs to
            fires_at: When the notification should fire
            title: Notification title
            body: Notification body

        Returns:
            Notification ID usable with cancel()
        """

    @abstractmethod
    def cancel(self, notification_id: str) -> None:
        """Cancel a scheduled notification. Unknown IDs are ignored."""


class NullNotifier(FeedingNotifier):
    """Notifier that delivers nothing."""

    def __init__(self) -> None:
        self._ids = itertools.count(1)

    def schedule(
        self,
        starter_id: Optional[RecordId],
        fires_at: datetime,
        title: str,
        body: str,
    ) -> str:
        return f"null-{next(self._ids)}"

    def cancel(self, notification_id: str) -> None:
        pass


class InMemoryNotifier(FeedingNotifier):
    """Thread-safe notifier that keeps pending notifications in memory."""

    def __init__(self) -> None:
        self._pending: Dict[str, ScheduledNotification] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def schedule(
        self,
        starter_id: Optional[RecordId],
        fires_at: datetime,
        title: str,
        body: str,
    ) -> str:
        with self._lock:
            notification_id = f"reminder-{next(self._ids)}"
            self._pending[notification_id] = ScheduledNotification(
                notification_id=notification_id,
                starter_id=starter_id,
                fires_at=fires_at,
                title=title,
                body=body,
            )
        logging.debug("Scheduled %s for starter %s at %s", notification_id, starter_id, fires_at)
        return notification_id

    def cancel(self, notification_id: str) -> None:
        with self._lock:
            removed = self._pending.pop(notification_id, None)
        if removed is not None:
            logging.debug("Cancelled %s", notification_id)

    def pending(self) -> List[ScheduledNotification]:
        """Pending notifications ordered by fire time."""
        with self._lock:
            return sorted(self._pending.values(), key=lambda n: n.fires_at)

    def due(self, now: datetime) -> List[ScheduledNotification]:
        """Pending notifications whose fire time has been reached."""
        return [n for n in self.pending() if n.fires_at <= now]

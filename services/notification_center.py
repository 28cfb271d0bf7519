import logging
from datetime import datetime
from database.notification_dao import NotificationDAO
from models.notification import PendingNotification
from utils.constants import REMINDER_TITLE

logger = logging.getLogger(__name__)


class NotificationCenter:
    """Local notification sink backed by the scheduled_notifications table.

    schedule/cancel are idempotent: scheduling an identifier twice keeps the
    latest request, cancelling an unknown identifier is a no-op.
    """

    def __init__(self, notification_dao: NotificationDAO):
        self._dao = notification_dao

    def schedule(
        self,
        identifier: str,
        fire_at: datetime,
        message: str,
        title: str = REMINDER_TITLE,
        subscription_id: str | None = None,
    ) -> None:
        self._dao.upsert(identifier, fire_at, title, message, subscription_id)

    def cancel(self, identifier: str) -> None:
        if not self._dao.delete(identifier):
            logger.debug("No pending notification %s to cancel", identifier)

    def cancel_all(self) -> None:
        removed = self._dao.delete_all()
        logger.debug("Removed %d pending notifications", removed)

    def get_pending(self) -> list[PendingNotification]:
        return self._dao.get_all()

    def pop_due(self, ref: datetime) -> list[PendingNotification]:
        """Deliver: return and forget every notification whose time has come."""
        due = self._dao.take_due(ref)
        for n in due:
            logger.info("Delivering notification %s: %s", n.identifier, n.message)
        return due


class ReminderInbox:
    """Delivered reminders the user has not acknowledged yet.

    pop_due removes rows from the table, so until the user presses OK this is
    the only copy. A redelivered identifier replaces the older entry in place.
    """

    def __init__(self):
        self._items: list[PendingNotification] = []

    def __len__(self) -> int:
        return len(self._items)

    @property
    def items(self) -> list[PendingNotification]:
        return list(self._items)

    def add(self, notifications: list[PendingNotification]) -> bool:
        """Merge a delivery. Returns True when anything arrived."""
        positions = {n.identifier: i for i, n in enumerate(self._items)}
        for n in notifications:
            if n.identifier in positions:
                self._items[positions[n.identifier]] = n
            else:
                positions[n.identifier] = len(self._items)
                self._items.append(n)
        return bool(notifications)

    def acknowledge(self) -> None:
        logger.debug("Acknowledged %d reminders", len(self._items))
        self._items.clear()

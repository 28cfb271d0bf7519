from datetime import datetime

import pytest

from database.db_manager import DatabaseManager
from database.notification_dao import NotificationDAO
from database.subscription_dao import SubscriptionDAO
from models.subscription import Subscription
from services.notification_center import NotificationCenter
from services.reminder_service import ReminderService
from services.subscription_service import SubscriptionService

NOW = datetime(2026, 3, 10, 9, 0)


def make_sub(id="s1", name="Netflix", price=15.99, billing_date=None, category="Entertainment"):
    return Subscription(
        id=id, name=name, monthly_price=price,
        billing_date=billing_date, category=category,
    )


class RecordingSink:
    """Notification sink double that records every request in order."""

    def __init__(self):
        self.calls = []

    def schedule(self, identifier, fire_at, message, title=None, subscription_id=None):
        self.calls.append(("schedule", identifier, fire_at, message))

    def cancel(self, identifier):
        self.calls.append(("cancel", identifier))

    def cancel_all(self):
        self.calls.append(("cancel_all",))


@pytest.fixture
def db():
    manager = DatabaseManager(":memory:")
    manager.initialize()
    yield manager
    manager.close()


@pytest.fixture
def center(db):
    return NotificationCenter(NotificationDAO(db))


@pytest.fixture
def clock():
    """Mutable clock: tests move time by assigning clock.now."""
    class _Clock:
        now = NOW

        def __call__(self):
            return self.now
    return _Clock()


@pytest.fixture
def subscription_service(db, center, clock):
    reminders = ReminderService(center, clock=clock)
    return SubscriptionService(SubscriptionDAO(db), reminders)

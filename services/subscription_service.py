import logging
import uuid
from datetime import datetime
from database.subscription_dao import SubscriptionDAO
from models.subscription import Subscription
from services.reminder_service import Reminder, ReminderService
from utils.constants import DEFAULT_ICON

logger = logging.getLogger(__name__)


class SubscriptionService:
    def __init__(self, subscription_dao: SubscriptionDAO, reminder_service: ReminderService):
        self._dao = subscription_dao
        self._reminders = reminder_service

    def get_all(self) -> list[Subscription]:
        return self._dao.get_all()

    def get_by_id(self, subscription_id: str) -> Subscription | None:
        return self._dao.get_by_id(subscription_id)

    def create(
        self,
        name: str,
        monthly_price: float,
        billing_date: datetime | None,
        category: str,
        icon_name: str = DEFAULT_ICON,
    ) -> Subscription:
        name, category = self._validate(name, monthly_price, category)
        sub = self._dao.create(
            subscription_id=uuid.uuid4().hex,
            name=name, monthly_price=monthly_price, billing_date=billing_date,
            category=category, icon_name=icon_name or DEFAULT_ICON,
        )
        logger.info("Added subscription %s (%s)", sub.name, sub.id)
        self._reminders.schedule_for(sub)
        return sub

    def update(
        self,
        subscription_id: str,
        name: str,
        monthly_price: float,
        billing_date: datetime | None,
        category: str,
        icon_name: str = DEFAULT_ICON,
    ) -> Subscription:
        name, category = self._validate(name, monthly_price, category)
        if self._dao.get_by_id(subscription_id) is None:
            raise ValueError("Subscription no longer exists.")
        sub = self._dao.update(
            subscription_id=subscription_id,
            name=name, monthly_price=monthly_price, billing_date=billing_date,
            category=category, icon_name=icon_name or DEFAULT_ICON,
        )
        self._reminders.update_for(sub)
        return sub

    def delete(self, subscription_id: str):
        self._reminders.cancel_for(subscription_id)
        self._dao.delete(subscription_id)
        logger.info("Deleted subscription %s", subscription_id)

    def reschedule_all(self) -> list[Reminder]:
        return self._reminders.reschedule_all(self._dao.get_all())

    def _validate(self, name, monthly_price, category) -> tuple[str, str]:
        name = (name or "").strip()
        if not name:
            raise ValueError("Please enter a subscription name")
        if monthly_price is None:
            raise ValueError("Please enter a monthly price")
        if monthly_price <= 0:
            raise ValueError("Price must be greater than 0")
        category = (category or "").strip()
        if not category:
            raise ValueError("Please choose a category")
        return name, category

"""Reminder scheduling for subscription charges.

A reminder fires ``REMINDER_LEAD_DAYS`` before a subscription's billing date.
Reminders are never stored by this module: the identifier is derived from the
subscription id, so cancelling or replacing one only needs the subscription.

The module-level functions are pure and decide *what* should be scheduled.
``ReminderService`` applies those decisions to a notification sink, i.e. any
object with ``schedule(identifier, fire_at, message, ...)``,
``cancel(identifier)`` and ``cancel_all()``.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable, Iterable, Optional

from models.subscription import Subscription
from utils.constants import REMINDER_ID_PREFIX, REMINDER_LEAD_DAYS, REMINDER_TITLE
from utils.currency import format_currency
from utils.date_helpers import as_datetime, truncate_to_minute

logger = logging.getLogger(__name__)

MISSING_BILLING_DATE = "missing_billing_date"
PAST_FIRE_TIME = "past_fire_time"


@dataclass(frozen=True)
class Reminder:
    identifier: str
    fire_at: datetime
    message: str
    title: str = REMINDER_TITLE
    subscription_id: str = ""
    subscription_name: str = ""
    amount: float = 0.0


@dataclass(frozen=True)
class ReminderPlan:
    """Update of one subscription: always cancel, then maybe schedule."""
    cancel: str
    schedule: Optional[Reminder]


@dataclass(frozen=True)
class BulkReminderPlan:
    """Global rescheduling: drop every pending reminder, then schedule these."""
    schedule: list[Reminder] = field(default_factory=list)
    cancel_all: bool = True


def reminder_identifier(subscription_id) -> str:
    """Stable per subscription; any non-blank id works, it is only rendered as text."""
    return f"{REMINDER_ID_PREFIX}{subscription_id}"


def check_subscription(subscription: Subscription) -> None:
    """Reject records the input layer should never have let through."""
    if subscription is None:
        raise ValueError("Subscription is required.")
    if subscription.id is None or not str(subscription.id).strip():
        raise ValueError("Subscription id is required.")
    if not isinstance(subscription.name, str) or not subscription.name.strip():
        raise ValueError(f"Subscription {subscription.id} has no name.")


def _fire_time(subscription: Subscription) -> datetime | None:
    if subscription.billing_date is None:
        return None
    return as_datetime(subscription.billing_date) - timedelta(days=REMINDER_LEAD_DAYS)


def skip_reason(subscription: Subscription, now: datetime) -> str | None:
    """Why compute_reminder yields None for this subscription, or None if it doesn't."""
    check_subscription(subscription)
    fire_at = _fire_time(subscription)
    if fire_at is None:
        return MISSING_BILLING_DATE
    if fire_at < now:
        return PAST_FIRE_TIME
    return None


def compute_reminder(
    subscription: Subscription,
    now: datetime,
    format_amount: Callable[[float], str] = format_currency,
) -> Reminder | None:
    """Reminder for the next charge, or None when there is nothing to schedule.

    None covers two expected outcomes: no billing date, and a fire time that
    has already passed. A malformed record raises ValueError instead.
    """
    if skip_reason(subscription, now) is not None:
        return None
    fire_at = _fire_time(subscription)
    return Reminder(
        identifier=reminder_identifier(subscription.id),
        fire_at=truncate_to_minute(fire_at),
        message=(
            f"{subscription.name} will be charged "
            f"{format_amount(subscription.monthly_price)} in {REMINDER_LEAD_DAYS} days"
        ),
        subscription_id=str(subscription.id),
        subscription_name=subscription.name,
        amount=subscription.monthly_price,
    )


def reconcile(
    subscription: Subscription,
    now: datetime,
    format_amount: Callable[[float], str] = format_currency,
) -> ReminderPlan:
    reminder = compute_reminder(subscription, now, format_amount)
    return ReminderPlan(cancel=reminder_identifier(subscription.id), schedule=reminder)


def reconcile_all(
    subscriptions: Iterable[Subscription],
    now: datetime,
    format_amount: Callable[[float], str] = format_currency,
) -> BulkReminderPlan:
    reminders = []
    for sub in subscriptions:
        reminder = compute_reminder(sub, now, format_amount)
        if reminder is not None:
            reminders.append(reminder)
    return BulkReminderPlan(schedule=reminders)


class ReminderService:
    def __init__(
        self,
        notification_sink,
        clock: Callable[[], datetime] = datetime.now,
        format_amount: Callable[[float], str] = format_currency,
    ):
        self._sink = notification_sink
        self._clock = clock
        self._format_amount = format_amount

    def schedule_for(self, subscription: Subscription) -> Reminder | None:
        now = self._clock()
        reminder = compute_reminder(subscription, now, self._format_amount)
        if reminder is None:
            self._log_skip(subscription, now)
            return None
        self._submit(reminder)
        return reminder

    def cancel_for(self, subscription_id: str) -> None:
        """Cancel by derived identifier; fine when nothing was ever scheduled."""
        identifier = reminder_identifier(subscription_id)
        self._sink.cancel(identifier)
        logger.info("Cancelled reminder %s", identifier)

    def update_for(self, subscription: Subscription) -> Reminder | None:
        now = self._clock()
        plan = reconcile(subscription, now, self._format_amount)
        self._sink.cancel(plan.cancel)
        if plan.schedule is None:
            self._log_skip(subscription, now)
            return None
        self._submit(plan.schedule)
        return plan.schedule

    def reschedule_all(self, subscriptions: Iterable[Subscription]) -> list[Reminder]:
        subscriptions = list(subscriptions)
        plan = reconcile_all(subscriptions, self._clock(), self._format_amount)
        if plan.cancel_all:
            self._sink.cancel_all()
        for reminder in plan.schedule:
            self._submit(reminder)
        logger.info(
            "Rescheduled reminders for %d subscriptions (%d scheduled)",
            len(subscriptions), len(plan.schedule),
        )
        return plan.schedule

    def _submit(self, reminder: Reminder) -> None:
        self._sink.schedule(
            reminder.identifier,
            reminder.fire_at,
            reminder.message,
            title=reminder.title,
            subscription_id=reminder.subscription_id,
        )
        logger.info(
            "Scheduled reminder for %s on %s",
            reminder.subscription_name, reminder.fire_at.strftime("%Y-%m-%d %H:%M"),
        )

    def _log_skip(self, subscription: Subscription, now: datetime) -> None:
        reason = skip_reason(subscription, now)
        if reason == MISSING_BILLING_DATE:
            logger.info("No billing date for subscription %s; no reminder", subscription.name)
        elif reason == PAST_FIRE_TIME:
            logger.info("Reminder time already passed for subscription %s", subscription.name)

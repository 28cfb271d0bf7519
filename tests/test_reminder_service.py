"""Tests for reminder timing, identifiers and plan application."""

from datetime import date, datetime, timedelta

import pytest

from services.reminder_service import (
    MISSING_BILLING_DATE,
    PAST_FIRE_TIME,
    ReminderService,
    compute_reminder,
    reconcile,
    reconcile_all,
    reminder_identifier,
    skip_reason,
)
from tests.conftest import NOW, RecordingSink, make_sub


class TestComputeReminder:

    def test_fires_two_days_before_billing(self):
        sub = make_sub(billing_date=NOW + timedelta(days=3))
        reminder = compute_reminder(sub, NOW)
        assert reminder is not None
        assert reminder.fire_at == NOW + timedelta(days=1)

    @pytest.mark.parametrize("lead", [
        timedelta(days=2, minutes=1),
        timedelta(days=5),
        timedelta(days=31, hours=7),
    ])
    def test_fire_time_is_billing_minus_two_days(self, lead):
        billing = NOW + lead
        reminder = compute_reminder(make_sub(billing_date=billing), NOW)
        assert reminder.fire_at == billing - timedelta(days=2)

    def test_billing_tomorrow_is_skipped(self):
        sub = make_sub(billing_date=NOW + timedelta(days=1))
        assert compute_reminder(sub, NOW) is None
        assert skip_reason(sub, NOW) == PAST_FIRE_TIME

    def test_past_billing_date_is_skipped(self):
        sub = make_sub(billing_date=NOW - timedelta(days=10))
        assert compute_reminder(sub, NOW) is None

    def test_fire_time_exactly_now_is_scheduled(self):
        sub = make_sub(billing_date=NOW + timedelta(days=2))
        reminder = compute_reminder(sub, NOW)
        assert reminder is not None
        assert reminder.fire_at == NOW

    def test_missing_billing_date_yields_none(self):
        sub = make_sub(billing_date=None)
        assert compute_reminder(sub, NOW) is None
        assert skip_reason(sub, NOW) == MISSING_BILLING_DATE

    def test_time_of_day_kept_and_seconds_dropped(self):
        sub = make_sub(billing_date=datetime(2026, 5, 10, 21, 30, 45, 120))
        reminder = compute_reminder(sub, NOW)
        assert reminder.fire_at == datetime(2026, 5, 8, 21, 30)

    def test_plain_date_counts_from_midnight(self):
        sub = make_sub(billing_date=date(2026, 3, 20))
        reminder = compute_reminder(sub, NOW)
        assert reminder.fire_at == datetime(2026, 3, 18, 0, 0)

    def test_calendar_subtraction_crosses_month_boundary(self):
        sub = make_sub(billing_date=datetime(2026, 4, 1, 8, 0))
        reminder = compute_reminder(sub, NOW)
        assert reminder.fire_at == datetime(2026, 3, 30, 8, 0)

    def test_identifier_and_message(self):
        sub = make_sub(id="abc123", name="Netflix", price=15.99,
                       billing_date=NOW + timedelta(days=7))
        reminder = compute_reminder(sub, NOW)
        assert reminder.identifier == "subscription_abc123"
        assert reminder.message == "Netflix will be charged $15.99 in 2 days"
        assert reminder.title == "Subscription Reminder"
        assert reminder.subscription_id == "abc123"
        assert reminder.amount == 15.99

    def test_identifier_does_not_depend_on_now(self):
        sub = make_sub(id="xyz", billing_date=NOW + timedelta(days=30))
        first = compute_reminder(sub, NOW)
        later = compute_reminder(sub, NOW + timedelta(days=20))
        assert first.identifier == later.identifier == reminder_identifier("xyz")

    def test_custom_amount_formatter(self):
        sub = make_sub(price=9.5, billing_date=NOW + timedelta(days=4))
        reminder = compute_reminder(sub, NOW, format_amount=lambda v: f"{v:.2f} EUR")
        assert reminder.message == "Netflix will be charged 9.50 EUR in 2 days"

    def test_repeated_calls_are_identical(self):
        sub = make_sub(billing_date=NOW + timedelta(days=9))
        assert compute_reminder(sub, NOW) == compute_reminder(sub, NOW)


class TestContractViolations:

    @pytest.mark.parametrize("bad_id", ["", "   ", None])
    def test_missing_id_raises(self, bad_id):
        sub = make_sub(id=bad_id, billing_date=NOW + timedelta(days=5))
        with pytest.raises(ValueError):
            compute_reminder(sub, NOW)

    @pytest.mark.parametrize("bad_name", ["", "  ", None])
    def test_missing_name_raises(self, bad_name):
        sub = make_sub(name=bad_name, billing_date=NOW + timedelta(days=5))
        with pytest.raises(ValueError):
            compute_reminder(sub, NOW)

    def test_non_string_id_is_opaque(self):
        reminder = compute_reminder(make_sub(id=42, billing_date=NOW + timedelta(days=5)), NOW)
        assert reminder.identifier == "subscription_42"
        assert reminder.subscription_id == "42"

    def test_malformed_record_raises_even_without_billing_date(self):
        # A soft "no billing date" outcome must not hide a broken record
        with pytest.raises(ValueError):
            compute_reminder(make_sub(id="", billing_date=None), NOW)


class TestReconcile:

    def test_always_cancels_own_identifier(self):
        plan = reconcile(make_sub(id="s9", billing_date=None), NOW)
        assert plan.cancel == "subscription_s9"
        assert plan.schedule is None

    def test_idempotent_for_same_now(self):
        sub = make_sub(billing_date=NOW + timedelta(days=6))
        assert reconcile(sub, NOW) == reconcile(sub, NOW)

    def test_reconcile_all_keeps_input_order_and_skips(self):
        subs = [
            make_sub(id="late", billing_date=NOW + timedelta(days=40)),
            make_sub(id="past", billing_date=NOW - timedelta(days=1)),
            make_sub(id="none", billing_date=None),
            make_sub(id="soon", billing_date=NOW + timedelta(days=3)),
        ]
        plan = reconcile_all(subs, NOW)
        assert plan.cancel_all is True
        assert [r.identifier for r in plan.schedule] == ["subscription_late", "subscription_soon"]

    def test_reconcile_all_empty(self):
        plan = reconcile_all([], NOW)
        assert plan.cancel_all is True
        assert plan.schedule == []


class TestReminderService:

    def test_schedule_for_submits_reminder(self):
        sink = RecordingSink()
        svc = ReminderService(sink, clock=lambda: NOW)
        reminder = svc.schedule_for(make_sub(billing_date=NOW + timedelta(days=3)))
        assert sink.calls == [("schedule", "subscription_s1", reminder.fire_at, reminder.message)]

    def test_schedule_for_past_reminder_does_nothing(self):
        sink = RecordingSink()
        svc = ReminderService(sink, clock=lambda: NOW)
        assert svc.schedule_for(make_sub(billing_date=NOW)) is None
        assert sink.calls == []

    def test_update_cancels_before_scheduling(self):
        sink = RecordingSink()
        svc = ReminderService(sink, clock=lambda: NOW)
        svc.update_for(make_sub(billing_date=NOW + timedelta(days=5)))
        assert [c[0] for c in sink.calls] == ["cancel", "schedule"]
        assert sink.calls[0][1] == sink.calls[1][1] == "subscription_s1"

    def test_update_without_billing_date_only_cancels(self):
        sink = RecordingSink()
        svc = ReminderService(sink, clock=lambda: NOW)
        assert svc.update_for(make_sub(billing_date=None)) is None
        assert sink.calls == [("cancel", "subscription_s1")]

    def test_cancel_for_unscheduled_subscription(self):
        sink = RecordingSink()
        ReminderService(sink, clock=lambda: NOW).cancel_for("never-scheduled")
        assert sink.calls == [("cancel", "subscription_never-scheduled")]

    def test_reschedule_all_cancels_everything_first(self):
        sink = RecordingSink()
        svc = ReminderService(sink, clock=lambda: NOW)
        scheduled = svc.reschedule_all([
            make_sub(id="a", billing_date=NOW + timedelta(days=3)),
            make_sub(id="b", billing_date=NOW - timedelta(days=3)),
            make_sub(id="c", billing_date=NOW + timedelta(days=8)),
        ])
        assert sink.calls[0] == ("cancel_all",)
        assert [c[1] for c in sink.calls[1:]] == ["subscription_a", "subscription_c"]
        assert len(scheduled) == 2

    def test_uses_injected_clock(self):
        sink = RecordingSink()
        sub = make_sub(billing_date=NOW + timedelta(days=3))
        later = ReminderService(sink, clock=lambda: NOW + timedelta(days=2))
        assert later.schedule_for(sub) is None
        assert sink.calls == []

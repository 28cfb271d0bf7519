import os
import sys
import logging
from functools import partial
import customtkinter as ctk

# Ensure project root is on sys.path when run directly
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from database.db_manager import DatabaseManager
from database.subscription_dao import SubscriptionDAO
from database.notification_dao import NotificationDAO

from services.notification_center import NotificationCenter
from services.reminder_service import ReminderService
from services.subscription_service import SubscriptionService
from services.stats_service import StatsService

from ui.app_window import AppWindow
from utils.app_config import get_db_folder, get_log_level
from utils.currency import format_currency
from utils.date_helpers import now


def main():
    # ── Bootstrap: logging and DB folder from pre-DB config ───────────────────
    logging.basicConfig(
        level=get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    db = DatabaseManager.open(db_folder=get_db_folder())

    # ── DAOs ─────────────────────────────────────────────────────────────────
    subscription_dao = SubscriptionDAO(db)
    notification_dao = NotificationDAO(db)

    # ── Services ─────────────────────────────────────────────────────────────
    format_amount = partial(format_currency, symbol=db.get_setting("currency_symbol", "$"))
    notification_center = NotificationCenter(notification_dao)
    reminder_svc = ReminderService(notification_center, format_amount=format_amount)
    subscription_svc = SubscriptionService(subscription_dao, reminder_svc)
    stats_svc = StatsService(subscription_dao)

    # ── Deliver what came due while closed, then rebuild the rest ─────────────
    startup_notifications = notification_center.pop_due(now())
    subscription_svc.reschedule_all()

    # ── Appearance ───────────────────────────────────────────────────────────
    ctk.set_appearance_mode(db.get_setting("appearance_mode", "system"))
    ctk.set_default_color_theme("blue")

    app = AppWindow(
        subscription_service=subscription_svc,
        stats_service=stats_svc,
        notification_center=notification_center,
        db=db,
        format_amount=format_amount,
        date_format=db.get_setting("date_format", "MM/DD/YYYY"),
        startup_notifications=startup_notifications,
    )

    def on_close():
        db.close()
        app.destroy()

    app.protocol("WM_DELETE_WINDOW", on_close)
    app.mainloop()


if __name__ == "__main__":
    main()

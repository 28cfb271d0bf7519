import logging
import customtkinter as ctk
from database.db_manager import DatabaseManager
from models.notification import PendingNotification
from services.notification_center import NotificationCenter, ReminderInbox
from services.stats_service import StatsService
from services.subscription_service import SubscriptionService
from ui.components.alert_banner import AlertBanner
from ui.components.reminder_dialog import ReminderDialog
from ui.tabs.home_tab import HomeTab
from ui.tabs.stats_tab import StatsTab
from ui.tabs.settings_tab import SettingsTab
from utils.constants import APP_NAME, APP_WIDTH, APP_HEIGHT, NOTIFICATION_POLL_MS
from utils.currency import format_currency
from utils.date_helpers import now

logger = logging.getLogger(__name__)

_REFRESH_SCOPES: dict[str, set[str]] = {
    "subscription": {"home", "stats", "settings"},
    "settings":     {"settings"},
    "full":         {"home", "stats", "settings"},
}


class AppWindow(ctk.CTk):
    def __init__(
        self,
        subscription_service: SubscriptionService,
        stats_service: StatsService,
        notification_center: NotificationCenter,
        db: DatabaseManager,
        format_amount=format_currency,
        date_format: str = "MM/DD/YYYY",
        startup_notifications: list[PendingNotification] | None = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self._sub_svc = subscription_service
        self._stats_svc = stats_service
        self._center = notification_center
        self._db = db
        self._fmt = format_amount
        self._date_format = date_format
        self._reminder_dialog: ReminderDialog | None = None
        self._inbox = ReminderInbox()
        self._startup_delivery = list(startup_notifications or [])

        self.title(APP_NAME)
        self.minsize(APP_WIDTH, APP_HEIGHT)
        self.geometry(f"{APP_WIDTH}x{APP_HEIGHT}")

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        self._build_banner_area()
        self._build_tabs()

        # First delivery check once the window is drawn
        self.after(500, self._poll_notifications)

    def _build_banner_area(self):
        self._banner_frame = ctk.CTkFrame(self, fg_color="transparent", height=0)
        self._banner_frame.grid(row=0, column=0, sticky="ew", padx=8, pady=(6, 0))

    def _build_tabs(self):
        self._tabview = ctk.CTkTabview(self)
        self._tabview.grid(row=1, column=0, sticky="nsew", padx=8, pady=(0, 8))

        for tab_name in ("Home", "Stats", "Settings"):
            self._tabview.add(tab_name)
            self._tabview.tab(tab_name).grid_columnconfigure(0, weight=1)
            self._tabview.tab(tab_name).grid_rowconfigure(0, weight=1)

        self._home_tab = HomeTab(
            self._tabview.tab("Home"),
            subscription_service=self._sub_svc,
            notify_refresh=self.notify_tabs_refresh,
            format_amount=self._fmt,
            date_format=self._date_format,
        )
        self._home_tab.grid(row=0, column=0, sticky="nsew")

        self._stats_tab = StatsTab(
            self._tabview.tab("Stats"),
            stats_service=self._stats_svc,
            format_amount=self._fmt,
        )
        self._stats_tab.grid(row=0, column=0, sticky="nsew")

        self._settings_tab = SettingsTab(
            self._tabview.tab("Settings"),
            db=self._db,
            subscription_service=self._sub_svc,
            notification_center=self._center,
            notify_refresh=self.notify_tabs_refresh,
        )
        self._settings_tab.grid(row=0, column=0, sticky="nsew")

    # ── Refresh ──────────────────────────────────────────────────────────────
    def notify_tabs_refresh(self, scope: str = "full", message: str | None = None, kind: str = "success"):
        tabs = _REFRESH_SCOPES.get(scope, _REFRESH_SCOPES["full"])
        if "home"     in tabs: self._home_tab.refresh()
        if "stats"    in tabs: self._stats_tab.refresh()
        if "settings" in tabs: self._settings_tab.refresh()
        if message:
            self.show_banner(message, kind)

    # ── Banners & notifications ──────────────────────────────────────────────
    def show_banner(self, message: str, kind: str = "success"):
        for w in self._banner_frame.winfo_children():
            w.destroy()
        AlertBanner(self._banner_frame, message=message, kind=kind).pack(fill="x", pady=2)

    def _poll_notifications(self):
        due = self._startup_delivery + self._center.pop_due(now())
        self._startup_delivery = []
        if due and not self._db.get_bool_setting("notifications_enabled", default=True):
            logger.info("Notifications disabled; dropped %d due reminders", len(due))
        elif self._inbox.add(due):
            # Reopen with everything still unread, not just this batch
            if self._reminder_dialog and self._reminder_dialog.winfo_exists():
                self._reminder_dialog.destroy()
            self._reminder_dialog = ReminderDialog(
                self, self._inbox.items, on_acknowledge=self._inbox.acknowledge,
            )
        if due:
            self._settings_tab.refresh()
        self.after(NOTIFICATION_POLL_MS, self._poll_notifications)

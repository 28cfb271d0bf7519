import customtkinter as ctk
from tkinter import filedialog

from database.db_manager import DatabaseManager
from services.notification_center import NotificationCenter
from services.subscription_service import SubscriptionService
from utils.app_config import get_db_folder, set_db_folder
from utils.date_helpers import DATE_FORMAT_OPTIONS


class SettingsTab(ctk.CTkFrame):
    """Settings tab: DB folder, reminders, app preferences."""

    def __init__(
        self,
        master,
        db: DatabaseManager,
        subscription_service: SubscriptionService,
        notification_center: NotificationCenter,
        notify_refresh,
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._db = db
        self._sub_svc = subscription_service
        self._center = notification_center
        self._notify_refresh = notify_refresh

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)

        scroll = ctk.CTkScrollableFrame(self, fg_color="transparent")
        scroll.grid(row=0, column=0, sticky="nsew")
        scroll.grid_columnconfigure(0, weight=1)

        self._build_reminders_section(scroll)
        self._build_app_settings_section(scroll)
        self._build_db_folder_section(scroll)

    def refresh(self):
        """Re-read settings from DB and update displayed values."""
        appearance = self._db.get_setting("appearance_mode", "system")
        self._appearance_var.set(appearance.title())
        self._currency_var.set(self._db.get_setting("currency_symbol", "$"))
        date_fmt = self._db.get_setting("date_format", "MM/DD/YYYY")
        if date_fmt in DATE_FORMAT_OPTIONS:
            self._date_fmt_var.set(date_fmt)
        self._notif_var.set(self._db.get_bool_setting("notifications_enabled", default=True))
        self._update_pending_label()

    # ── Section 1: Reminders ──────────────────────────────────────────────────

    def _build_reminders_section(self, parent):
        section = self._make_section(parent, "Reminders", row=0)

        self._notif_var = ctk.BooleanVar(
            value=self._db.get_bool_setting("notifications_enabled", default=True)
        )
        ctk.CTkSwitch(
            section,
            text="Show a reminder 2 days before each charge",
            variable=self._notif_var,
            command=self._toggle_notifications,
        ).grid(row=0, column=0, columnspan=2, sticky="w", padx=8, pady=6)

        self._pending_label = ctk.CTkLabel(
            section, text="", text_color="gray60", font=ctk.CTkFont(size=11), anchor="w",
        )
        self._pending_label.grid(row=1, column=0, sticky="w", padx=8, pady=(0, 6))

        ctk.CTkButton(
            section, text="Reschedule All Reminders", width=190,
            command=self._reschedule_all,
        ).grid(row=1, column=1, padx=8, pady=(0, 6), sticky="e")
        self._update_pending_label()

    def _toggle_notifications(self):
        self._db.set_bool_setting("notifications_enabled", self._notif_var.get())

    def _reschedule_all(self):
        reminders = self._sub_svc.reschedule_all()
        self._update_pending_label()
        self._notify_refresh(
            "settings",
            f"Rescheduled {len(reminders)} reminder{'s' if len(reminders) != 1 else ''}.",
            kind="info",
        )

    def _update_pending_label(self):
        pending = self._center.get_pending()
        if pending:
            nxt = pending[0]
            self._pending_label.configure(
                text=f"{len(pending)} pending · next on {nxt.fire_at.strftime('%b %d, %H:%M')}"
            )
        else:
            self._pending_label.configure(text="No pending reminders")

    # ── Section 2: App settings ───────────────────────────────────────────────

    def _build_app_settings_section(self, parent):
        section = self._make_section(parent, "App Settings", row=1)

        ctk.CTkLabel(section, text="Appearance:", anchor="e", width=120).grid(
            row=0, column=0, padx=(8, 4), pady=6, sticky="e"
        )
        self._appearance_var = ctk.StringVar(
            value=self._db.get_setting("appearance_mode", "system").title()
        )
        ctk.CTkComboBox(
            section, values=["System", "Light", "Dark"],
            variable=self._appearance_var, width=180, state="readonly",
        ).grid(row=0, column=1, padx=4, pady=6, sticky="w")

        ctk.CTkLabel(section, text="Currency Symbol:", anchor="e", width=120).grid(
            row=1, column=0, padx=(8, 4), pady=6, sticky="e"
        )
        self._currency_var = ctk.StringVar(value=self._db.get_setting("currency_symbol", "$"))
        ctk.CTkEntry(section, textvariable=self._currency_var, width=60).grid(
            row=1, column=1, padx=4, pady=6, sticky="w"
        )

        ctk.CTkLabel(section, text="Date Format:", anchor="e", width=120).grid(
            row=2, column=0, padx=(8, 4), pady=6, sticky="e"
        )
        self._date_fmt_var = ctk.StringVar(value=self._db.get_setting("date_format", "MM/DD/YYYY"))
        ctk.CTkComboBox(
            section, values=DATE_FORMAT_OPTIONS,
            variable=self._date_fmt_var, width=180, state="readonly",
        ).grid(row=2, column=1, padx=4, pady=6, sticky="w")

        ctk.CTkLabel(
            section,
            text="Currency and date format changes take effect on next app restart.",
            text_color="gray60", font=ctk.CTkFont(size=11), anchor="w",
        ).grid(row=3, column=0, columnspan=2, sticky="w", padx=8)

        ctk.CTkButton(
            section, text="Save Settings", width=140, command=self._save_settings,
        ).grid(row=4, column=0, columnspan=2, pady=(10, 8))

        self._settings_status_var = ctk.StringVar()
        ctk.CTkLabel(
            section, textvariable=self._settings_status_var,
            text_color="#4CAF50", font=ctk.CTkFont(size=11),
        ).grid(row=5, column=0, columnspan=2, pady=(0, 8))

    def _save_settings(self):
        appearance_key = self._appearance_var.get().lower()
        self._db.set_setting("appearance_mode", appearance_key)
        self._db.set_setting("currency_symbol", self._currency_var.get().strip() or "$")
        self._db.set_setting("date_format", self._date_fmt_var.get())
        ctk.set_appearance_mode(appearance_key)
        self._settings_status_var.set("Settings saved.")

    # ── Section 3: DB folder ──────────────────────────────────────────────────

    def _build_db_folder_section(self, parent):
        section = self._make_section(parent, "Database Folder", row=2)
        section.grid_columnconfigure(0, weight=1)

        self._db_folder_var = ctk.StringVar(value=get_db_folder() or "(default: app folder)")
        ctk.CTkEntry(
            section, textvariable=self._db_folder_var, state="readonly", width=340,
        ).grid(row=0, column=0, padx=(8, 4), pady=4, sticky="ew")
        ctk.CTkButton(
            section, text="Browse…", width=90, command=self._browse_db_folder,
        ).grid(row=0, column=1, padx=4)
        ctk.CTkButton(
            section, text="Reset to Default", width=120,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=lambda: self._set_db_folder(None),
        ).grid(row=0, column=2, padx=(4, 8))

        self._db_restart_label = ctk.CTkLabel(
            section, text="", text_color="#FF9800", font=ctk.CTkFont(size=11), anchor="w",
        )
        self._db_restart_label.grid(row=1, column=0, columnspan=3, sticky="w", padx=8, pady=(0, 6))

    def _browse_db_folder(self):
        path = filedialog.askdirectory(title="Choose DB folder")
        if path:
            self._set_db_folder(path)

    def _set_db_folder(self, path: str | None):
        if not set_db_folder(path):
            self._db_restart_label.configure(text="Could not save the setting; see the log.")
            return
        self._db_folder_var.set(path or "(default: app folder)")
        self._db_restart_label.configure(text="Restart the app for the change to take effect.")

    # ── Helpers ───────────────────────────────────────────────────────────────

    def _make_section(self, parent, title: str, row: int) -> ctk.CTkFrame:
        """Create a labelled card section and return its inner frame."""
        outer = ctk.CTkFrame(parent, corner_radius=8)
        outer.grid(row=row, column=0, sticky="ew", padx=12, pady=8)
        outer.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            outer, text=title,
            font=ctk.CTkFont(size=14, weight="bold"), anchor="w",
        ).grid(row=0, column=0, sticky="w", padx=12, pady=(10, 4))

        inner = ctk.CTkFrame(outer, fg_color="transparent")
        inner.grid(row=1, column=0, sticky="ew", padx=4, pady=(0, 8))
        inner.grid_columnconfigure(0, weight=1)
        return inner

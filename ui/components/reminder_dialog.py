import customtkinter as ctk
from models.notification import PendingNotification


class ReminderDialog(ctk.CTkToplevel):
    """Presents delivered subscription reminders, one row per charge."""

    def __init__(
        self,
        master,
        notifications: list[PendingNotification],
        on_acknowledge=None,
        **kwargs,
    ):
        super().__init__(master, **kwargs)
        self._on_acknowledge = on_acknowledge
        self.title("Subscription Reminders")
        self.geometry("480x320")
        self.resizable(False, True)
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        count = len(notifications)
        ctk.CTkLabel(
            self,
            text=f"{count} upcoming charge{'s' if count != 1 else ''}",
            font=ctk.CTkFont(size=16, weight="bold"),
            pady=12,
        ).grid(row=0, column=0, sticky="ew", padx=16)

        scroll = ctk.CTkScrollableFrame(self)
        scroll.grid(row=1, column=0, sticky="nsew", padx=12, pady=(0, 8))
        scroll.grid_columnconfigure(0, weight=1)
        for i, n in enumerate(notifications):
            self._add_row(scroll, n, i)

        ctk.CTkButton(self, text="OK", command=self._acknowledge).grid(
            row=2, column=0, pady=(0, 16), padx=60, sticky="ew"
        )

        self.transient(master)
        self.lift()
        self._center()

    def _add_row(self, parent, notification: PendingNotification, index: int):
        row = ctk.CTkFrame(parent, fg_color=("gray90", "gray20"), corner_radius=6)
        row.grid(row=index, column=0, sticky="ew", pady=3, padx=2)
        row.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(
            row, text="🔔", font=ctk.CTkFont(size=18), width=30,
        ).grid(row=0, column=0, rowspan=2, padx=(8, 4), pady=6)
        ctk.CTkLabel(
            row, text=notification.title,
            font=ctk.CTkFont(size=13, weight="bold"),
            text_color="#2196F3", anchor="w",
        ).grid(row=0, column=1, sticky="ew", pady=(6, 0))
        ctk.CTkLabel(
            row, text=notification.message,
            font=ctk.CTkFont(size=11),
            text_color=("gray40", "gray70"),
            anchor="w", wraplength=360,
        ).grid(row=1, column=1, sticky="ew", pady=(0, 6))

    def _acknowledge(self):
        if self._on_acknowledge:
            self._on_acknowledge()
        self.destroy()

    def _center(self):
        self.update_idletasks()
        mw = self.master.winfo_x() + self.master.winfo_width() // 2
        mh = self.master.winfo_y() + self.master.winfo_height() // 2
        w, h = self.winfo_reqwidth(), self.winfo_reqheight()
        self.geometry(f"+{mw - w//2}+{mh - h//2}")

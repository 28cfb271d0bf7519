import customtkinter as ctk
from tkcalendar import Calendar
import tkinter as tk
from tkinter import ttk
from datetime import date
from utils.date_helpers import parse_date, format_display_date, parse_display_date


class DatePickerWidget(ctk.CTkFrame):
    """Billing date entry in the user's display format plus a calendar popup.

    .get_date() returns a date or None; .set_date(d) accepts a date or None.
    """

    def __init__(
        self,
        master,
        initial: date | None = None,
        date_format: str = "MM/DD/YYYY",
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self.grid_columnconfigure(0, weight=1)

        self._date_format = date_format
        self._popup: ctk.CTkToplevel | None = None
        self._var = tk.StringVar(value=format_display_date(initial, date_format) if initial else "")

        self._entry = ctk.CTkEntry(self, textvariable=self._var, width=120)
        self._entry.grid(row=0, column=0, sticky="ew")
        self._entry.bind("<FocusOut>", self._on_focus_out)
        self._entry.bind("<Return>", self._on_focus_out)

        ctk.CTkButton(
            self, text="📅", width=32, command=self._toggle_popup
        ).grid(row=0, column=1, padx=(4, 0))

    def get_date(self) -> date | None:
        return self._parse(self._var.get())

    def set_date(self, d: date | None):
        self._var.set(format_display_date(d, self._date_format) if d else "")
        self._reset_border()

    def is_blank(self) -> bool:
        return not self._var.get().strip()

    def _parse(self, raw: str) -> date | None:
        raw = raw.strip()
        if not raw:
            return None
        d = parse_display_date(raw, self._date_format)
        if d is None:
            d = parse_date(raw.replace("/", "-").replace(".", "-"))
        return d

    def _on_focus_out(self, _event=None):
        raw = self._var.get().strip()
        if not raw:
            self._reset_border()
            return
        d = self._parse(raw)
        if d:
            self.set_date(d)
        else:
            self._entry.configure(border_color="#F44336")

    def _reset_border(self):
        self._entry.configure(border_color=("gray65", "gray35"))

    def _toggle_popup(self):
        if self._popup and self._popup.winfo_exists():
            self._close_popup()
            return

        popup = ctk.CTkToplevel(self)
        popup.overrideredirect(True)
        popup.resizable(False, False)
        self._popup = popup

        dark = ctk.get_appearance_mode() == "Dark"
        bg, fg = ("#2b2b2b", "#ffffff") if dark else ("#ffffff", "#000000")
        style = ttk.Style(popup)
        style.theme_use("default")
        style.configure("Calendar.Treeview", background=bg, foreground=fg, fieldbackground=bg)

        current = self.get_date() or date.today()
        cal = Calendar(
            popup,
            selectmode="day",
            year=current.year,
            month=current.month,
            day=current.day,
            date_pattern="yyyy-mm-dd",
            background=bg,
            foreground=fg,
            headersbackground=bg,
            headersforeground=fg,
            selectbackground="#1f6aa5",
            weekendbackground=bg,
            weekendforeground=fg,
            othermonthforeground="gray60",
            bordercolor=bg,
        )
        cal.pack(padx=4, pady=(4, 0))
        cal.bind("<<CalendarSelected>>", lambda e: self._pick(cal.selection_get()))

        # Subscriptions may have no billing date at all
        shortcuts = ctk.CTkFrame(popup, fg_color=bg, corner_radius=0)
        shortcuts.pack(fill="x", padx=4, pady=4)
        ctk.CTkButton(
            shortcuts, text="Today", width=70, height=24,
            command=lambda: self._pick(date.today()),
        ).pack(side="left")
        ctk.CTkButton(
            shortcuts, text="No date", width=70, height=24,
            fg_color="transparent", border_width=1, text_color=fg,
            command=lambda: self._pick(None),
        ).pack(side="right")

        self._entry.update_idletasks()
        x = self._entry.winfo_rootx()
        y = self._entry.winfo_rooty() + self._entry.winfo_height() + 2
        popup.geometry(f"+{x}+{y}")
        popup.bind("<FocusOut>", lambda e: self._maybe_close(popup))

    def _pick(self, d: date | None):
        self.set_date(d)
        self._close_popup()

    def _close_popup(self):
        if self._popup is not None:
            self._popup.destroy()
            self._popup = None

    def _maybe_close(self, popup):
        focused = popup.focus_get()
        if focused is None or not str(focused).startswith(str(popup)):
            self._close_popup()

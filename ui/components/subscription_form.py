import customtkinter as ctk
from services.subscription_service import SubscriptionService
from models.subscription import Subscription
from ui.components.date_picker import DatePickerWidget
from utils.currency import parse_price
from utils.date_helpers import now, today, at_time_of
from utils.constants import CATEGORIES, DEFAULT_CATEGORY, DEFAULT_ICON, ICONS


class SubscriptionForm(ctk.CTkToplevel):
    """Add or edit a subscription."""

    def __init__(
        self,
        master,
        subscription_service: SubscriptionService,
        subscription: Subscription | None = None,
        date_format: str = "MM/DD/YYYY",
        **kwargs,
    ):
        super().__init__(master, **kwargs)
        self._svc = subscription_service
        self._sub = subscription
        self.saved = False

        self.title("Edit Subscription" if subscription else "Add Subscription")
        self.resizable(False, False)
        self.grid_columnconfigure(1, weight=1)

        sub = subscription
        r = 0

        # Name
        self._add_label("Name:", r)
        self._name_var = ctk.StringVar(value=sub.name if sub else "")
        ctk.CTkEntry(
            self, textvariable=self._name_var, width=240,
            placeholder_text="Subscription Name",
        ).grid(row=r, column=1, padx=(0, 16), pady=(12, 4), sticky="ew")
        r += 1

        # Monthly price
        self._add_label("Monthly Price:", r)
        self._price_var = ctk.StringVar(value=f"{sub.monthly_price:.2f}" if sub else "")
        ctk.CTkEntry(self, textvariable=self._price_var, width=240).grid(
            row=r, column=1, padx=(0, 16), pady=4, sticky="ew"
        )
        r += 1

        # Billing date
        self._add_label("Billing Date:", r)
        initial = sub.billing_date.date() if sub and sub.billing_date else (None if sub else today())
        self._date_picker = DatePickerWidget(self, initial=initial, date_format=date_format)
        self._date_picker.grid(row=r, column=1, padx=(0, 16), pady=4, sticky="w")
        r += 1

        # Category (free-form values from older data stay selectable)
        self._add_label("Category:", r)
        categories = list(CATEGORIES)
        if sub and sub.category not in categories:
            categories.append(sub.category)
        self._cat_var = ctk.StringVar(value=sub.category if sub else DEFAULT_CATEGORY)
        ctk.CTkSegmentedButton(
            self, values=categories, variable=self._cat_var,
        ).grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
        r += 1

        # Icon grid
        self._add_label("Icon:", r)
        self._icon_var = ctk.StringVar(value=sub.icon_name if sub else DEFAULT_ICON)
        self._icon_frame = ctk.CTkFrame(self, fg_color="transparent")
        self._icon_frame.grid(row=r, column=1, padx=(0, 16), pady=4, sticky="w")
        self._icon_buttons: dict[str, ctk.CTkButton] = {}
        for i, (tag, glyph) in enumerate(ICONS.items()):
            btn = ctk.CTkButton(
                self._icon_frame, text=glyph, width=44, height=36,
                command=lambda t=tag: self._select_icon(t),
            )
            btn.grid(row=i // 4, column=i % 4, padx=3, pady=3)
            self._icon_buttons[tag] = btn
        self._select_icon(self._icon_var.get())
        r += 1

        # Error + buttons
        self._error_var = ctk.StringVar()
        ctk.CTkLabel(
            self, textvariable=self._error_var,
            text_color="#F44336", wraplength=300, anchor="w"
        ).grid(row=r, column=0, columnspan=2, padx=16, pady=(0, 4), sticky="ew")
        r += 1

        btn_frame = ctk.CTkFrame(self, fg_color="transparent")
        btn_frame.grid(row=r, column=0, columnspan=2, padx=16, pady=(4, 16), sticky="ew")
        ctk.CTkButton(
            btn_frame, text="Cancel", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self.destroy,
        ).pack(side="left")
        ctk.CTkButton(
            btn_frame, text="Save Subscription", width=140, command=self._on_save,
        ).pack(side="right")

        self.transient(master)
        self.grab_set()
        self._center()

    def _add_label(self, text, row):
        ctk.CTkLabel(self, text=text).grid(
            row=row, column=0, padx=(16, 8), pady=4, sticky="ne"
        )

    def _select_icon(self, tag: str):
        if tag not in self._icon_buttons:
            tag = DEFAULT_ICON
        self._icon_var.set(tag)
        for t, btn in self._icon_buttons.items():
            if t == tag:
                btn.configure(fg_color=("#3B8ED0", "#1F6AA5"), border_width=0)
            else:
                btn.configure(fg_color="transparent", border_width=1)

    def _on_save(self):
        name = self._name_var.get().strip()
        price_text = self._price_var.get().strip()

        if not name:
            self._error_var.set("Please enter a subscription name")
            return
        if not price_text:
            self._error_var.set("Please enter a monthly price")
            return
        price = parse_price(price_text)
        if price is None:
            self._error_var.set("Please enter a valid price")
            return

        picked = self._date_picker.get_date()
        if picked is None and not self._date_picker.is_blank():
            self._error_var.set("Invalid billing date.")
            return
        if picked is None:
            billing_date = None
        elif self._sub and self._sub.billing_date and self._sub.billing_date.date() == picked:
            billing_date = self._sub.billing_date
        else:
            billing_date = at_time_of(picked, now())

        try:
            if self._sub:
                self._svc.update(
                    self._sub.id, name, price, billing_date,
                    self._cat_var.get(), self._icon_var.get(),
                )
            else:
                self._svc.create(
                    name, price, billing_date,
                    self._cat_var.get(), self._icon_var.get(),
                )
            self.saved = True
            self.destroy()
        except ValueError as e:
            self._error_var.set(str(e))

    def _center(self):
        self.update_idletasks()
        mw = self.master.winfo_x() + self.master.winfo_width() // 2
        mh = self.master.winfo_y() + self.master.winfo_height() // 2
        w, h = self.winfo_reqwidth(), self.winfo_reqheight()
        self.geometry(f"+{mw - w//2}+{mh - h//2}")

import customtkinter as ctk
from services.subscription_service import SubscriptionService
from ui.components.subscription_form import SubscriptionForm
from ui.components.delete_dialog import DeleteSubscriptionDialog
from utils.constants import ICONS
from utils.currency import format_currency
from utils.date_helpers import format_display_date, format_days_until, today


class HomeTab(ctk.CTkFrame):
    def __init__(
        self,
        master,
        subscription_service: SubscriptionService,
        notify_refresh,
        format_amount=format_currency,
        date_format: str = "MM/DD/YYYY",
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._svc = subscription_service
        self._notify_refresh = notify_refresh
        self._fmt = format_amount
        self._date_format = date_format

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        self._build_toolbar()
        self._build_list()
        self._load()

    def refresh(self):
        self._load()

    def _build_toolbar(self):
        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 0))
        ctk.CTkLabel(
            bar, text="My Subscriptions",
            font=ctk.CTkFont(size=14, weight="bold"),
        ).pack(side="left", padx=12, pady=8)
        ctk.CTkButton(bar, text="+ Add Subscription", command=self._open_add).pack(
            side="right", padx=8, pady=6
        )
        self._total_label = ctk.CTkLabel(bar, text="", text_color="gray60")
        self._total_label.pack(side="right", padx=12)

    def _build_list(self):
        self._scroll = ctk.CTkScrollableFrame(self)
        self._scroll.grid(row=1, column=0, sticky="nsew", padx=8, pady=8)
        self._scroll.grid_columnconfigure(0, weight=1)

    def _load(self):
        for w in self._scroll.winfo_children():
            w.destroy()

        subs = self._svc.get_all()
        total = sum(s.monthly_price for s in subs)
        self._total_label.configure(text=f"{self._fmt(total)} / month" if subs else "")

        if not subs:
            ctk.CTkLabel(
                self._scroll,
                text="No subscriptions yet. Click '+ Add Subscription' to track one.",
                text_color="gray60",
            ).grid(row=0, column=0, pady=40)
            return

        hdr = ctk.CTkFrame(self._scroll, fg_color=("gray82", "gray22"), corner_radius=0)
        hdr.grid(row=0, column=0, sticky="ew", pady=(0, 2))
        for i, (col, w) in enumerate([
            ("", 36), ("Name", 180), ("Category", 120), ("Monthly", 100),
            ("Billing Date", 110), ("Due", 90), ("Actions", 110),
        ]):
            ctk.CTkLabel(
                hdr, text=col, width=w, anchor="w",
                font=ctk.CTkFont(weight="bold"),
            ).grid(row=0, column=i, padx=4, pady=4)

        ref = today()
        for idx, sub in enumerate(subs):
            self._add_row(idx + 1, sub, ref)

    def _add_row(self, idx, sub, ref):
        bg = ("gray92", "gray17") if idx % 2 == 0 else ("gray88", "gray21")
        row = ctk.CTkFrame(self._scroll, fg_color=bg, corner_radius=4)
        row.grid(row=idx, column=0, sticky="ew", pady=1, padx=2)

        if sub.billing_date:
            billed = format_display_date(sub.billing_date.date(), self._date_format)
            due = format_days_until(sub.billing_date, ref)
        else:
            billed, due = "—", ""
        due_color = "#F44336" if due == "Overdue" else ("gray10", "gray90")

        data = [
            (ICONS.get(sub.icon_name, "•"), 36),
            (sub.name, 180),
            (sub.category, 120),
            (self._fmt(sub.monthly_price), 100),
            (billed, 110),
        ]
        for i, (text, width) in enumerate(data):
            ctk.CTkLabel(row, text=text, width=width, anchor="w").grid(
                row=0, column=i, padx=4, pady=4
            )
        ctk.CTkLabel(row, text=due, width=90, anchor="w", text_color=due_color).grid(
            row=0, column=5, padx=4
        )

        acts = ctk.CTkFrame(row, fg_color="transparent")
        acts.grid(row=0, column=6, padx=(4, 6))
        ctk.CTkButton(
            acts, text="Edit", width=44, height=24,
            command=lambda s=sub: self._open_edit(s),
        ).pack(side="left", padx=2)
        ctk.CTkButton(
            acts, text="Delete", width=56, height=24,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=lambda s=sub: self._delete(s),
        ).pack(side="left")

    def _open_add(self):
        form = SubscriptionForm(
            self.winfo_toplevel(), self._svc, date_format=self._date_format,
        )
        self.wait_window(form)
        if form.saved:
            self._notify_refresh("subscription", "Subscription added successfully!")

    def _open_edit(self, sub):
        form = SubscriptionForm(
            self.winfo_toplevel(), self._svc,
            subscription=sub, date_format=self._date_format,
        )
        self.wait_window(form)
        if form.saved:
            self._notify_refresh("subscription")

    def _delete(self, sub):
        dlg = DeleteSubscriptionDialog(self.winfo_toplevel(), sub, format_amount=self._fmt)
        if dlg.confirmed:
            self._svc.delete(sub.id)
            self._notify_refresh("subscription")

import customtkinter as ctk
from models.subscription import Subscription
from utils.constants import ICONS
from utils.currency import format_currency


class DeleteSubscriptionDialog(ctk.CTkToplevel):
    """Modal confirmation before a subscription and its reminder are removed.

    Blocks until closed; check .confirmed afterwards.
    """

    def __init__(self, master, subscription: Subscription, format_amount=format_currency, **kwargs):
        super().__init__(master, **kwargs)
        self.title("Delete Subscription")
        self.confirmed = False
        self.resizable(False, False)
        self.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(
            self, text=ICONS.get(subscription.icon_name, "•"), font=ctk.CTkFont(size=28),
        ).grid(row=0, column=0, rowspan=2, padx=(20, 8), pady=(16, 4))
        ctk.CTkLabel(
            self, text=subscription.name, anchor="w",
            font=ctk.CTkFont(size=14, weight="bold"),
        ).grid(row=0, column=1, sticky="w", padx=(0, 20), pady=(16, 0))
        ctk.CTkLabel(
            self, text=f"{format_amount(subscription.monthly_price)} / month · {subscription.category}",
            anchor="w", text_color="gray60",
        ).grid(row=1, column=1, sticky="w", padx=(0, 20))

        note = "This cannot be undone."
        if subscription.billing_date:
            note = "Its upcoming charge reminder is cancelled as well. " + note
        ctk.CTkLabel(
            self, text=note, wraplength=320, justify="left", anchor="w",
        ).grid(row=2, column=0, columnspan=2, sticky="ew", padx=20, pady=12)

        buttons = ctk.CTkFrame(self, fg_color="transparent")
        buttons.grid(row=3, column=0, columnspan=2, pady=(0, 16), padx=20, sticky="e")
        ctk.CTkButton(
            buttons, text="Keep", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self.destroy,
        ).pack(side="left", padx=(0, 8))
        ctk.CTkButton(
            buttons, text="Delete", width=90,
            fg_color="#F44336", hover_color="#D32F2F",
            command=self._on_delete,
        ).pack(side="left")

        self.transient(master)
        self.grab_set()
        self.update_idletasks()
        mw = self.master.winfo_x() + self.master.winfo_width() // 2
        mh = self.master.winfo_y() + self.master.winfo_height() // 2
        self.geometry(f"+{mw - self.winfo_width() // 2}+{mh - self.winfo_height() // 2}")
        self.wait_window()

    def _on_delete(self):
        self.confirmed = True
        self.destroy()

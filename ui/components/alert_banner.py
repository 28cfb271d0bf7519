import customtkinter as ctk

BANNER_COLORS = {
    "success": "#4CAF50",
    "info":    "#2196F3",
}


class AlertBanner(ctk.CTkFrame):
    """Status strip above the tabs, e.g. 'Subscription added successfully!'."""

    def __init__(self, master, message: str, kind: str = "success",
                 auto_hide_ms: int | None = 4000, **kwargs):
        super().__init__(
            master, fg_color=BANNER_COLORS.get(kind, BANNER_COLORS["info"]),
            corner_radius=6, **kwargs,
        )
        self.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            self, text=message, text_color="white", anchor="w", padx=10, pady=6,
        ).grid(row=0, column=0, sticky="ew")
        ctk.CTkButton(
            self, text="✕", width=28, height=24,
            fg_color="transparent", text_color="white",
            command=self.destroy,
        ).grid(row=0, column=1, padx=(0, 4))

        if auto_hide_ms:
            self.after(auto_hide_ms, self._expire)

    def _expire(self):
        # The user may already have dismissed it
        if self.winfo_exists():
            self.destroy()

import customtkinter as ctk
import tkinter as tk
from matplotlib.figure import Figure
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
from services.stats_service import CategoryTotal, StatsService, percentage_formatted
from utils.currency import format_currency


class StatsTab(ctk.CTkFrame):
    def __init__(
        self,
        master,
        stats_service: StatsService,
        format_amount=format_currency,
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._stats_svc = stats_service
        self._fmt = format_amount

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        self._build_summary()
        self._build_body()
        self._load()

    def refresh(self):
        self._load()

    def _build_summary(self):
        card = ctk.CTkFrame(self, fg_color=("gray90", "gray20"), corner_radius=10)
        card.grid(row=0, column=0, sticky="ew", padx=16, pady=(12, 8))
        ctk.CTkLabel(card, text="Monthly Spending", text_color="gray60").pack(pady=(10, 0))
        self._total_label = ctk.CTkLabel(card, text="", font=ctk.CTkFont(size=24, weight="bold"))
        self._total_label.pack(pady=2)
        self._count_label = ctk.CTkLabel(card, text="", text_color="gray60", font=ctk.CTkFont(size=11))
        self._count_label.pack(pady=(0, 10))

    def _build_body(self):
        body = ctk.CTkFrame(self, fg_color="transparent")
        body.grid(row=1, column=0, sticky="nsew", padx=16, pady=(0, 12))
        body.grid_columnconfigure(0, weight=2)
        body.grid_columnconfigure(1, weight=3)
        body.grid_rowconfigure(0, weight=1)

        pie_outer = ctk.CTkFrame(body, fg_color=("gray90", "gray20"), corner_radius=8)
        pie_outer.grid(row=0, column=0, sticky="nsew", padx=(0, 8))
        ctk.CTkLabel(
            pie_outer, text="Spending by Category",
            font=ctk.CTkFont(size=13, weight="bold"),
        ).pack(pady=(10, 0))
        self._pie_fig = Figure(figsize=(3.4, 3.4), dpi=80, tight_layout=True)
        self._pie_ax = self._pie_fig.add_subplot(111)
        self._pie_mpl = FigureCanvasTkAgg(self._pie_fig, master=pie_outer)
        self._pie_mpl.get_tk_widget().pack(fill="both", expand=True, padx=8, pady=(4, 10))

        breakdown_outer = ctk.CTkFrame(body, fg_color=("gray90", "gray20"), corner_radius=8)
        breakdown_outer.grid(row=0, column=1, sticky="nsew")
        ctk.CTkLabel(
            breakdown_outer, text="Category Breakdown",
            font=ctk.CTkFont(size=13, weight="bold"),
        ).pack(pady=(10, 0))
        self._breakdown = ctk.CTkScrollableFrame(breakdown_outer, fg_color="transparent")
        self._breakdown.pack(fill="both", expand=True, padx=8, pady=(4, 10))
        self._breakdown.grid_columnconfigure(0, weight=1)

    def _load(self):
        summary = self._stats_svc.get_summary()
        self._total_label.configure(text=self._fmt(summary["total"]))
        self._count_label.configure(text=f"{summary['count']} active subscriptions")

        breakdown = self._stats_svc.get_category_breakdown()
        self.after(50, lambda b=breakdown: self._draw_pie_chart(b))

        for w in self._breakdown.winfo_children():
            w.destroy()
        if not breakdown:
            ctk.CTkLabel(
                self._breakdown,
                text="No Data Available\nAdd some subscriptions to see your spending statistics",
                text_color="gray60", justify="center",
            ).grid(row=0, column=0, pady=40)
            return
        for i, item in enumerate(breakdown):
            self._add_breakdown_row(i, item)

    def _add_breakdown_row(self, index: int, item: CategoryTotal):
        row = ctk.CTkFrame(self._breakdown, fg_color=("gray95", "gray17"), corner_radius=6)
        row.grid(row=index, column=0, sticky="ew", pady=3)
        row.grid_columnconfigure(1, weight=1)

        tk.Label(row, bg=item.color_hex, width=2).grid(row=0, column=0, padx=(8, 6), pady=(6, 0))
        ctk.CTkLabel(
            row, text=f"{item.category} ({item.count})", anchor="w",
            font=ctk.CTkFont(size=12, weight="bold"),
        ).grid(row=0, column=1, sticky="w", pady=(6, 0))
        ctk.CTkLabel(
            row, text=f"{self._fmt(item.total_amount)}  ·  {percentage_formatted(item.percentage_of_total)}",
            anchor="e",
        ).grid(row=0, column=2, sticky="e", padx=(4, 10), pady=(6, 0))

        bar = ctk.CTkProgressBar(row, height=6, progress_color=item.color_hex)
        bar.grid(row=1, column=0, columnspan=3, sticky="ew", padx=8, pady=(4, 8))
        bar.set(item.percentage_of_total / 100)

    def _draw_pie_chart(self, breakdown: list[CategoryTotal]):
        ax = self._pie_ax
        ax.clear()
        is_dark = ctk.get_appearance_mode() == "Dark"
        bg = "#2b2b2b" if is_dark else "#e4e4e4"
        fg = "#dddddd" if is_dark else "#222222"
        self._pie_fig.patch.set_facecolor(bg)
        ax.set_facecolor(bg)

        total = sum(item.total_amount for item in breakdown)
        if not breakdown or total == 0:
            ax.text(0.5, 0.5, "No subscription data", ha="center", va="center",
                    transform=ax.transAxes, color="gray")
            ax.set_axis_off()
            self._pie_mpl.draw_idle()
            return

        ax.pie(
            [item.total_amount for item in breakdown],
            colors=[item.color_hex for item in breakdown],
            startangle=90,
            counterclock=False,
            wedgeprops={"width": 0.45},
        )
        ax.text(0, 0.1, "Total", ha="center", va="center", color="gray", fontsize=9)
        ax.text(0, -0.12, self._fmt(total), ha="center", va="center",
                color=fg, fontsize=11, fontweight="bold")
        ax.set_aspect("equal")
        self._pie_mpl.draw_idle()

from dataclasses import dataclass
from typing import Iterable

from models.subscription import Subscription
from services.reminder_service import check_subscription
from utils.constants import CATEGORY_COLORS, FALLBACK_COLOR


@dataclass(frozen=True)
class CategoryTotal:
    category: str
    total_amount: float
    percentage_of_total: float
    count: int = 0
    color_hex: str = FALLBACK_COLOR


def category_color(category: str) -> str:
    return CATEGORY_COLORS.get(category, FALLBACK_COLOR)


def aggregate(subscriptions: Iterable[Subscription]) -> list[CategoryTotal]:
    """Per-category totals for the pie chart, largest first.

    Groups on the raw category string. Equal totals keep the order in which
    their categories first appear. With a zero grand total every percentage
    is 0.
    """
    totals: dict[str, float] = {}
    counts: dict[str, int] = {}
    for sub in subscriptions:
        check_subscription(sub)
        if sub.category is None:
            raise ValueError(f"Subscription {sub.id} has no category.")
        if sub.monthly_price is None:
            raise ValueError(f"Subscription {sub.id} has no price.")
        totals[sub.category] = totals.get(sub.category, 0.0) + sub.monthly_price
        counts[sub.category] = counts.get(sub.category, 0) + 1

    grand_total = sum(totals.values())
    groups = [
        CategoryTotal(
            category=cat,
            total_amount=total,
            percentage_of_total=total / grand_total * 100 if grand_total > 0 else 0.0,
            count=counts[cat],
            color_hex=category_color(cat),
        )
        for cat, total in totals.items()
    ]
    return sorted(groups, key=lambda g: g.total_amount, reverse=True)


def percentage_formatted(value: float) -> str:
    """Render a percentage as a whole number, e.g. 58.96 -> '59%'."""
    return f"{value:.0f}%"


class StatsService:
    def __init__(self, subscription_source):
        self._source = subscription_source

    def get_category_breakdown(self) -> list[CategoryTotal]:
        """Return [CategoryTotal, ...] for pie chart and breakdown list."""
        return aggregate(self._source.get_all())

    def get_summary(self) -> dict:
        subs = self._source.get_all()
        return {
            "total": sum(s.monthly_price for s in subs),
            "count": len(subs),
            "categories": len({s.category for s in subs}),
        }

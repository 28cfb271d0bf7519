from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Subscription:
    id: str
    name: str
    monthly_price: float
    billing_date: Optional[datetime]
    category: str           # one of CATEGORIES, or free-form
    icon_name: str = "tv.fill"
    created_at: str = ""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class PendingNotification:
    identifier: str         # 'subscription_<id>'
    fire_at: datetime
    title: str
    message: str
    subscription_id: Optional[str] = None

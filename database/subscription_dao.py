from datetime import datetime
from typing import Optional
from database.db_manager import DatabaseManager
from models.subscription import Subscription
from utils.date_helpers import parse_datetime, format_datetime


class SubscriptionDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> Subscription:
        return Subscription(
            id=row["id"],
            name=row["name"],
            monthly_price=row["monthly_price"],
            billing_date=parse_datetime(row["billing_date"]),
            category=row["category"],
            icon_name=row["icon_name"],
            created_at=row["created_at"],
        )

    def get_all(self) -> list[Subscription]:
        """All subscriptions, soonest billing date first; undated ones last."""
        conn = self._db.get_connection()
        rows = conn.execute(
            """SELECT * FROM subscriptions
               ORDER BY billing_date IS NULL, billing_date, name"""
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_by_id(self, subscription_id: str) -> Optional[Subscription]:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT * FROM subscriptions WHERE id = ?", (subscription_id,)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def create(
        self,
        subscription_id: str,
        name: str,
        monthly_price: float,
        billing_date: datetime | None,
        category: str,
        icon_name: str,
    ) -> Subscription:
        conn = self._db.get_connection()
        conn.execute(
            """INSERT INTO subscriptions
               (id, name, monthly_price, billing_date, category, icon_name)
               VALUES (?, ?, ?, ?, ?, ?)""",
            (
                subscription_id, name, monthly_price,
                format_datetime(billing_date) if billing_date else None,
                category, icon_name,
            ),
        )
        conn.commit()
        return self.get_by_id(subscription_id)

    def update(
        self,
        subscription_id: str,
        name: str,
        monthly_price: float,
        billing_date: datetime | None,
        category: str,
        icon_name: str,
    ) -> Optional[Subscription]:
        conn = self._db.get_connection()
        conn.execute(
            """UPDATE subscriptions SET
               name=?, monthly_price=?, billing_date=?, category=?, icon_name=?
               WHERE id=?""",
            (
                name, monthly_price,
                format_datetime(billing_date) if billing_date else None,
                category, icon_name, subscription_id,
            ),
        )
        conn.commit()
        return self.get_by_id(subscription_id)

    def delete(self, subscription_id: str):
        conn = self._db.get_connection()
        conn.execute("DELETE FROM subscriptions WHERE id = ?", (subscription_id,))
        conn.commit()

from datetime import datetime
from database.db_manager import DatabaseManager
from models.notification import PendingNotification
from utils.date_helpers import parse_datetime, format_datetime


class NotificationDAO:
    """Persists scheduled local notifications keyed by identifier."""

    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> PendingNotification:
        return PendingNotification(
            identifier=row["identifier"],
            fire_at=parse_datetime(row["fire_at"]),
            title=row["title"],
            message=row["message"],
            subscription_id=row["subscription_id"],
        )

    def upsert(
        self,
        identifier: str,
        fire_at: datetime,
        title: str,
        message: str,
        subscription_id: str | None = None,
    ) -> None:
        """Insert or replace the notification stored under identifier."""
        conn = self._db.get_connection()
        conn.execute(
            """INSERT OR REPLACE INTO scheduled_notifications
               (identifier, fire_at, title, message, subscription_id)
               VALUES (?, ?, ?, ?, ?)""",
            (identifier, format_datetime(fire_at), title, message, subscription_id),
        )
        conn.commit()

    def delete(self, identifier: str) -> int:
        """Remove one notification. Returns the number of rows removed (0 or 1)."""
        conn = self._db.get_connection()
        cursor = conn.execute(
            "DELETE FROM scheduled_notifications WHERE identifier = ?", (identifier,)
        )
        conn.commit()
        return cursor.rowcount

    def delete_all(self) -> int:
        conn = self._db.get_connection()
        cursor = conn.execute("DELETE FROM scheduled_notifications")
        conn.commit()
        return cursor.rowcount

    def get_all(self) -> list[PendingNotification]:
        conn = self._db.get_connection()
        rows = conn.execute(
            "SELECT * FROM scheduled_notifications ORDER BY fire_at, identifier"
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def take_due(self, ref: datetime) -> list[PendingNotification]:
        """Remove and return every notification with fire_at <= ref."""
        cutoff = format_datetime(ref)
        conn = self._db.get_connection()
        rows = conn.execute(
            """SELECT * FROM scheduled_notifications
               WHERE fire_at <= ? ORDER BY fire_at, identifier""",
            (cutoff,),
        ).fetchall()
        conn.execute(
            "DELETE FROM scheduled_notifications WHERE fire_at <= ?", (cutoff,)
        )
        conn.commit()
        return [self._row_to_model(r) for r in rows]

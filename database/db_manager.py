import sqlite3
import os
from utils.constants import DB_FILE


class DatabaseManager:
    def __init__(self, db_path: str | None = None):
        self.db_path = db_path or DB_FILE
        self._conn: sqlite3.Connection | None = None

    def get_connection(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
            if self.db_path != ":memory:":
                self._conn.execute("PRAGMA journal_mode = WAL")
        return self._conn

    def initialize(self):
        """Create schema and seed defaults."""
        conn = self.get_connection()
        self._create_schema(conn)
        self._seed_defaults(conn)
        conn.commit()

    def _create_schema(self, conn: sqlite3.Connection):
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS subscriptions (
                id             TEXT PRIMARY KEY,
                name           TEXT NOT NULL,
                monthly_price  REAL NOT NULL CHECK(monthly_price > 0),
                billing_date   TEXT,
                category       TEXT NOT NULL DEFAULT 'Other',
                icon_name      TEXT NOT NULL DEFAULT 'tv.fill',
                created_at     TEXT NOT NULL DEFAULT (datetime('now'))
            );

            CREATE INDEX IF NOT EXISTS idx_subscriptions_billing_date ON subscriptions(billing_date);

            CREATE TABLE IF NOT EXISTS scheduled_notifications (
                identifier      TEXT PRIMARY KEY,
                fire_at         TEXT NOT NULL,
                title           TEXT NOT NULL,
                message         TEXT NOT NULL,
                subscription_id TEXT
            );

            CREATE INDEX IF NOT EXISTS idx_notifications_fire_at ON scheduled_notifications(fire_at);

            CREATE TABLE IF NOT EXISTS app_settings (
                key   TEXT PRIMARY KEY,
                value TEXT NOT NULL
            );
        """)

    def _seed_defaults(self, conn: sqlite3.Connection):
        defaults = [
            ("appearance_mode", "system"),
            ("currency_symbol", "$"),
            ("date_format", "MM/DD/YYYY"),
            ("notifications_enabled", "1"),
        ]
        for key, value in defaults:
            conn.execute(
                "INSERT OR IGNORE INTO app_settings(key, value) VALUES (?, ?)",
                (key, value),
            )

    def get_setting(self, key: str, default: str = "") -> str:
        conn = self.get_connection()
        row = conn.execute(
            "SELECT value FROM app_settings WHERE key = ?", (key,)
        ).fetchone()
        return row["value"] if row else default

    def set_setting(self, key: str, value: str):
        conn = self.get_connection()
        conn.execute(
            "INSERT OR REPLACE INTO app_settings(key, value) VALUES (?, ?)",
            (key, value),
        )
        conn.commit()

    def get_bool_setting(self, key: str, default: bool = False) -> bool:
        """Flags are stored as "1" / "0"."""
        return self.get_setting(key, "1" if default else "0") == "1"

    def set_bool_setting(self, key: str, value: bool):
        self.set_setting(key, "1" if value else "0")

    @staticmethod
    def open(db_folder: str | None = None) -> "DatabaseManager":
        """Startup factory: opens (creating if needed) the app DB.

        db_folder: if provided, the DB file is stored there instead of CWD.
        """
        if db_folder:
            os.makedirs(db_folder, exist_ok=True)
            path = os.path.join(db_folder, DB_FILE)
        else:
            path = DB_FILE
        db = DatabaseManager(path)
        db.initialize()
        return db

    def close(self):
        if self._conn:
            self._conn.close()
            self._conn = None

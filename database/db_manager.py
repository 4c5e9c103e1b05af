import json
import logging
import os
import sqlite3
from utils.constants import (
    DB_FILE,
    SEED_MARKER_KEY,
    CURRENCY_SETTING_KEY,
    DEFAULT_CURRENCY,
    DEFAULT_CATEGORIES,
    DEFAULT_TRANSACTIONS,
    DEFAULT_BUDGETS,
)

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Owns the single SQLite connection of the application.

    Construct it explicitly, call initialize() once, close() on shutdown.
    Also usable as a context manager.
    """

    def __init__(self, db_path: str | None = None):
        self.db_path = db_path or DB_FILE
        self._conn: sqlite3.Connection | None = None

    def __enter__(self) -> "DatabaseManager":
        self.get_connection()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def get_connection(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
            self._conn.execute("PRAGMA foreign_keys = ON")
            self._conn.execute("PRAGMA journal_mode = WAL")
            logger.info("Database connection established: %s", self.db_path)
        return self._conn

    def initialize(self, seed: bool = True):
        """Create schema and, on a fresh store, seed sample data once."""
        conn = self.get_connection()
        self._create_schema(conn)
        if seed:
            self._seed_defaults(conn)
        conn.commit()

    def _create_schema(self, conn: sqlite3.Connection):
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS app_settings (
                key   TEXT PRIMARY KEY,
                value TEXT
            );

            CREATE TABLE IF NOT EXISTS categories (
                id    TEXT PRIMARY KEY,
                name  TEXT NOT NULL CHECK(length(trim(name)) > 0),
                icon  TEXT,
                color TEXT
            );

            CREATE TABLE IF NOT EXISTS transactions (
                id          TEXT PRIMARY KEY,
                date        TEXT NOT NULL,
                description TEXT NOT NULL,
                amount      REAL NOT NULL CHECK(amount > 0),
                type        TEXT NOT NULL CHECK(type IN ('income','expense')),
                category_id TEXT NOT NULL REFERENCES categories(id) ON DELETE CASCADE
            );

            CREATE INDEX IF NOT EXISTS idx_transactions_date        ON transactions(date);
            CREATE INDEX IF NOT EXISTS idx_transactions_category_id ON transactions(category_id);

            CREATE TABLE IF NOT EXISTS budgets (
                id           TEXT PRIMARY KEY,
                category_id  TEXT NOT NULL UNIQUE REFERENCES categories(id) ON DELETE CASCADE,
                limit_amount REAL NOT NULL CHECK(limit_amount > 0),
                period       TEXT NOT NULL CHECK(period IN ('weekly','monthly','yearly'))
            );
        """)
        logger.debug("Schema checked/created")

    def _count(self, conn: sqlite3.Connection, table: str) -> int:
        return conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]

    def _seed_defaults(self, conn: sqlite3.Connection):
        row = conn.execute(
            "SELECT value FROM app_settings WHERE key = ?", (SEED_MARKER_KEY,)
        ).fetchone()
        if row and row["value"] == "true":
            logger.debug("Seed marker '%s' present, skipping seeding", SEED_MARKER_KEY)
            return

        logger.info("Seeding initial data")
        # Each table is only seeded while empty
        if self._count(conn, "categories") == 0:
            for cat in DEFAULT_CATEGORIES:
                conn.execute(
                    "INSERT OR IGNORE INTO categories(id, name, icon, color) VALUES (?, ?, ?, ?)",
                    (cat["id"], cat["name"], cat["icon"], cat["color"]),
                )

        if self._count(conn, "transactions") == 0:
            for tx in DEFAULT_TRANSACTIONS:
                conn.execute(
                    """INSERT OR IGNORE INTO transactions
                       (id, date, description, amount, type, category_id)
                       SELECT ?, ?, ?, ?, ?, id FROM categories WHERE id = ?""",
                    (tx["id"], tx["date"], tx["description"], tx["amount"],
                     tx["type"], tx["category_id"]),
                )

        if self._count(conn, "budgets") == 0:
            for b in DEFAULT_BUDGETS:
                conn.execute(
                    """INSERT OR IGNORE INTO budgets(id, category_id, limit_amount, period)
                       SELECT ?, id, ?, ? FROM categories WHERE id = ?""",
                    (b["id"], b["limit_amount"], b["period"], b["category_id"]),
                )

        conn.execute(
            "INSERT OR IGNORE INTO app_settings(key, value) VALUES (?, ?)",
            (CURRENCY_SETTING_KEY, json.dumps(DEFAULT_CURRENCY)),
        )
        conn.execute(
            "INSERT OR REPLACE INTO app_settings(key, value) VALUES (?, ?)",
            (SEED_MARKER_KEY, "true"),
        )

    # ── Settings ─────────────────────────────────────────────────────────────

    def get_setting(self, key: str, default: str | None = None) -> str | None:
        conn = self.get_connection()
        row = conn.execute(
            "SELECT value FROM app_settings WHERE key = ?", (key,)
        ).fetchone()
        return row["value"] if row else default

    def set_setting(self, key: str, value: str, commit: bool = True):
        conn = self.get_connection()
        conn.execute(
            "INSERT OR REPLACE INTO app_settings(key, value) VALUES (?, ?)",
            (key, value),
        )
        if commit:
            conn.commit()

    def get_all_settings(self) -> list[sqlite3.Row]:
        conn = self.get_connection()
        return conn.execute("SELECT key, value FROM app_settings ORDER BY key").fetchall()

    # ── Transaction control ──────────────────────────────────────────────────

    def commit(self):
        self.get_connection().commit()

    def rollback(self):
        self.get_connection().rollback()

    @staticmethod
    def open(
        db_folder: str | None = None, seed: bool = True, db_path: str | None = None
    ) -> "DatabaseManager":
        """Startup factory: opens (creating if needed) db_path, else the store in db_folder or CWD.

        The connection is closed again if initialization fails.
        """
        if db_path:
            path = db_path
        elif db_folder:
            os.makedirs(db_folder, exist_ok=True)
            path = os.path.join(db_folder, DB_FILE)
        else:
            path = DB_FILE
        db = DatabaseManager(path)
        try:
            db.initialize(seed=seed)
        except sqlite3.Error:
            logger.exception("Failed to initialize database at %s", path)
            db.close()
            raise
        return db

    def close(self):
        if self._conn:
            self._conn.close()
            self._conn = None
            logger.info("Database connection closed")

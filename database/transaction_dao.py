import uuid
from typing import Optional
from database.db_manager import DatabaseManager
from models.transaction import Transaction, TransactionFilter
from utils.constants import SORT_KEYS

# Stored dates may carry a time part; comparisons use the calendar date only.
_DAY = "substr(t.date, 1, 10)"


class TransactionDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> Transaction:
        keys = row.keys()
        return Transaction(
            id=row["id"],
            date=row["date"],
            description=row["description"],
            amount=row["amount"],
            type=row["type"],
            category_id=row["category_id"],
            category_name=row["category_name"] if "category_name" in keys else "",
            category_icon=row["category_icon"] if "category_icon" in keys else None,
            category_color=row["category_color"] if "category_color" in keys else None,
        )

    def _select(self) -> str:
        return """
            SELECT t.*,
                   c.name  AS category_name,
                   c.icon  AS category_icon,
                   c.color AS category_color
            FROM transactions t
            JOIN categories c ON t.category_id = c.id
        """

    def get_all_raw(self) -> list[Transaction]:
        """All transactions without category display fields, newest first."""
        conn = self._db.get_connection()
        rows = conn.execute(
            "SELECT * FROM transactions t ORDER BY t.date DESC, t.id"
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def search(self, flt: TransactionFilter | None = None) -> list[Transaction]:
        flt = flt or TransactionFilter()
        sql = self._select()
        conditions: list[str] = []
        params: list = []

        if flt.search_term:
            conditions.append("t.description LIKE ?")
            params.append(f"%{flt.search_term}%")
        if flt.category_id and flt.category_id != "all":
            conditions.append("t.category_id = ?")
            params.append(flt.category_id)
        if flt.type and flt.type != "all":
            conditions.append("t.type = ?")
            params.append(flt.type)
        if flt.start_date:
            conditions.append(f"{_DAY} >= ?")
            params.append(flt.start_date)
        if flt.end_date:
            conditions.append(f"{_DAY} <= ?")
            params.append(flt.end_date)

        if conditions:
            sql += " WHERE " + " AND ".join(conditions)

        # Column names cannot be bound, so sort_key is whitelisted
        sort_key = flt.sort_key if flt.sort_key in SORT_KEYS else "date"
        direction = "ASC" if (flt.sort_direction or "").lower() == "asc" else "DESC"
        sql += f" ORDER BY t.{sort_key} {direction}, t.id {direction}"

        if flt.limit:
            sql += " LIMIT ?"
            params.append(int(flt.limit))

        rows = self._db.get_connection().execute(sql, params).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_by_id(self, tx_id: str) -> Optional[Transaction]:
        conn = self._db.get_connection()
        row = conn.execute(
            self._select() + " WHERE t.id = ?", (tx_id,)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def create(
        self,
        date: str,
        description: str,
        amount: float,
        type_: str,
        category_id: str,
    ) -> Transaction:
        conn = self._db.get_connection()
        new_id = str(uuid.uuid4())
        conn.execute(
            """INSERT INTO transactions
               (id, date, description, amount, type, category_id)
               VALUES (?, ?, ?, ?, ?, ?)""",
            (new_id, date, description, amount, type_, category_id),
        )
        conn.commit()
        return self.get_by_id(new_id)

    def update(
        self,
        tx_id: str,
        date: str,
        description: str,
        amount: float,
        type_: str,
        category_id: str,
    ) -> Optional[Transaction]:
        conn = self._db.get_connection()
        cursor = conn.execute(
            """UPDATE transactions
               SET date=?, description=?, amount=?, type=?, category_id=?
               WHERE id=?""",
            (date, description, amount, type_, category_id, tx_id),
        )
        conn.commit()
        if cursor.rowcount == 0:
            return None
        return self.get_by_id(tx_id)

    def delete(self, tx_id: str) -> bool:
        conn = self._db.get_connection()
        cursor = conn.execute("DELETE FROM transactions WHERE id = ?", (tx_id,))
        conn.commit()
        return cursor.rowcount > 0

    # ── Bulk (caller commits) ────────────────────────────────────────────────

    def delete_all(self):
        self._db.get_connection().execute("DELETE FROM transactions")

    def insert(self, tx: Transaction):
        self._db.get_connection().execute(
            """INSERT INTO transactions
               (id, date, description, amount, type, category_id)
               VALUES (?, ?, ?, ?, ?, ?)""",
            (tx.id, tx.date, tx.description, tx.amount, tx.type, tx.category_id),
        )

    # ── Aggregates ───────────────────────────────────────────────────────────

    def get_total_spending(self, category_id: str, start: str, end: str) -> float:
        """Sum of expense amounts for one category, start..end inclusive (YYYY-MM-DD)."""
        conn = self._db.get_connection()
        row = conn.execute(
            f"""SELECT COALESCE(SUM(t.amount), 0) AS total
                FROM transactions t
                WHERE t.category_id = ?
                  AND t.type = 'expense'
                  AND {_DAY} BETWEEN ? AND ?""",
            (category_id, start, end),
        ).fetchone()
        return float(row["total"])

    def get_totals(self, start: str, end: str) -> dict:
        """Return income and expense totals for start..end inclusive."""
        conn = self._db.get_connection()
        row = conn.execute(
            f"""SELECT
                SUM(CASE WHEN t.type='income'  THEN t.amount ELSE 0 END) AS income,
                SUM(CASE WHEN t.type='expense' THEN t.amount ELSE 0 END) AS expense
               FROM transactions t
               WHERE {_DAY} BETWEEN ? AND ?""",
            (start, end),
        ).fetchone()
        return {
            "income":  row["income"]  or 0.0,
            "expense": row["expense"] or 0.0,
        }

    def get_expense_by_category(self, start: str, end: str) -> list[dict]:
        conn = self._db.get_connection()
        rows = conn.execute(
            f"""SELECT t.category_id AS category_id,
                       c.name  AS category,
                       c.color AS color,
                       SUM(t.amount) AS total
                FROM transactions t
                JOIN categories c ON t.category_id = c.id
                WHERE t.type = 'expense'
                  AND {_DAY} BETWEEN ? AND ?
                GROUP BY t.category_id
                ORDER BY total DESC, c.name ASC""",
            (start, end),
        ).fetchall()
        return [dict(r) for r in rows]

    def get_daily_expenses(self, start: str, end: str) -> dict[str, float]:
        """{YYYY-MM-DD: total} for days that have expenses."""
        conn = self._db.get_connection()
        rows = conn.execute(
            f"""SELECT {_DAY} AS day, SUM(t.amount) AS total
                FROM transactions t
                WHERE t.type = 'expense'
                  AND {_DAY} BETWEEN ? AND ?
                GROUP BY day""",
            (start, end),
        ).fetchall()
        return {r["day"]: r["total"] for r in rows}

import uuid
from typing import Optional
from database.db_manager import DatabaseManager
from models.budget import Budget


class BudgetDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> Budget:
        keys = row.keys()
        return Budget(
            id=row["id"],
            category_id=row["category_id"],
            limit_amount=row["limit_amount"],
            period=row["period"],
            category_name=row["category_name"] if "category_name" in keys else "",
            category_icon=row["category_icon"] if "category_icon" in keys else None,
            category_color=row["category_color"] if "category_color" in keys else None,
        )

    def _select(self) -> str:
        return """
            SELECT b.*,
                   c.name  AS category_name,
                   c.icon  AS category_icon,
                   c.color AS category_color
            FROM budgets b
            JOIN categories c ON b.category_id = c.id
        """

    def get_all(self) -> list[Budget]:
        conn = self._db.get_connection()
        rows = conn.execute(self._select() + " ORDER BY c.name ASC").fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_all_raw(self) -> list[Budget]:
        """Budgets without category display fields, for export."""
        conn = self._db.get_connection()
        rows = conn.execute("SELECT * FROM budgets ORDER BY id").fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_by_id(self, budget_id: str) -> Optional[Budget]:
        conn = self._db.get_connection()
        row = conn.execute(
            self._select() + " WHERE b.id = ?", (budget_id,)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def create(self, category_id: str, limit_amount: float, period: str) -> Budget:
        """Raises sqlite3.IntegrityError if the category already has a budget."""
        conn = self._db.get_connection()
        new_id = str(uuid.uuid4())
        conn.execute(
            "INSERT INTO budgets(id, category_id, limit_amount, period) VALUES (?, ?, ?, ?)",
            (new_id, category_id, limit_amount, period),
        )
        conn.commit()
        return self.get_by_id(new_id)

    def update(self, budget_id: str, limit_amount: float, period: str) -> Optional[Budget]:
        conn = self._db.get_connection()
        cursor = conn.execute(
            "UPDATE budgets SET limit_amount=?, period=? WHERE id=?",
            (limit_amount, period, budget_id),
        )
        conn.commit()
        if cursor.rowcount == 0:
            return None
        return self.get_by_id(budget_id)

    def delete(self, budget_id: str) -> bool:
        conn = self._db.get_connection()
        cursor = conn.execute("DELETE FROM budgets WHERE id = ?", (budget_id,))
        conn.commit()
        return cursor.rowcount > 0

    # ── Bulk (caller commits) ────────────────────────────────────────────────

    def delete_all(self):
        self._db.get_connection().execute("DELETE FROM budgets")

    def insert(self, budget: Budget):
        self._db.get_connection().execute(
            "INSERT INTO budgets(id, category_id, limit_amount, period) VALUES (?, ?, ?, ?)",
            (budget.id, budget.category_id, budget.limit_amount, budget.period),
        )

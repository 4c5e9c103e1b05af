import uuid
from typing import Optional
from database.db_manager import DatabaseManager
from models.category import Category


class CategoryDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> Category:
        return Category(
            id=row["id"],
            name=row["name"],
            icon=row["icon"],
            color=row["color"],
        )

    def get_all(self) -> list[Category]:
        conn = self._db.get_connection()
        rows = conn.execute(
            "SELECT * FROM categories ORDER BY name ASC"
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_by_id(self, category_id: str) -> Optional[Category]:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT * FROM categories WHERE id = ?", (category_id,)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def exists(self, category_id: str) -> bool:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT 1 FROM categories WHERE id = ?", (category_id,)
        ).fetchone()
        return row is not None

    def create(self, name: str, icon: str | None = None, color: str | None = None) -> Category:
        conn = self._db.get_connection()
        new_id = str(uuid.uuid4())
        conn.execute(
            "INSERT INTO categories(id, name, icon, color) VALUES (?, ?, ?, ?)",
            (new_id, name, icon, color),
        )
        conn.commit()
        return self.get_by_id(new_id)

    def update(self, category_id: str, name: str, icon: str | None, color: str | None) -> Optional[Category]:
        conn = self._db.get_connection()
        cursor = conn.execute(
            "UPDATE categories SET name=?, icon=?, color=? WHERE id=?",
            (name, icon, color, category_id),
        )
        conn.commit()
        if cursor.rowcount == 0:
            return None
        return self.get_by_id(category_id)

    def delete(self, category_id: str) -> bool:
        """Transactions and the budget of the category go with it (FK cascade)."""
        conn = self._db.get_connection()
        cursor = conn.execute("DELETE FROM categories WHERE id = ?", (category_id,))
        conn.commit()
        return cursor.rowcount > 0

    # ── Bulk (caller commits) ────────────────────────────────────────────────

    def delete_all(self):
        self._db.get_connection().execute("DELETE FROM categories")

    def insert(self, category: Category):
        self._db.get_connection().execute(
            "INSERT INTO categories(id, name, icon, color) VALUES (?, ?, ?, ?)",
            (category.id, category.name, category.icon, category.color),
        )

import logging
import sqlite3
import uuid
from typing import Optional

from database.category_dao import CategoryDAO
from models.category import Category
from models.result import ActionResult
from services.errors import describe_integrity_error, failure_message

logger = logging.getLogger(__name__)


class CategoryService:
    def __init__(self, category_dao: CategoryDAO):
        self._dao = category_dao

    def get_all(self) -> list[Category]:
        try:
            return self._dao.get_all()
        except sqlite3.Error:
            logger.exception("Failed to fetch categories")
            return []

    def get_by_id(self, category_id: str) -> Optional[Category]:
        try:
            return self._dao.get_by_id(category_id)
        except sqlite3.Error:
            logger.exception("Failed to fetch category %s", category_id)
            return None

    def create(self, name: str, icon: str | None = None, color: str | None = None) -> ActionResult:
        try:
            name, icon, color = self._clean(name, icon, color)
            category = self._dao.create(name, icon, color)
        except ValueError as e:
            return ActionResult.fail(str(e))
        except sqlite3.IntegrityError as e:
            logger.warning("Rejected category %r: %s", name, e)
            return ActionResult.fail(describe_integrity_error(e, "add category"))
        except sqlite3.Error:
            logger.exception("Failed to add category")
            return ActionResult.fail(failure_message("add category"))
        logger.info("Added category %s (%s)", category.id, category.name)
        return ActionResult.ok(category)

    def update(self, category_id: str, name: str, icon: str | None = None,
               color: str | None = None) -> ActionResult:
        try:
            name, icon, color = self._clean(name, icon, color)
            category = self._dao.update(category_id, name, icon, color)
        except ValueError as e:
            return ActionResult.fail(str(e))
        except sqlite3.IntegrityError as e:
            logger.warning("Rejected update of category %s: %s", category_id, e)
            return ActionResult.fail(describe_integrity_error(e, "update category"))
        except sqlite3.Error:
            logger.exception("Failed to update category %s", category_id)
            return ActionResult.fail(failure_message("update category"))
        if category is None:
            return ActionResult.fail("Category not found.")
        return ActionResult.ok(category)

    def delete(self, category_id: str) -> ActionResult:
        """Also removes the category's transactions and budget."""
        try:
            removed = self._dao.delete(category_id)
        except sqlite3.Error:
            logger.exception("Failed to delete category %s", category_id)
            return ActionResult.fail(failure_message("delete category"))
        if removed:
            logger.info("Deleted category %s", category_id)
        return ActionResult.ok()

    # ── Export / import ──────────────────────────────────────────────────────

    def export_all(self) -> list[Category]:
        return self.get_all()

    def import_all(self, records: list[dict], commit: bool = True) -> ActionResult:
        """Replace every category with records.

        Deleting the old categories cascades to transactions and budgets.
        """
        conn = self._dao._db.get_connection()
        count = 0
        try:
            self._dao.delete_all()
            seen: set[str] = set()
            for record in records:
                try:
                    name, icon, color = self._clean(
                        record.get("name"), record.get("icon"), record.get("color")
                    )
                except (ValueError, AttributeError) as e:
                    logger.warning("Skipping category import record %r: %s", record, e)
                    continue
                category_id = str(record.get("id") or uuid.uuid4())
                if category_id in seen:
                    logger.warning("Skipping duplicate category id %s", category_id)
                    continue
                self._dao.insert(Category(id=category_id, name=name, icon=icon, color=color))
                seen.add(category_id)
                count += 1
            if commit:
                conn.commit()
        except sqlite3.Error:
            logger.exception("Failed to import categories")
            conn.rollback()
            return ActionResult.fail(failure_message("import categories"))
        logger.info("Imported %d categories", count)
        return ActionResult.ok(count=count)

    def _clean(self, name, icon, color) -> tuple[str, str | None, str | None]:
        if not isinstance(name, str) or not name.strip():
            raise ValueError("Category name cannot be empty.")
        name = name.strip()
        return name, (icon or None), (color or None)

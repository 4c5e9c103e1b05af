"""Export and import all user data (settings, categories, transactions,
budgets) as a single JSON document.
"""
import json
import logging
import sqlite3
from datetime import datetime, timezone

from database.db_manager import DatabaseManager
from models.result import ActionResult
from services.budget_service import BudgetService
from services.category_service import CategoryService
from services.errors import failure_message
from services.settings_service import SettingsService
from services.transaction_service import TransactionService

logger = logging.getLogger(__name__)

# Import order matters: categories must exist before the rows that reference them
IMPORT_ORDER = ("settings", "categories", "transactions", "budgets")


class DataService:
    def __init__(
        self,
        db: DatabaseManager,
        settings_service: SettingsService,
        category_service: CategoryService,
        tx_service: TransactionService,
        budget_service: BudgetService,
    ):
        self._db = db
        self._services = {
            "settings": settings_service,
            "categories": category_service,
            "transactions": tx_service,
            "budgets": budget_service,
        }

    # ── Export ────────────────────────────────────────────────────────────────

    def export_json(self) -> dict:
        """Return a full export dict (caller writes to disk)."""
        return {
            "exportedAt": datetime.now(timezone.utc).isoformat(),
            "settings": self._build_settings(),
            "categories": self._build_categories(),
            "transactions": self._build_transactions(),
            "budgets": self._build_budgets(),
        }

    def export_to_file(self, path: str) -> ActionResult:
        data = self.export_json()
        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            logger.exception("Failed to write export to %s", path)
            return ActionResult.fail(f"Could not write export file: {e}")
        count = sum(len(data[key]) for key in IMPORT_ORDER)
        logger.info("Exported %d records to %s", count, path)
        return ActionResult.ok(value=path, count=count)

    # ── Import ────────────────────────────────────────────────────────────────

    def import_json(self, data: dict) -> ActionResult:
        """Import a previously exported document.

        Every entity present replaces the stored one; a missing or non-list
        top-level key leaves that entity untouched. All entities are applied
        in one transaction, so a storage failure leaves the store unchanged.
        Returns stats {entity: count} as value and the total as count.
        """
        if not isinstance(data, dict):
            return ActionResult.fail("Import data must be a JSON object.")

        stats: dict[str, int] = {}
        try:
            for key in IMPORT_ORDER:
                records = data.get(key)
                if not isinstance(records, list):
                    logger.info("No '%s' array in import data, skipping", key)
                    continue
                result = self._services[key].import_all(records, commit=False)
                if not result.success:
                    self._db.rollback()
                    return result
                stats[key] = result.count
            self._db.commit()
        except sqlite3.Error:
            logger.exception("Failed to import data")
            self._db.rollback()
            return ActionResult.fail(failure_message("import data"))

        total = sum(stats.values())
        logger.info("Imported %d records: %s", total, stats)
        return ActionResult.ok(value=stats, count=total)

    def import_file(self, path: str) -> ActionResult:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            return ActionResult.fail(f"Could not read import file: {e}")
        except ValueError:
            return ActionResult.fail("Import file is not valid JSON.")
        return self.import_json(data)

    # ── Private builders ──────────────────────────────────────────────────────

    def _build_settings(self) -> list[dict]:
        return [
            {"key": s.key, "value": s.value}
            for s in self._services["settings"].export_all()
        ]

    def _build_categories(self) -> list[dict]:
        return [
            {"id": c.id, "name": c.name, "icon": c.icon, "color": c.color}
            for c in self._services["categories"].export_all()
        ]

    def _build_transactions(self) -> list[dict]:
        return [
            {
                "id": t.id,
                "date": t.date,
                "description": t.description,
                "amount": t.amount,
                "type": t.type,
                "categoryId": t.category_id,
            }
            for t in self._services["transactions"].export_all()
        ]

    def _build_budgets(self) -> list[dict]:
        return [
            {
                "id": b.id,
                "categoryId": b.category_id,
                "limitAmount": b.limit_amount,
                "period": b.period,
            }
            for b in self._services["budgets"].export_all()
        ]

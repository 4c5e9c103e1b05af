import logging
import math
import sqlite3
import uuid
from dataclasses import replace
from typing import Optional

from database.category_dao import CategoryDAO
from database.transaction_dao import TransactionDAO
from models.result import ActionResult
from models.transaction import Transaction, TransactionFilter
from services.errors import describe_integrity_error, failure_message
from utils.constants import TRANSACTION_TYPES
from utils.date_helpers import as_date, format_date, normalize_date

logger = logging.getLogger(__name__)


class TransactionService:
    def __init__(self, tx_dao: TransactionDAO, category_dao: CategoryDAO):
        self._dao = tx_dao
        self._category_dao = category_dao

    def search(self, flt: TransactionFilter | None = None, **kwargs) -> list[Transaction]:
        """List transactions; keyword arguments build or override a TransactionFilter.

        Raises ValueError for an unparseable start_date/end_date.
        """
        flt = replace(flt, **kwargs) if flt is not None else TransactionFilter(**kwargs)
        flt = replace(
            flt,
            start_date=self._bound(flt.start_date),
            end_date=self._bound(flt.end_date),
        )
        try:
            return self._dao.search(flt)
        except sqlite3.Error:
            logger.exception("Failed to fetch transactions")
            return []

    def get_by_id(self, tx_id: str) -> Optional[Transaction]:
        try:
            return self._dao.get_by_id(tx_id)
        except sqlite3.Error:
            logger.exception("Failed to fetch transaction %s", tx_id)
            return None

    def create(
        self,
        description: str,
        amount: float,
        date: str,
        type_: str,
        category_id: str,
    ) -> ActionResult:
        try:
            description, amount, date = self._validate(description, amount, date, type_, category_id)
            tx = self._dao.create(date, description, amount, type_, category_id)
        except ValueError as e:
            return ActionResult.fail(str(e))
        except sqlite3.IntegrityError as e:
            logger.warning("Rejected transaction %r: %s", description, e)
            return ActionResult.fail(describe_integrity_error(e, "add transaction"))
        except sqlite3.Error:
            logger.exception("Failed to add transaction")
            return ActionResult.fail(failure_message("add transaction"))
        return ActionResult.ok(tx)

    def update(
        self,
        tx_id: str,
        description: str,
        amount: float,
        date: str,
        type_: str,
        category_id: str,
    ) -> ActionResult:
        try:
            description, amount, date = self._validate(description, amount, date, type_, category_id)
            tx = self._dao.update(tx_id, date, description, amount, type_, category_id)
        except ValueError as e:
            return ActionResult.fail(str(e))
        except sqlite3.IntegrityError as e:
            logger.warning("Rejected update of transaction %s: %s", tx_id, e)
            return ActionResult.fail(describe_integrity_error(e, "update transaction"))
        except sqlite3.Error:
            logger.exception("Failed to update transaction %s", tx_id)
            return ActionResult.fail(failure_message("update transaction"))
        if tx is None:
            return ActionResult.fail("Transaction not found.")
        return ActionResult.ok(tx)

    def delete(self, tx_id: str) -> ActionResult:
        try:
            self._dao.delete(tx_id)
        except sqlite3.Error:
            logger.exception("Failed to delete transaction %s", tx_id)
            return ActionResult.fail(failure_message("delete transaction"))
        return ActionResult.ok()

    # ── Export / import ──────────────────────────────────────────────────────

    def export_all(self) -> list[Transaction]:
        try:
            return self._dao.get_all_raw()
        except sqlite3.Error:
            logger.exception("Failed to fetch all transactions for export")
            return []

    def import_all(self, records: list[dict], commit: bool = True) -> ActionResult:
        """Replace every transaction; records with unknown categories are skipped."""
        conn = self._dao._db.get_connection()
        count = 0
        try:
            self._dao.delete_all()
            seen: set[str] = set()
            for record in records:
                try:
                    category_id = record.get("categoryId", record.get("category_id"))
                    type_ = record.get("type")
                    description, amount, date = self._validate(
                        record.get("description"), record.get("amount"),
                        record.get("date"), type_, category_id,
                    )
                except (ValueError, AttributeError) as e:
                    logger.warning("Skipping transaction import record %r: %s", record, e)
                    continue
                if not self._category_dao.exists(category_id):
                    logger.warning(
                        "Skipping transaction import due to missing category: %s", category_id
                    )
                    continue
                tx_id = str(record.get("id") or uuid.uuid4())
                if tx_id in seen:
                    logger.warning("Skipping duplicate transaction id %s", tx_id)
                    continue
                self._dao.insert(Transaction(
                    id=tx_id,
                    date=date,
                    description=description,
                    amount=amount,
                    type=type_,
                    category_id=category_id,
                ))
                seen.add(tx_id)
                count += 1
            if commit:
                conn.commit()
        except sqlite3.Error:
            logger.exception("Failed to import transactions")
            conn.rollback()
            return ActionResult.fail(failure_message("import transactions"))
        logger.info("Imported %d transactions", count)
        return ActionResult.ok(count=count)

    # ── Helpers ──────────────────────────────────────────────────────────────

    def _bound(self, value) -> str | None:
        """Normalize a filter bound to a YYYY-MM-DD string."""
        if value is None or value == "":
            return None
        d = as_date(value)
        if d is None:
            raise ValueError(f"Invalid date filter: {value}")
        return format_date(d)

    def _validate(self, description, amount, date, type_, category_id) -> tuple[str, float, str]:
        """Return cleaned (description, amount, date) or raise ValueError."""
        if not isinstance(description, str) or not description.strip():
            raise ValueError("Description is required.")
        description = description.strip()
        if type_ not in TRANSACTION_TYPES:
            raise ValueError(f"Invalid type: {type_}")
        if isinstance(amount, bool):
            raise ValueError("Amount must be a positive number.")
        try:
            amount = float(amount)
        except (TypeError, ValueError):
            raise ValueError("Amount must be a positive number.")
        if not math.isfinite(amount) or amount <= 0:
            raise ValueError("Amount must be a positive number.")
        date = normalize_date(date) if isinstance(date, str) else None
        if date is None:
            raise ValueError("Invalid date format. Use ISO-8601 (YYYY-MM-DD).")
        if not category_id or not isinstance(category_id, str):
            raise ValueError("Category is required.")
        return description, amount, date

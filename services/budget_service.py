import logging
import math
import sqlite3
import uuid
from datetime import date, datetime
from typing import Optional

from database.budget_dao import BudgetDAO
from database.category_dao import CategoryDAO
from database.transaction_dao import TransactionDAO
from models.budget import Budget
from models.result import ActionResult
from services.errors import describe_integrity_error, failure_message
from utils.constants import BUDGET_PERIODS
from utils.date_helpers import as_date, format_date, month_range, today, week_range, year_range

logger = logging.getLogger(__name__)


def resolve_window(period: str, now: date | datetime | None = None) -> tuple[date, date]:
    """Return the inclusive (start, end) calendar dates of the spend window.

    weekly  -> Monday..Sunday of the week containing now
    monthly -> first..last day of now's month
    yearly  -> Jan 1..Dec 31 of now's year
    Anything else is treated as monthly. Raises ValueError when now is given
    but is not a date.
    """
    d = as_date(now) if now is not None else today()
    if d is None:
        raise ValueError(f"Invalid reference date: {now!r}")
    if period == "weekly":
        return week_range(d)
    if period == "yearly":
        return year_range(d)
    if period != "monthly":
        logger.warning("Unknown budget period %r, using monthly window", period)
    return month_range(d)


class BudgetService:
    def __init__(
        self,
        budget_dao: BudgetDAO,
        tx_dao: TransactionDAO,
        category_dao: CategoryDAO,
    ):
        self._budget_dao = budget_dao
        self._tx_dao = tx_dao
        self._category_dao = category_dao

    def get_all(self) -> list[Budget]:
        try:
            return self._budget_dao.get_all()
        except sqlite3.Error:
            logger.exception("Failed to fetch budgets")
            return []

    def get_by_id(self, budget_id: str) -> Optional[Budget]:
        try:
            return self._budget_dao.get_by_id(budget_id)
        except sqlite3.Error:
            logger.exception("Failed to fetch budget %s", budget_id)
            return None

    def total_spent(self, category_id: str, start: date | str, end: date | str) -> float:
        """Expense total for the category within start..end (inclusive days)."""
        start_d, end_d = as_date(start), as_date(end)
        if start_d is None or end_d is None:
            raise ValueError(f"Invalid spend window: {start!r}..{end!r}")
        try:
            return self._tx_dao.get_total_spending(
                category_id, format_date(start_d), format_date(end_d)
            )
        except sqlite3.Error:
            logger.exception("Failed to get total spending for category %s", category_id)
            return 0.0

    def get_budget_status(
        self, now: date | datetime | None = None, limit: int | None = None
    ) -> list[Budget]:
        """Return budgets with spent amounts for their current window filled in.

        Recomputed from the transactions table on every call.
        """
        budgets = self.get_all()
        if limit is not None:
            budgets = budgets[:limit]
        for b in budgets:
            start, end = resolve_window(b.period, now)
            b.window_start = format_date(start)
            b.window_end = format_date(end)
            b.spent_amount = self.total_spent(b.category_id, start, end)
        return budgets

    def add(self, category_id: str, limit_amount: float, period: str) -> ActionResult:
        """Fails if the category already has a budget."""
        try:
            limit_amount = self._validate(limit_amount, period)
            if not category_id:
                raise ValueError("Category is required.")
            budget = self._budget_dao.create(category_id, limit_amount, period)
        except ValueError as e:
            return ActionResult.fail(str(e))
        except sqlite3.IntegrityError as e:
            logger.warning("Rejected budget for category %s: %s", category_id, e)
            return ActionResult.fail(describe_integrity_error(e, "add budget"))
        except sqlite3.Error:
            logger.exception("Failed to add budget")
            return ActionResult.fail(failure_message("add budget"))
        logger.info("Added %s budget %s for category %s", period, budget.id, category_id)
        return ActionResult.ok(budget)

    def update(self, budget_id: str, limit_amount: float, period: str) -> ActionResult:
        """Change limit and period; the category of a budget is fixed."""
        try:
            limit_amount = self._validate(limit_amount, period)
            budget = self._budget_dao.update(budget_id, limit_amount, period)
        except ValueError as e:
            return ActionResult.fail(str(e))
        except sqlite3.IntegrityError as e:
            logger.warning("Rejected update of budget %s: %s", budget_id, e)
            return ActionResult.fail(describe_integrity_error(e, "update budget"))
        except sqlite3.Error:
            logger.exception("Failed to update budget %s", budget_id)
            return ActionResult.fail(failure_message("update budget"))
        if budget is None:
            return ActionResult.fail("Budget not found.")
        return ActionResult.ok(budget)

    def delete(self, budget_id: str) -> ActionResult:
        try:
            self._budget_dao.delete(budget_id)
        except sqlite3.Error:
            logger.exception("Failed to delete budget %s", budget_id)
            return ActionResult.fail(failure_message("delete budget"))
        return ActionResult.ok()

    # ── Export / import ──────────────────────────────────────────────────────

    def export_all(self) -> list[Budget]:
        try:
            return self._budget_dao.get_all_raw()
        except sqlite3.Error:
            logger.exception("Failed to fetch all budgets for export")
            return []

    def import_all(self, records: list[dict], commit: bool = True) -> ActionResult:
        """Replace every budget; unknown categories and invalid limits are skipped."""
        conn = self._budget_dao._db.get_connection()
        count = 0
        try:
            self._budget_dao.delete_all()
            seen_ids: set[str] = set()
            seen_categories: set[str] = set()
            for record in records:
                try:
                    category_id = record.get("categoryId", record.get("category_id"))
                    period = record.get("period")
                    limit_amount = self._validate(
                        record.get("limitAmount", record.get("limit_amount")), period
                    )
                except (ValueError, AttributeError) as e:
                    logger.warning("Skipping budget import record %r: %s", record, e)
                    continue
                if not isinstance(category_id, str) or not self._category_dao.exists(category_id):
                    logger.warning(
                        "Skipping budget import due to missing category: %s", category_id
                    )
                    continue
                if category_id in seen_categories:
                    logger.warning("Skipping second budget for category %s", category_id)
                    continue
                budget_id = str(record.get("id") or uuid.uuid4())
                if budget_id in seen_ids:
                    logger.warning("Skipping duplicate budget id %s", budget_id)
                    continue
                self._budget_dao.insert(Budget(
                    id=budget_id,
                    category_id=category_id,
                    limit_amount=limit_amount,
                    period=period,
                ))
                seen_ids.add(budget_id)
                seen_categories.add(category_id)
                count += 1
            if commit:
                conn.commit()
        except sqlite3.Error:
            logger.exception("Failed to import budgets")
            conn.rollback()
            return ActionResult.fail(failure_message("import budgets"))
        logger.info("Imported %d budgets", count)
        return ActionResult.ok(count=count)

    def get_budgetable_categories(self):
        """Categories that do not have a budget yet."""
        budgeted = {b.category_id for b in self.get_all()}
        return [c for c in self._category_dao.get_all() if c.id not in budgeted]

    def _validate(self, limit_amount, period) -> float:
        if isinstance(limit_amount, bool):
            raise ValueError("Budget limit must be a positive number.")
        try:
            limit_amount = float(limit_amount)
        except (TypeError, ValueError):
            raise ValueError("Budget limit must be a positive number.")
        if not math.isfinite(limit_amount) or limit_amount <= 0:
            raise ValueError("Budget limit must be a positive number.")
        if period not in BUDGET_PERIODS:
            raise ValueError(f"Invalid budget period: {period}")
        return limit_amount

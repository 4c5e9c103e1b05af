import logging
import sqlite3
from datetime import date, datetime

from database.transaction_dao import TransactionDAO
from models.transaction import TransactionFilter
from services.budget_service import BudgetService
from utils.constants import DASHBOARD_BUDGET_LIMIT, RECENT_TRANSACTIONS_LIMIT
from utils.date_helpers import as_date, days_between, format_date, month_range, today

logger = logging.getLogger(__name__)


class ReportService:
    def __init__(self, tx_dao: TransactionDAO, budget_service: BudgetService):
        self._tx_dao = tx_dao
        self._budget_svc = budget_service

    def get_summary(self, start: date, end: date) -> dict:
        """Return {income, expense, net} for start..end inclusive."""
        try:
            totals = self._tx_dao.get_totals(format_date(start), format_date(end))
        except sqlite3.Error:
            logger.exception("Failed to compute totals")
            totals = {"income": 0.0, "expense": 0.0}
        totals["net"] = totals["income"] - totals["expense"]
        return totals

    def get_category_breakdown(self, start: date, end: date) -> list[dict]:
        """Return [{category_id, category, color, total}, ...] for pie chart, largest first."""
        try:
            return self._tx_dao.get_expense_by_category(format_date(start), format_date(end))
        except sqlite3.Error:
            logger.exception("Failed to compute category breakdown")
            return []

    def get_daily_spending(self, start: date, end: date) -> list[dict]:
        """Return [{date, total}, ...] with one entry per day, zero-filled."""
        try:
            daily = self._tx_dao.get_daily_expenses(format_date(start), format_date(end))
        except sqlite3.Error:
            logger.exception("Failed to compute daily spending")
            daily = {}
        return [
            {"date": format_date(d), "total": daily.get(format_date(d), 0.0)}
            for d in days_between(start, end)
        ]

    def get_dashboard(self, now: date | datetime | None = None) -> dict:
        d = as_date(now) or today()
        start, end = month_range(d)
        try:
            recent = self._tx_dao.search(TransactionFilter(
                sort_key="date", sort_direction="desc", limit=RECENT_TRANSACTIONS_LIMIT,
            ))
        except sqlite3.Error:
            logger.exception("Failed to load recent transactions")
            recent = []
        return {
            "period_start": format_date(start),
            "period_end": format_date(end),
            "summary": self.get_summary(start, end),
            "recent_transactions": recent,
            "budgets": self._budget_svc.get_budget_status(d, limit=DASHBOARD_BUDGET_LIMIT),
        }

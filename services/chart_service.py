import logging
import os
from datetime import date, datetime

from matplotlib.figure import Figure

from models.budget import Budget
from services.budget_service import BudgetService
from services.report_service import ReportService
from services.settings_service import SettingsService
from utils.colors import resolve_color
from utils.constants import LIMIT_BAR_COLOR, OVER_LIMIT_COLOR
from utils.currency import currency_symbol, format_currency
from utils.date_helpers import as_date, friendly_month, month_range, parse_date, today

logger = logging.getLogger(__name__)

CHART_FILES = {
    "spending_pie": "spending_by_category.png",
    "spending_line": "daily_spending.png",
    "budget_bars": "budget_vs_actual.png",
}


def _no_data(ax, text: str):
    ax.text(0.5, 0.5, text, ha="center", va="center",
            transform=ax.transAxes, color="gray")
    ax.set_axis_off()


def _money_formatter(symbol: str):
    return lambda v, _: (
        f"{symbol}{v/1000:.0f}k" if abs(v) >= 1000 else f"{symbol}{v:.0f}"
    )


def spending_pie_chart(breakdown: list[dict], currency: str = "USD") -> Figure:
    """Expense share per category."""
    fig = Figure(figsize=(5, 4), dpi=100, tight_layout=True)
    ax = fig.add_subplot(111)
    ax.set_title("Spending by Category")

    total = sum(d["total"] for d in breakdown) if breakdown else 0
    if not breakdown or total == 0:
        _no_data(ax, "No expense data")
        return fig

    ax.pie(
        [d["total"] for d in breakdown],
        labels=[d["category"] for d in breakdown],
        colors=[resolve_color(d.get("color"), i) for i, d in enumerate(breakdown)],
        autopct="%1.0f%%",
        startangle=90,
    )
    ax.set_aspect("equal")
    ax.legend(
        [f"{d['category']}: {format_currency(d['total'], currency)}" for d in breakdown],
        loc="upper left", bbox_to_anchor=(1.0, 1.0), fontsize=8, frameon=False,
    )
    return fig


def spending_line_chart(daily: list[dict], currency: str = "USD") -> Figure:
    """Expenses per calendar day."""
    fig = Figure(figsize=(7, 3), dpi=100, tight_layout=True)
    ax = fig.add_subplot(111)
    ax.set_title("Daily Spending")

    if not daily or all(d["total"] == 0 for d in daily):
        _no_data(ax, "No expenses in this period")
        return fig

    days = [parse_date(d["date"]) for d in daily]
    ax.plot(days, [d["total"] for d in daily], color=LIMIT_BAR_COLOR, marker="o", markersize=3)
    ax.set_xticks(days[:: max(1, len(days) // 8)])
    ax.set_xticklabels([d.strftime("%b %d") for d in days[:: max(1, len(days) // 8)]], fontsize=8)
    ax.yaxis.set_major_formatter(_money_formatter(currency_symbol(currency)))
    ax.grid(axis="y", alpha=0.3)
    return fig


def budget_bar_chart(budgets: list[Budget], currency: str = "USD") -> Figure:
    """Limit vs. spent per budget; the spent bar turns red over the limit."""
    fig = Figure(figsize=(7, 4), dpi=100, tight_layout=True)
    ax = fig.add_subplot(111)
    ax.set_title("Budget vs. Actual Spending")

    if not budgets:
        _no_data(ax, "No budgets")
        return fig

    x = list(range(len(budgets)))
    w = 0.35
    ax.bar([i - w / 2 for i in x], [b.limit_amount for b in budgets], w,
           color=LIMIT_BAR_COLOR, label="Budget Limit")
    ax.bar(
        [i + w / 2 for i in x],
        [b.spent_amount for b in budgets],
        w,
        color=[
            OVER_LIMIT_COLOR if b.is_over_limit else resolve_color(b.category_color, i)
            for i, b in enumerate(budgets)
        ],
        label="Actual Spent",
    )
    ax.set_xticks(x)
    ax.set_xticklabels([b.category_name or "Unknown" for b in budgets], rotation=30, ha="right")
    ax.yaxis.set_major_formatter(_money_formatter(currency_symbol(currency)))
    ax.legend(fontsize=8)
    return fig


class ChartService:
    def __init__(
        self,
        report_service: ReportService,
        budget_service: BudgetService,
        settings_service: SettingsService,
    ):
        self._report_svc = report_service
        self._budget_svc = budget_service
        self._settings_svc = settings_service

    def build_charts(self, now: date | datetime | None = None) -> dict[str, Figure]:
        """Charts for the month containing now."""
        d = as_date(now) or today()
        start, end = month_range(d)
        currency = self._settings_svc.get_currency()
        pie = spending_pie_chart(self._report_svc.get_category_breakdown(start, end), currency)
        pie.suptitle(friendly_month(d), fontsize=9)
        return {
            "spending_pie": pie,
            "spending_line": spending_line_chart(
                self._report_svc.get_daily_spending(start, end), currency
            ),
            "budget_bars": budget_bar_chart(self._budget_svc.get_budget_status(d), currency),
        }

    def render_all(self, out_dir: str, now: date | datetime | None = None) -> list[str]:
        """Write every chart as PNG into out_dir; returns the file paths."""
        os.makedirs(out_dir, exist_ok=True)
        paths = []
        for name, fig in self.build_charts(now).items():
            path = os.path.join(out_dir, CHART_FILES[name])
            fig.savefig(path, format="png")
            paths.append(path)
            logger.info("Wrote chart %s", path)
        return paths

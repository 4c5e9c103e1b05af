import argparse
import logging
import os
import sqlite3
import sys
from dataclasses import dataclass

# Ensure project root is on sys.path when run directly
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from database.db_manager import DatabaseManager
from database.transaction_dao import TransactionDAO
from database.category_dao import CategoryDAO
from database.budget_dao import BudgetDAO

from services.budget_service import BudgetService
from services.category_service import CategoryService
from services.chart_service import ChartService
from services.data_service import DataService
from services.report_service import ReportService
from services.settings_service import SettingsService
from services.transaction_service import TransactionService

from models.result import ActionResult
from utils.app_config import configure_logging, get_db_folder, get_log_level, set_db_folder
from utils.constants import APP_NAME, BUDGET_PERIODS, SORT_KEYS, TRANSACTION_TYPES
from utils.currency import CURRENCIES, format_currency, format_signed
from utils.date_helpers import as_date, today

logger = logging.getLogger(APP_NAME)


@dataclass
class App:
    db: DatabaseManager
    settings: SettingsService
    categories: CategoryService
    transactions: TransactionService
    budgets: BudgetService
    reports: ReportService
    charts: ChartService
    data: DataService


def build_app(db: DatabaseManager) -> App:
    # ── DAOs ─────────────────────────────────────────────────────────────────
    tx_dao = TransactionDAO(db)
    category_dao = CategoryDAO(db)
    budget_dao = BudgetDAO(db)

    # ── Services ─────────────────────────────────────────────────────────────
    settings_svc = SettingsService(db)
    category_svc = CategoryService(category_dao)
    tx_svc = TransactionService(tx_dao, category_dao)
    budget_svc = BudgetService(budget_dao, tx_dao, category_dao)
    report_svc = ReportService(tx_dao, budget_svc)
    chart_svc = ChartService(report_svc, budget_svc, settings_svc)
    data_svc = DataService(db, settings_svc, category_svc, tx_svc, budget_svc)

    return App(
        db=db,
        settings=settings_svc,
        categories=category_svc,
        transactions=tx_svc,
        budgets=budget_svc,
        reports=report_svc,
        charts=chart_svc,
        data=data_svc,
    )


def _date_arg(value: str):
    d = as_date(value)
    if d is None:
        raise argparse.ArgumentTypeError(f"invalid date: {value!r} (use YYYY-MM-DD)")
    return d


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=APP_NAME, description="Personal budgeting ledger.")
    parser.add_argument("--db", help="Path to the SQLite store (default: configured folder or CWD)")
    parser.add_argument("--log-level", help="Logging level, e.g. INFO or DEBUG")
    parser.add_argument("--no-seed", action="store_true", help="Do not load sample data into a fresh store")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init", help="Create the store (and seed it once)")

    p = sub.add_parser("summary", help="Income, expenses and budgets for a month")
    p.add_argument("--date", type=_date_arg, help="Any day of the month to report on")

    p = sub.add_parser("transactions", help="List transactions")
    p.add_argument("--search", dest="search_term")
    p.add_argument("--category", dest="category_id")
    p.add_argument("--type", choices=TRANSACTION_TYPES + ("all",))
    p.add_argument("--start", dest="start_date")
    p.add_argument("--end", dest="end_date")
    p.add_argument("--sort", dest="sort_key", default="date", choices=SORT_KEYS)
    p.add_argument("--direction", dest="sort_direction", default="desc", choices=("asc", "desc"))
    p.add_argument("--limit", type=int)

    p = sub.add_parser("add-transaction", help="Record an income or expense")
    p.add_argument("description")
    p.add_argument("amount", type=float)
    p.add_argument("category_id")
    p.add_argument("--type", default="expense", choices=TRANSACTION_TYPES)
    p.add_argument("--date", default=None)

    p = sub.add_parser("budgets", help="Budget progress for the current windows")
    p.add_argument("--date", type=_date_arg)

    p = sub.add_parser("add-budget", help="Create a budget for a category")
    p.add_argument("category_id")
    p.add_argument("limit_amount", type=float)
    p.add_argument("--period", default="monthly", choices=BUDGET_PERIODS)

    p = sub.add_parser("export", help="Export all data to a JSON file")
    p.add_argument("path")

    p = sub.add_parser("import", help="Replace data from a JSON export")
    p.add_argument("path")

    p = sub.add_parser("charts", help="Render charts as PNG files")
    p.add_argument("out_dir")
    p.add_argument("--date", type=_date_arg)

    p = sub.add_parser("currency", help="Show or set the display currency")
    p.add_argument("code", nargs="?", choices=list(CURRENCIES))

    p = sub.add_parser("config", help="Show or change where the store is kept")
    group = p.add_mutually_exclusive_group()
    group.add_argument("--db-folder", help="Folder for the store file (created on next use)")
    group.add_argument("--reset-db-folder", action="store_true",
                       help="Go back to the current working directory")

    return parser


def _report(result: ActionResult, ok_text: str) -> int:
    if result.success:
        print(ok_text)
        return 0
    print(f"Error: {result.message}", file=sys.stderr)
    return 1


def _print_budgets(budgets, currency: str):
    if not budgets:
        print("No budgets.")
        return
    for b in budgets:
        print(
            f"  {b.category_name:<18} {format_currency(b.spent_amount, currency):>12} / "
            f"{format_currency(b.limit_amount, currency):<12} {b.percentage:6.1%}  "
            f"{b.period} {b.window_start}..{b.window_end}"
            + ("  OVER" if b.is_over_limit else "")
        )


def run(app: App, args: argparse.Namespace) -> int:
    currency = app.settings.get_currency()

    if args.command == "init":
        print(f"Store ready: {app.db.db_path}")
        return 0

    if args.command == "summary":
        dash = app.reports.get_dashboard(args.date)
        s = dash["summary"]
        print(f"{dash['period_start']} .. {dash['period_end']}")
        print(f"  Income:   {format_currency(s['income'], currency)}")
        print(f"  Expenses: {format_currency(s['expense'], currency)}")
        print(f"  Net:      {format_signed(s['net'], currency)}")
        print("Budgets:")
        _print_budgets(dash["budgets"], currency)
        print("Recent transactions:")
        for t in dash["recent_transactions"]:
            print(f"  {t.day}  {t.type:<7} {format_currency(t.amount, currency):>12}  "
                  f"{t.category_name}: {t.description}")
        return 0

    if args.command == "transactions":
        try:
            rows = app.transactions.search(
                search_term=args.search_term,
                category_id=args.category_id,
                type=args.type,
                start_date=args.start_date,
                end_date=args.end_date,
                sort_key=args.sort_key,
                sort_direction=args.sort_direction,
                limit=args.limit,
            )
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        for t in rows:
            print(f"{t.id}  {t.day}  {t.type:<7} {format_currency(t.amount, currency):>12}  "
                  f"{t.category_name}: {t.description}")
        return 0

    if args.command == "add-transaction":
        result = app.transactions.create(
            args.description, args.amount, args.date or today().isoformat(),
            args.type, args.category_id,
        )
        return _report(result, f"Added transaction {result.value.id}" if result.success else "")

    if args.command == "budgets":
        _print_budgets(app.budgets.get_budget_status(args.date), currency)
        return 0

    if args.command == "add-budget":
        result = app.budgets.add(args.category_id, args.limit_amount, args.period)
        return _report(result, f"Added budget {result.value.id}" if result.success else "")

    if args.command == "export":
        result = app.data.export_to_file(args.path)
        return _report(result, f"Exported {result.count} records to {args.path}")

    if args.command == "import":
        result = app.data.import_file(args.path)
        return _report(result, f"Imported {result.count} records: {result.value}")

    if args.command == "charts":
        for path in app.charts.render_all(args.out_dir, args.date):
            print(path)
        return 0

    if args.command == "currency":
        if args.code:
            return _report(app.settings.set_currency(args.code), f"Currency set to {args.code}")
        print(CURRENCIES[currency].label)
        return 0

    raise ValueError(f"Unknown command: {args.command}")


def run_config(args: argparse.Namespace) -> int:
    """Edit the pre-DB config; needs no open store."""
    try:
        if args.db_folder:
            set_db_folder(os.path.abspath(args.db_folder))
        elif args.reset_db_folder:
            set_db_folder(None)
    except OSError as e:
        print(f"Error: could not save config: {e}", file=sys.stderr)
        return 1
    print(f"Store folder: {get_db_folder() or os.getcwd()}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    # ── Bootstrap: logging and DB location from pre-DB config ────────────────
    configure_logging(args.log_level or get_log_level())

    if args.command == "config":
        return run_config(args)

    # ── Database ─────────────────────────────────────────────────────────────
    try:
        db = DatabaseManager.open(
            db_folder=get_db_folder(), seed=not args.no_seed, db_path=args.db
        )
    except sqlite3.Error as e:
        print(f"Error: could not open the store: {e}", file=sys.stderr)
        return 1

    with db:
        logger.info("Running %s against %s", args.command, db.db_path)
        return run(build_app(db), args)


if __name__ == "__main__":
    sys.exit(main())

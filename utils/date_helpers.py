from datetime import date, datetime, timedelta
import calendar
from utils.constants import DATE_FORMAT


def today() -> date:
    return date.today()


def parse_date(date_str: str) -> date | None:
    """Parse an ISO-8601 date or date-time string, returning None on failure.

    Accepts 'YYYY-MM-DD' as well as full timestamps such as
    '2024-07-15T10:30:00.000Z'; only the calendar date is kept.
    """
    if not date_str or not isinstance(date_str, str):
        return None
    value = date_str.strip()
    for fmt in ("%Y-%m-%d", "%Y/%m/%d", "%Y.%m.%d"):
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(value).date()
    except ValueError:
        return None


def as_date(value: date | datetime | str | None) -> date | None:
    """Coerce a date, datetime or ISO string to a calendar date."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_date(value)


def format_date(d: date) -> str:
    return d.strftime(DATE_FORMAT)


def normalize_date(value: str) -> str | None:
    """Return value in a storable form whose first ten characters are YYYY-MM-DD.

    Already zero-padded ISO values are kept as given (time part included),
    other date-only forms become 'YYYY-MM-DD' and other timestamps are
    rewritten with isoformat(). Returns None when value is not a date.
    """
    d = parse_date(value)
    if d is None:
        return None
    value = value.strip()
    if value[:10] == format_date(d):
        return value
    if "T" in value or " " in value:
        if value.endswith("Z"):
            value = value[:-1] + "+00:00"
        return datetime.fromisoformat(value).isoformat()
    return format_date(d)


def week_range(d: date) -> tuple[date, date]:
    """Monday..Sunday of the week containing d."""
    start = d - timedelta(days=d.weekday())
    return start, start + timedelta(days=6)


def month_range(d: date) -> tuple[date, date]:
    last_day = calendar.monthrange(d.year, d.month)[1]
    return d.replace(day=1), d.replace(day=last_day)


def year_range(d: date) -> tuple[date, date]:
    return date(d.year, 1, 1), date(d.year, 12, 31)


def days_between(start: date, end: date) -> list[date]:
    """Every calendar day from start to end, both inclusive."""
    if end < start:
        return []
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


def friendly_month(d: date) -> str:
    """e.g. 'February 2026'."""
    return d.strftime("%B %Y")

from datetime import date, datetime, time
from utils.constants import DATE_FORMAT, DATETIME_FORMAT

# ── Display date format options ───────────────────────────────────────────────

DATE_FORMAT_OPTIONS = ["MM/DD/YYYY", "DD/MM/YYYY", "YYYY-MM-DD", "DD.MM.YYYY", "MM-DD-YYYY"]

_STRFTIME_MAP = {
    "MM/DD/YYYY": "%m/%d/%Y",
    "DD/MM/YYYY": "%d/%m/%Y",
    "YYYY-MM-DD": "%Y-%m-%d",
    "DD.MM.YYYY": "%d.%m.%Y",
    "MM-DD-YYYY": "%m-%d-%Y",
}


def today() -> date:
    return date.today()


def now() -> datetime:
    return datetime.now()


def parse_date(date_str: str) -> date | None:
    """Parse a date string in YYYY-MM-DD format, returning None on failure."""
    if not date_str:
        return None
    for fmt in ("%Y-%m-%d", "%Y/%m/%d", "%Y.%m.%d"):
        try:
            return datetime.strptime(date_str, fmt).date()
        except ValueError:
            continue
    return None


def format_date(d: date) -> str:
    return d.strftime(DATE_FORMAT)


def parse_datetime(value: str | None) -> datetime | None:
    """Parse a stored billing timestamp. Bare YYYY-MM-DD values mean midnight."""
    if not value:
        return None
    try:
        return datetime.strptime(value, DATETIME_FORMAT)
    except ValueError:
        d = parse_date(value)
        return as_datetime(d) if d else None


def format_datetime(dt: datetime) -> str:
    return dt.strftime(DATETIME_FORMAT)


def as_datetime(value: date | datetime) -> datetime:
    """Promote a plain date to midnight of that day; datetimes pass through."""
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def truncate_to_minute(dt: datetime) -> datetime:
    return dt.replace(second=0, microsecond=0)


def at_time_of(d: date, ref: datetime) -> datetime:
    """Combine a picked calendar day with ref's time of day, minute precision."""
    return datetime.combine(d, ref.time().replace(second=0, microsecond=0))


def days_between(start: date | datetime, end: date | datetime) -> int:
    """Whole calendar days from start to end (negative when end is earlier)."""
    if isinstance(start, datetime):
        start = start.date()
    if isinstance(end, datetime):
        end = end.date()
    return (end - start).days


def format_days_until(target: date | datetime, ref: date | datetime | None = None) -> str:
    days = days_between(ref or today(), target)
    if days < 0:
        return "Overdue"
    if days == 0:
        return "Today"
    if days == 1:
        return "Tomorrow"
    return f"In {days} days"


def format_display_date(value: str | date, fmt_key: str = "MM/DD/YYYY") -> str:
    """Render a stored date (YYYY-MM-DD string or date) in the user-facing format."""
    if not value:
        return ""
    d = parse_date(value) if isinstance(value, str) else value
    if d is None:
        return value
    return d.strftime(_STRFTIME_MAP.get(fmt_key, "%m/%d/%Y"))


def parse_display_date(display_str: str, fmt_key: str) -> date | None:
    """Parse a date in the given display format. Returns None on failure.

    Falls back to ISO 8601 parse if the display format doesn't match.
    """
    if not display_str:
        return None
    fmt = _STRFTIME_MAP.get(fmt_key, "%m/%d/%Y")
    try:
        return datetime.strptime(display_str.strip(), fmt).date()
    except ValueError:
        return parse_date(display_str)

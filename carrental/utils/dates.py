"""Date helpers: 'today' in the business timezone and ISO date parsing."""
from datetime import date, datetime

import pytz

from carrental.utils.constants import DATE_FMT


def today_in(tz_name: str) -> date:
    """
    Current calendar date in the given timezone.
    A booking made at 00:30 in Rome counts for the Rome day, not the UTC one.
    """
    return datetime.now(pytz.timezone(tz_name)).date()


def parse_date(s: str) -> date:
    """Parse 'YYYY-MM-DD' into a date object; raise ValueError on bad input."""
    return datetime.strptime(s, DATE_FMT).date()


def fmt_date(value) -> str | None:
    """Serialize a stored date as 'YYYY-MM-DD'; strings pass through."""
    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return value.strftime(DATE_FMT)
    return str(value)

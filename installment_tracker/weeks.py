"""Date arithmetic for Monday-based weeks.

Every week runs Monday through Sunday and is identified by its Monday.
Datetimes are accepted wherever a date is expected; their time part is
dropped, no time-zone conversion is applied.
"""

from datetime import date, datetime, timedelta

ISO_FORMAT = "%Y-%m-%d"
DAYS_PER_WEEK = 7


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def monday_of(value: date | datetime) -> date:
    """Get the Monday of the week containing ``value``.

    Sunday belongs to the week that started six days earlier.

    Parameters
    ----------
    value : date | datetime
        Any day.

    Returns
    -------
    date
        Monday on or before ``value``.
    """
    day = _as_date(value)
    return day - timedelta(days=day.weekday())


def sunday_of(value: date | datetime) -> date:
    """Get the Sunday closing the week containing ``value``."""
    return monday_of(value) + timedelta(days=DAYS_PER_WEEK - 1)


def week_end(week_start: date) -> date:
    """Last day of the week starting on ``week_start``."""
    return week_start + timedelta(days=DAYS_PER_WEEK - 1)


def is_monday(value: date | datetime) -> bool:
    return _as_date(value).weekday() == 0


def iso_date(value: date | datetime) -> str:
    """Format a day as ``YYYY-MM-DD``."""
    return _as_date(value).strftime(ISO_FORMAT)


def parse_iso_date(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` string.

    Raises
    ------
    ValueError
        If ``value`` is not in ``YYYY-MM-DD`` form.
    """
    return datetime.strptime(value, ISO_FORMAT).date()


def week_sequence(start_monday: date, count: int) -> list[date]:
    """Get ``count`` consecutive Mondays starting at ``start_monday``.

    Parameters
    ----------
    start_monday : date
        First week start. Not normalized here.
    count : int
        Number of weeks. Zero or negative yields an empty list.

    Returns
    -------
    list[date]
        Week start dates, seven days apart.
    """
    return [start_monday + timedelta(weeks=i) for i in range(max(0, count))]


def week_index(week_start: date, loan_start: date) -> int:
    """Get the 0-based week number of ``week_start`` within a loan.

    Whole weeks are floor-divided, so a week before ``loan_start`` gives a
    negative index.
    """
    return (week_start - loan_start).days // DAYS_PER_WEEK

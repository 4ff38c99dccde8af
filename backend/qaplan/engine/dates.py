"""Calendar helpers and the rolling planning window. Weeks start on Monday."""
from collections.abc import Callable
from datetime import date, timedelta

from qaplan.schemas.risk import WeekInfo

Clock = Callable[[], date]


def today(clock: Clock | None = None) -> date:
    return (clock or date.today)()


def to_date_str(d: date) -> str:
    return d.isoformat()


def from_date_str(s: str) -> date:
    return date.fromisoformat(s)


def get_week_start(d: date) -> date:
    return d - timedelta(days=d.weekday())


def get_week_end(d: date) -> date:
    """Sunday of the week containing ``d``."""
    return get_week_start(d) + timedelta(days=6)


def get_weekdays_in_range(start: date, end: date) -> list[date]:
    """Mon-Fri dates in [start, end]. Empty when the range is inverted."""
    if start > end:
        return []
    days = []
    d = start
    while d <= end:
        if d.weekday() < 5:
            days.append(d)
        d += timedelta(days=1)
    return days


def get_weekdays_in_range_str(start_str: str, end_str: str) -> list[str]:
    return [to_date_str(d) for d in get_weekdays_in_range(from_date_str(start_str), from_date_str(end_str))]


def is_date_in_range(d: date, start: date, end: date) -> bool:
    """Inclusive on both ends; always False for an inverted range."""
    return start <= d <= end


def format_date(d: date) -> str:
    return f"{d:%b} {d.day}"


def format_date_full(d: date) -> str:
    return f"{d:%b} {d.day}, {d.year}"


def format_day_header(d: date) -> str:
    return f"{d:%a %b} {d.day}"


def get_planning_weeks(num_weeks: int = 12, now: date | None = None, clock: Clock | None = None) -> list[WeekInfo]:
    """
    Rolling window of ``num_weeks`` weeks starting at the Monday of the current week.

    Every week lists its full Mon-Fri set even when ``now`` is mid-week; callers
    that only care about the remaining days filter on ``now`` themselves.
    """
    current = now or today(clock)
    plan_start = get_week_start(current)
    weeks = []
    for i in range(max(num_weeks, 0)):
        ws = plan_start + timedelta(weeks=i)
        weeks.append(
            WeekInfo(
                week_start=ws,
                week_start_str=to_date_str(ws),
                week_label=f"Week of {format_date(ws)}",
                weekdays=get_weekdays_in_range(ws, get_week_end(ws)),
            )
        )
    return weeks

"""
Filter builders for ToDo search and due-date windows.
"""

from datetime import date, datetime, time, timedelta, timezone
from enum import Enum
from typing import Optional

from repositories.filters import AllOf, Condition, FilterSpec, Operator


class IncomingWindow(str, Enum):
    """Named expiry windows, relative to the current UTC date."""

    TODAY = "today"
    NEXTDAY = "nextday"
    WEEK = "week"

    @classmethod
    def parse(cls, name: Optional[str]) -> Optional["IncomingWindow"]:
        """Case-insensitive lookup; unknown names give None."""
        if name is None:
            return None
        try:
            return cls(name.strip().lower())
        except ValueError:
            return None


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def _start_of(day: date) -> datetime:
    # Expiry dates are stored as naive UTC
    return datetime.combine(day, time.min)


def _day_range(first_day: date, days: int) -> FilterSpec:
    """Expiry within [first_day, first_day + days) as whole UTC days."""
    return AllOf(
        Condition("expiry_date", Operator.GE, _start_of(first_day)),
        Condition("expiry_date", Operator.LT, _start_of(first_day + timedelta(days=days))),
    )


def build_incoming_filter(window: IncomingWindow, today: Optional[date] = None) -> FilterSpec:
    """
    Build the expiry filter for a window.

    - today: expiry on the current date
    - nextday: expiry on the following date
    - week: expiry from today through today + 7 days, inclusive
    """
    today = today or utc_today()

    if window is IncomingWindow.TODAY:
        return _day_range(today, 1)
    if window is IncomingWindow.NEXTDAY:
        return _day_range(today + timedelta(days=1), 1)
    if window is IncomingWindow.WEEK:
        return _day_range(today, 8)

    raise ValueError(f"Unsupported window: {window!r}")


def build_search_filter(
    title_name: Optional[str] = None, description: Optional[str] = None
) -> FilterSpec:
    """
    Substring match on title and/or description.

    Blank arguments impose no constraint.

    Raises:
        ValueError: If both arguments are blank
    """
    title_blank = title_name is None or not title_name.strip()
    description_blank = description is None or not description.strip()

    if title_blank and description_blank:
        raise ValueError("At least one of title_name or description must be provided")

    conditions = []
    if not title_blank:
        conditions.append(Condition("title", Operator.CONTAINS, title_name))
    if not description_blank:
        conditions.append(Condition("description", Operator.CONTAINS, description))
    return AllOf(*conditions)

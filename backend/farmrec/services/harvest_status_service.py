# backend/farmrec/services/harvest_status_service.py
"""
Harvest Status Classification
-----------------------------

Turns a farmer's harvest date and a reference day into a day-count and a
status tag. Every screen (cards, dashboard, reports, calendar,
notifications) classifies through this module so the thresholds live in
one place.

Day-count:
 - calendar-day granularity, time-of-day is dropped on both sides
 - harvest later today -> 0, yesterday -> -1

Status (in priority order):
 - overdue     days < 0
 - due-soon    0 <= days <= 3
 - this-week   4 <= days <= 7
 - scheduled   days > 7
 - none        no harvest date

Windows are inclusive [min_days, max_days] ranges over the day-count. The
dashboard "upcoming" window (0..30) and the card/calendar window (0..7) are
separate named windows and are not interchangeable.
"""

from typing import Optional, Union, NamedTuple
from datetime import date, datetime
import enum
import re


class MalformedDateError(ValueError):
    """A harvest/planted date string that is not a real YYYY-MM-DD date."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Malformed date: {value!r}")


class HarvestStatus(str, enum.Enum):
    overdue = "overdue"
    due_soon = "due-soon"
    this_week = "this-week"
    scheduled = "scheduled"
    none = "none"


class HarvestClassification(NamedTuple):
    days: Optional[int]
    status: HarvestStatus


class HarvestWindow(NamedTuple):
    min_days: int
    max_days: int


DUE_SOON_DAYS = 3
THIS_WEEK_DAYS = 7

DASHBOARD_UPCOMING_WINDOW = HarvestWindow(0, 30)
CARD_UPCOMING_WINDOW = HarvestWindow(0, THIS_WEEK_DAYS)
REPORT_HARVESTABLE_WINDOW = HarvestWindow(-7, 7)
RECENT_ACTIVITY_WINDOW = HarvestWindow(0, THIS_WEEK_DAYS)

STATUS_LABELS = {
    HarvestStatus.overdue: "Overdue",
    HarvestStatus.due_soon: "Due Soon",
    HarvestStatus.this_week: "This Week",
    HarvestStatus.scheduled: "Scheduled",
}

DATED_STATUSES = (
    HarvestStatus.overdue,
    HarvestStatus.due_soon,
    HarvestStatus.this_week,
    HarvestStatus.scheduled,
)

_ISO_DATE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")

DateLike = Union[date, datetime, str, None]


def is_iso_date(value: str) -> bool:
    """True when value is YYYY-MM-DD and names a real calendar day."""
    if not isinstance(value, str) or not _ISO_DATE.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def parse_harvest_date(value: DateLike) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        head = text[:10]
        if not is_iso_date(head):
            raise MalformedDateError(value)
        if len(text) == 10:
            return date.fromisoformat(head)
        # stored timestamps ("2024-05-01T00:00:00+00:00") keep their date part
        if text[10] not in "T ":
            raise MalformedDateError(value)
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            raise MalformedDateError(value) from None
    raise MalformedDateError(value)


def _reference_day(reference) -> date:
    if isinstance(reference, datetime):
        return reference.date()
    if isinstance(reference, date):
        return reference
    raise TypeError(f"reference must be a date or datetime, got {type(reference).__name__}")


def days_until_harvest(harvest_date: DateLike, reference) -> Optional[int]:
    today = _reference_day(reference)
    harvest = parse_harvest_date(harvest_date)
    if harvest is None:
        return None
    return (harvest - today).days


def status_for_days(days: Optional[int]) -> HarvestStatus:
    if days is None:
        return HarvestStatus.none
    if days < 0:
        return HarvestStatus.overdue
    if days <= DUE_SOON_DAYS:
        return HarvestStatus.due_soon
    if days <= THIS_WEEK_DAYS:
        return HarvestStatus.this_week
    return HarvestStatus.scheduled


def classify(harvest_date: DateLike, reference) -> HarvestClassification:
    days = days_until_harvest(harvest_date, reference)
    return HarvestClassification(days=days, status=status_for_days(days))


def classify_or_none(harvest_date: DateLike, reference) -> HarvestClassification:
    """Like classify, but an unparsable date counts as no date."""
    try:
        return classify(harvest_date, reference)
    except MalformedDateError:
        return HarvestClassification(days=None, status=HarvestStatus.none)


def within_window(harvest_date: DateLike, reference, min_days: int, max_days: int) -> bool:
    """
    Inclusive day-count window test behind every windowed view.
    Absent dates are outside every window; malformed ones raise
    MalformedDateError and the caller decides how lenient to be.
    """
    if min_days > max_days:
        raise ValueError(f"empty window: min_days={min_days} > max_days={max_days}")
    days = classify(harvest_date, reference).days
    if days is None:
        return False
    return min_days <= days <= max_days


def status_label(status: HarvestStatus) -> Optional[str]:
    return STATUS_LABELS.get(HarvestStatus(status))


def today() -> date:
    """The reference day; read once per request and passed down."""
    return date.today()

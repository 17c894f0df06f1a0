# backend/farmrec/services/harvest_report_service.py
"""
Harvest Reports & Dashboard Aggregates
--------------------------------------

Derived, read-only views over a snapshot of farmer records:
 - status counts (overdue / due-soon / this-week / scheduled)
 - groupings by town, barangay, location group
 - 7-day harvest schedule and calendar
 - land area totals
 - recent activity feed and harvest notifications
 - dashboard KPIs and the full report screen
 - farmer-list search and filters

Records may be dicts or objects (ORM rows, pydantic models). Every function
takes the reference day explicitly; callers capture it once per request so a
whole view is classified against the same "today". Nothing here is cached.
"""

from collections.abc import Mapping
from typing import Dict, Any, List, Optional, Iterable, Callable, Union

from farmrec.services.harvest_status_service import (
    HarvestStatus,
    HarvestWindow,
    MalformedDateError,
    DATED_STATUSES,
    CARD_UPCOMING_WINDOW,
    DASHBOARD_UPCOMING_WINDOW,
    REPORT_HARVESTABLE_WINDOW,
    RECENT_ACTIVITY_WINDOW,
    classify_or_none,
    parse_harvest_date,
    status_label,
    within_window,
)

FILTER_TYPES = ("all", "upcoming", "overdue")
SEARCH_FIELDS = ("first_name", "last_name", "town", "barangay")

PRIORITY_ORDER = {"high": 0, "medium": 1, "low": 2}

FieldSelector = Union[str, Callable[[Any], Any]]


def _field(record, name: str, default=None):
    if isinstance(record, Mapping):
        return record.get(name, default)
    return getattr(record, name, default)


def _days(record, reference) -> Optional[int]:
    return classify_or_none(_field(record, "harvest_date"), reference).days


def _record_id(record) -> Optional[str]:
    rid = _field(record, "id")
    return str(rid) if rid is not None else None


def display_name(record, with_middle: bool = False) -> str:
    first = _field(record, "first_name") or ""
    last = _field(record, "last_name") or ""
    middle = _field(record, "middle_initial")
    if with_middle and middle:
        return f"{first} {middle}. {last}"
    return f"{first} {last}"


def _plural_days(n: int) -> str:
    return f"{n} day" if n == 1 else f"{n} days"


# -----------------------
# Status counts
# -----------------------
def count_by_status(records: Iterable, reference) -> Dict[str, Any]:
    counts = {status.value: 0 for status in DATED_STATUSES}
    without_date = 0

    for record in records:
        result = classify_or_none(_field(record, "harvest_date"), reference)
        if result.status is HarvestStatus.none:
            without_date += 1
            continue
        counts[result.status.value] += 1

    return {
        "counts": counts,
        "total": sum(counts.values()),
        "without_date": without_date,
    }


# -----------------------
# Groupings
# -----------------------
def group_by_field(records: Iterable, field_selector: FieldSelector) -> Dict[str, int]:
    """
    Count records per literal field value.
    Highest count first; equal counts keep first-seen order.
    """
    if callable(field_selector):
        select = field_selector
    else:
        select = lambda r: _field(r, field_selector)

    tally: Dict[str, int] = {}
    for record in records:
        key = select(record)
        if key is None:
            continue
        tally[key] = tally.get(key, 0) + 1

    # sorted() is stable, so ties stay in insertion order
    return dict(sorted(tally.items(), key=lambda kv: -kv[1]))


def location_breakdown(records: Iterable) -> Dict[str, Dict[str, int]]:
    records = list(records)
    return {
        "by_town": group_by_field(records, "town"),
        "by_barangay": group_by_field(records, "barangay"),
        "by_location_group": group_by_field(records, "location_group"),
    }


# -----------------------
# Windows and schedules
# -----------------------
def in_window(record, reference, window: HarvestWindow) -> bool:
    """within_window over a record; a malformed date sits outside every window."""
    try:
        return within_window(_field(record, "harvest_date"), reference, *window)
    except MalformedDateError:
        return False


def filter_in_window(records: Iterable, reference, window: HarvestWindow) -> List:
    min_days, max_days = window
    if min_days > max_days:
        raise ValueError(f"empty window: {window}")
    window = HarvestWindow(min_days, max_days)
    return [record for record in records if in_window(record, reference, window)]


def upcoming_schedule(records: Iterable, reference, window: HarvestWindow = CARD_UPCOMING_WINDOW) -> List:
    dated = [(_days(record, reference), record) for record in filter_in_window(records, reference, window)]
    dated.sort(key=lambda item: item[0])
    return [record for _, record in dated]


def harvest_calendar(records: Iterable, reference, window: HarvestWindow = CARD_UPCOMING_WINDOW) -> List[Dict[str, Any]]:
    entries = []
    for record in upcoming_schedule(records, reference, window):
        harvest = parse_harvest_date(_field(record, "harvest_date"))
        entries.append({
            "farmer_id": _record_id(record),
            "name": display_name(record),
            "harvest_date": harvest,
            "weekday": harvest.strftime("%A"),
            "days": _days(record, reference),
        })
    return entries


# -----------------------
# Land area
# -----------------------
def land_area_summary(records: Iterable) -> Dict[str, float]:
    total = 0.0
    count = 0
    for record in records:
        count += 1
        value = _field(record, "land_area")
        if value is not None:
            total += float(value)

    return {
        "total": total,
        "average": total / count if count > 0 else 0.0,
    }


# -----------------------
# Activity feed / notifications
# -----------------------
def recent_activity(records: Iterable, reference, limit: int = 5) -> List[Dict[str, Any]]:
    if limit < 0:
        raise ValueError("limit must be >= 0")

    overdue = []
    upcoming = []
    for record in records:
        days = _days(record, reference)
        if days is None:
            continue
        if days < 0:
            overdue.append((days, record))
        elif in_window(record, reference, RECENT_ACTIVITY_WINDOW):
            upcoming.append((days, record))

    overdue.sort(key=lambda item: abs(item[0]))
    upcoming.sort(key=lambda item: item[0])

    activities = []
    for days, record in (overdue + upcoming)[:limit]:
        rid = _record_id(record)
        if days < 0:
            kind = "overdue"
            description = f"Harvest was due {_plural_days(abs(days))} ago"
        else:
            kind = "upcoming"
            description = f"Harvest due in {_plural_days(days)}"
        activities.append({
            "id": f"harvest-{rid}",
            "farmer_id": rid,
            "type": kind,
            "title": display_name(record),
            "description": description,
            "days": days,
            "harvest_date": parse_harvest_date(_field(record, "harvest_date")),
        })
    return activities


def harvest_notifications(records: Iterable, reference) -> List[Dict[str, Any]]:
    notifications = []
    for record in records:
        days, status = classify_or_none(_field(record, "harvest_date"), reference)

        if status is HarvestStatus.overdue:
            kind, priority = "overdue", "high"
            message = f"Harvest was due {_plural_days(abs(days))} ago"
        elif status is HarvestStatus.due_soon:
            kind, priority = "urgent", "high"
            message = f"Harvest due in {_plural_days(days)}"
        elif status is HarvestStatus.this_week:
            kind, priority = "upcoming", "medium"
            message = "Harvest due this week"
        else:
            continue

        notifications.append({
            "id": _record_id(record),
            "type": kind,
            "farmer": display_name(record),
            "message": message,
            "date": parse_harvest_date(_field(record, "harvest_date")),
            "priority": priority,
            "days": days,
        })

    notifications.sort(key=lambda n: PRIORITY_ORDER[n["priority"]])
    return notifications


# -----------------------
# Dashboard / report screens
# -----------------------
def _overdue(records: List, reference) -> List:
    overdue = []
    for record in records:
        days = _days(record, reference)
        if days is not None and days < 0:
            overdue.append(record)
    return overdue


def dashboard_summary(records: Iterable, reference) -> Dict[str, Any]:
    records = list(records)
    land = land_area_summary(records)
    return {
        "total_farmers": len(records),
        "total_land_area": land["total"],
        "average_land_area": land["average"],
        "upcoming_harvests": len(filter_in_window(records, reference, DASHBOARD_UPCOMING_WINDOW)),
        "overdue_harvests": len(_overdue(records, reference)),
    }


def farm_report(records: Iterable, reference) -> Dict[str, Any]:
    records = list(records)
    report = dashboard_summary(records, reference)
    report.update({
        "by_town": group_by_field(records, "town"),
        "by_barangay": group_by_field(records, "barangay"),
        "status_counts": count_by_status(records, reference),
        "upcoming": filter_in_window(records, reference, DASHBOARD_UPCOMING_WINDOW),
        "overdue": _overdue(records, reference),
        "harvestable": filter_in_window(records, reference, REPORT_HARVESTABLE_WINDOW),
    })
    return report


# -----------------------
# Farmer list
# -----------------------
def _matches_search(record, query: str) -> bool:
    if not query:
        return True
    needle = query.lower()
    return any(needle in (_field(record, name) or "").lower() for name in SEARCH_FIELDS)


def filter_farmers(records: Iterable, reference, query: str = "", filter_type: str = "all") -> List:
    if filter_type not in FILTER_TYPES:
        raise ValueError(f"unknown filter type: {filter_type}")

    selected = []
    for record in records:
        if not _matches_search(record, query):
            continue
        if filter_type == "upcoming":
            if not in_window(record, reference, DASHBOARD_UPCOMING_WINDOW):
                continue
        elif filter_type == "overdue":
            days = _days(record, reference)
            if days is None or days >= 0:
                continue
        selected.append(record)
    return selected


def farmer_card(record, reference) -> Dict[str, Any]:
    result = classify_or_none(_field(record, "harvest_date"), reference)
    return {
        "id": _record_id(record),
        "full_name": display_name(record, with_middle=True),
        "barangay": _field(record, "barangay"),
        "town": _field(record, "town"),
        "contact_number": _field(record, "contact_number"),
        "land_area": _field(record, "land_area"),
        "harvest_date": parse_harvest_date(_field(record, "harvest_date")) if result.days is not None else None,
        "status": result.status.value,
        "label": status_label(result.status),
        "days": result.days,
    }

from datetime import date, datetime, timedelta

import pytest

from farmrec.services.harvest_status_service import (
    CARD_UPCOMING_WINDOW,
    DASHBOARD_UPCOMING_WINDOW,
    REPORT_HARVESTABLE_WINDOW,
    HarvestStatus,
    MalformedDateError,
    classify,
    classify_or_none,
    days_until_harvest,
    is_iso_date,
    parse_harvest_date,
    status_label,
    within_window,
)


def test_harvest_today_is_due_soon_with_zero_days(reference):
    result = classify(reference, reference)
    assert result.days == 0
    assert result.status is HarvestStatus.due_soon


def test_harvest_yesterday_is_overdue(reference):
    result = classify(reference - timedelta(days=1), reference)
    assert result.days == -1
    assert result.status is HarvestStatus.overdue


@pytest.mark.parametrize(
    "offset, status",
    [
        (-30, HarvestStatus.overdue),
        (3, HarvestStatus.due_soon),
        (4, HarvestStatus.this_week),
        (7, HarvestStatus.this_week),
        (8, HarvestStatus.scheduled),
        (120, HarvestStatus.scheduled),
    ],
)
def test_threshold_boundaries(reference, offset, status):
    assert classify(reference + timedelta(days=offset), reference).status is status


def test_missing_harvest_date_is_none(reference):
    for value in (None, "", "   "):
        result = classify(value, reference)
        assert result.days is None
        assert result.status is HarvestStatus.none


def test_time_of_day_is_ignored(reference):
    late_reference = datetime(2024, 6, 15, 23, 59)
    early_harvest = datetime(2024, 6, 16, 0, 1)
    assert days_until_harvest(early_harvest, late_reference) == 1
    assert days_until_harvest(datetime(2024, 6, 15, 1, 0), late_reference) == 0


def test_string_dates_and_stored_timestamps_parse(reference):
    assert classify("2024-06-20", reference).days == 5
    assert parse_harvest_date("2024-06-20T00:00:00+00:00") == date(2024, 6, 20)


def test_timestamp_suffix_must_be_a_real_time():
    assert parse_harvest_date("2024-06-20 08:30:00") == date(2024, 6, 20)
    assert parse_harvest_date("2024-06-20T23:00:00Z") == date(2024, 6, 20)
    for text in ("2024-05-01Tgarbage", "2024-05-01 noon", "2024-05-01x"):
        with pytest.raises(MalformedDateError):
            parse_harvest_date(text)


def test_within_window_leaves_malformed_dates_to_the_caller(reference):
    with pytest.raises(MalformedDateError):
        within_window("2024-06-16Tgarbage", reference, *CARD_UPCOMING_WINDOW)


def test_malformed_date_raises_but_classify_or_none_treats_it_as_absent(reference):
    with pytest.raises(MalformedDateError):
        classify("2024-02-30", reference)
    with pytest.raises(MalformedDateError):
        classify("next week", reference)

    result = classify_or_none("2024/06/20", reference)
    assert result.status is HarvestStatus.none


def test_reference_must_be_a_date():
    with pytest.raises(TypeError):
        classify("2024-06-20", "2024-06-15")


def test_iso_date_check():
    assert is_iso_date("2024-02-29")
    assert not is_iso_date("2023-02-29")
    assert not is_iso_date("2024-6-1")
    assert not is_iso_date(None)


def test_within_window_accepts_past_dates(reference):
    lo, hi = REPORT_HARVESTABLE_WINDOW
    assert within_window(reference - timedelta(days=7), reference, lo, hi)
    assert within_window(reference + timedelta(days=7), reference, lo, hi)
    assert not within_window(reference - timedelta(days=8), reference, lo, hi)
    assert not within_window(None, reference, lo, hi)


def test_dashboard_and_card_windows_stay_distinct(reference):
    harvest = reference + timedelta(days=20)
    assert within_window(harvest, reference, *DASHBOARD_UPCOMING_WINDOW)
    assert not within_window(harvest, reference, *CARD_UPCOMING_WINDOW)


def test_empty_window_is_rejected(reference):
    with pytest.raises(ValueError):
        within_window(reference, reference, 5, 1)


def test_status_labels():
    assert status_label(HarvestStatus.due_soon) == "Due Soon"
    assert status_label("this-week") == "This Week"
    assert status_label(HarvestStatus.none) is None

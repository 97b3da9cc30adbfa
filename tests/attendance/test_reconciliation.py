from __future__ import annotations

from src.attendance_reports.attendance_reports.attendance.reconciliation import reconcile, sort_by_timestamp
from src.attendance_reports.attendance_reports.core.constants import ADJACENT_DAY_NAIVE
from src.attendance_reports.attendance_reports.core.enums import DurationState


def _by_key(records):
    return {(r.employee_id, r.date): r for r in records}


def test_single_punch_day_is_incomplete(punch):
    records = reconcile([punch("E1", "HR", "2024-03-01", "09:12:00")])

    assert len(records) == 1
    r = records[0]
    assert r.arrival_time == "09:12:00"
    assert r.departure_time is None
    assert r.departure_display == "-"
    assert str(r.duration) == "Incomplete"
    assert r.punch_count == 1
    assert r.others_punch == ("09:12:00",)


def test_one_record_per_employee_day_with_all_punches_counted(punch):
    punches = [
        punch("E1", "HR", "2024-03-01", "08:00:00"),
        punch("E1", "HR", "2024-03-01", "12:00:00"),
        punch("E1", "HR", "2024-03-01", "17:00:00"),
        punch("E1", "HR", "2024-03-02", "08:05:00"),
        punch("E2", "HR", "2024-03-01", "09:00:00"),
        punch("E2", "HR", "2024-03-01", "18:00:00"),
    ]

    records = reconcile(punches)

    assert len(records) == 3
    assert sum(r.punch_count for r in records) == len(punches)
    by_key = _by_key(records)
    assert by_key[("E1", "2024-03-01")].punch_count == 3
    assert by_key[("E1", "2024-03-01")].others_punch == ("08:00:00", "12:00:00", "17:00:00")


def test_records_sorted_by_department_employee_date(punch):
    punches = [
        punch("E2", "Sales", "2024-03-02", "09:00:00"),
        punch("E1", "Sales", "2024-03-01", "09:00:00"),
        punch("E9", "Admin", "2024-03-03", "09:00:00"),
        punch("E1", "Sales", "2024-03-02", "09:00:00"),
    ]

    records = reconcile(punches)

    assert [(r.department, r.employee_id, r.date) for r in records] == [
        ("Admin", "E9", "2024-03-03"),
        ("Sales", "E1", "2024-03-01"),
        ("Sales", "E1", "2024-03-02"),
        ("Sales", "E2", "2024-03-02"),
    ]


def test_arrival_is_earliest_and_departure_latest_regardless_of_input_order(punch):
    punches = [
        punch("E1", "HR", "2024-03-01", "17:30:00"),
        punch("E1", "HR", "2024-03-01", "08:00:00"),
        punch("E1", "HR", "2024-03-01", "12:15:00"),
    ]

    [r] = reconcile(punches)

    assert r.arrival_time == "08:00:00"
    assert r.departure_time == "17:30:00"
    assert str(r.duration) == "9h 30m"


def test_night_shift_tail_is_skipped_for_the_next_day_arrival(punch):
    punches = [
        punch("E1", "OPERATION", "2024-03-01", "23:00:00"),
        punch("E1", "OPERATION", "2024-03-02", "05:30:00"),
        punch("E1", "OPERATION", "2024-03-02", "14:00:00"),
    ]

    by_key = _by_key(reconcile(punches))

    day1 = by_key[("E1", "2024-03-01")]
    assert str(day1.duration) == "Incomplete"

    day2 = by_key[("E1", "2024-03-02")]
    assert day2.arrival_time == "14:00:00"
    assert day2.departure_time == "14:00:00"
    assert str(day2.duration) == "0h 0m"
    assert day2.punch_count == 2


def test_night_shift_correction_only_for_operation_department(punch):
    punches = [
        punch("E1", "Operations", "2024-03-01", "23:00:00"),
        punch("E1", "Operations", "2024-03-02", "05:30:00"),
        punch("E1", "Operations", "2024-03-02", "14:00:00"),
    ]

    day2 = _by_key(reconcile(punches))[("E1", "2024-03-02")]

    assert day2.arrival_time == "05:30:00"
    assert str(day2.duration) == "8h 30m"


def test_early_arrival_without_later_punch_is_left_unchanged(punch):
    punches = [
        punch("E1", "OPERATION", "2024-03-01", "19:00:00"),
        punch("E1", "OPERATION", "2024-03-01", "23:00:00"),
        punch("E1", "OPERATION", "2024-03-02", "06:00:00"),
        punch("E1", "OPERATION", "2024-03-02", "07:00:00"),
    ]

    day2 = _by_key(reconcile(punches))[("E1", "2024-03-02")]

    assert day2.arrival_time == "06:00:00"
    assert day2.departure_time == "07:00:00"
    assert str(day2.duration) == "1h 0m"


def test_evening_shift_departure_taken_from_next_morning(punch):
    punches = [
        punch("E1", "OPERATION", "2024-03-01", "19:00:00"),
        punch("E1", "OPERATION", "2024-03-01", "23:00:00"),
        punch("E1", "OPERATION", "2024-03-02", "06:00:00"),
        punch("E1", "OPERATION", "2024-03-02", "07:00:00"),
    ]

    day1 = _by_key(reconcile(punches))[("E1", "2024-03-01")]

    assert day1.arrival_time == "19:00:00"
    assert day1.departure_time == "06:00:00"
    assert str(day1.duration) == "11h 0m"


def test_evening_shift_without_next_morning_punch_has_missing_departure(punch):
    punches = [
        punch("E1", "OPERATION", "2024-03-01", "19:00:00"),
        punch("E1", "OPERATION", "2024-03-01", "22:00:00"),
        punch("E1", "OPERATION", "2024-03-02", "12:00:00"),
        punch("E1", "OPERATION", "2024-03-02", "15:00:00"),
    ]

    day1 = _by_key(reconcile(punches))[("E1", "2024-03-01")]

    assert day1.departure_time is None
    assert day1.departure_display == "-"
    assert day1.duration.state == DurationState.MISSING_END
    assert str(day1.duration) == "erreur"


def test_evening_shift_without_next_day_keeps_same_day_departure(punch):
    punches = [
        punch("E1", "OPERATION", "2024-03-01", "19:00:00"),
        punch("E1", "OPERATION", "2024-03-01", "23:30:00"),
    ]

    [day1] = reconcile(punches)

    assert day1.departure_time == "23:30:00"
    assert str(day1.duration) == "4h 30m"


def test_unparsable_time_sorts_last_and_yields_error_duration(punch):
    punches = [
        punch("E1", "HR", "2024-03-01", "garbage"),
        punch("E1", "HR", "2024-03-01", "08:00:00"),
    ]

    [r] = reconcile(punches)

    assert r.arrival_time == "08:00:00"
    assert r.departure_time == "garbage"
    assert str(r.duration) == "Error"
    assert r.punch_count == 2


def test_previous_day_lookup_crosses_month_boundary_in_calendar_mode(punch):
    punches = [
        punch("E1", "OPERATION", "2024-02-29", "23:00:00"),
        punch("E1", "OPERATION", "2024-03-01", "05:30:00"),
        punch("E1", "OPERATION", "2024-03-01", "14:00:00"),
    ]

    calendar = _by_key(reconcile(punches))[("E1", "2024-03-01")]
    naive = _by_key(reconcile(punches, adjacent_day_mode=ADJACENT_DAY_NAIVE))[("E1", "2024-03-01")]

    assert calendar.arrival_time == "14:00:00"
    assert naive.arrival_time == "05:30:00"
    assert str(naive.duration) == "8h 30m"


def test_sort_by_timestamp_is_stable_for_unparsable_times(punch):
    a = punch("E1", "HR", "2024-03-01", "bad-1")
    b = punch("E1", "HR", "2024-03-01", "07:00:00")
    c = punch("E1", "HR", "2024-03-01", "bad-2")

    assert sort_by_timestamp([a, b, c]) == [b, a, c]


def test_unshiftable_date_never_looks_up_itself_as_previous_day(punch):
    punches = [
        punch("E1", "OPERATION", "week 9", "05:30:00"),
        punch("E1", "OPERATION", "week 9", "17:00:00"),
    ]

    [r] = reconcile(punches)

    assert r.arrival_time == "05:30:00"
    assert r.departure_time == "17:00:00"
    assert str(r.duration) == "11h 30m"


def test_unshiftable_date_never_looks_up_itself_as_next_day(punch):
    punches = [
        punch("E1", "OPERATION", "week 9", "19:00:00"),
        punch("E1", "OPERATION", "week 9", "23:00:00"),
    ]

    [r] = reconcile(punches)

    assert r.arrival_time == "19:00:00"
    assert r.departure_time == "23:00:00"
    assert str(r.duration) == "4h 0m"

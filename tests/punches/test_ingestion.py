from __future__ import annotations

import io
from datetime import date, datetime, time

import pytest
from openpyxl import Workbook

from src.attendance_reports.attendance_reports.attendance.reconciliation import reconcile
from src.attendance_reports.attendance_reports.core.exceptions import IngestionError
from src.attendance_reports.attendance_reports.punches.ingestion import (
    date_range,
    parse_punch_rows,
    read_punch_file,
    unique_departments,
    unique_employees,
)


def test_header_row_is_found_below_banner_rows():
    rows = [
        ["Company punch log", None, None, None, None],
        [None, None, None, None, None],
        ["Employee ID", "First Name", "Department", "Date", "Time"],
        [1001.0, "Ana", "Operations", datetime(2024, 3, 1), time(6, 40)],
        ["1002", "Ben", "ID", "2024-03-01", "08:20:00"],
    ]

    punches = parse_punch_rows(rows)

    assert [(p.employee_id, p.date, p.time) for p in punches] == [
        ("1001", "2024-03-01", "06:40:00"),
        ("1002", "2024-03-01", "08:20:00"),
    ]
    assert punches[0].timestamp == "2024-03-01 06:40:00"


def test_alternative_header_names_and_column_order():
    rows = [
        ["Time", "Date", "Department", "Name", "EmployeeID"],
        ["07:00:00", date(2024, 3, 2), "HR", "Cleo", 7],
    ]

    [p] = parse_punch_rows(rows)

    assert (p.employee_id, p.first_name, p.department, p.date, p.time) == ("7", "Cleo", "HR", "2024-03-02", "07:00:00")


def test_excel_day_fraction_time_is_converted():
    rows = [
        ["Employee ID", "First Name", "Department", "Date", "Time"],
        ["1", "Ana", "HR", "2024-03-01", 0.5],
    ]

    assert parse_punch_rows(rows)[0].time == "12:00:00"


def test_rows_without_id_date_or_time_are_dropped():
    rows = [
        ["Employee ID", "First Name", "Department", "Date", "Time"],
        [None, "Ana", "HR", "2024-03-01", "08:00:00"],
        ["1", "Ana", "HR", "", "08:00:00"],
        ["1", "Ana", "HR", "2024-03-01", None],
        ["1", "Ana", "HR"],
        ["1", "", "", "2024-03-01", "08:00:00"],
    ]

    punches = parse_punch_rows(rows)

    assert len(punches) == 1
    assert punches[0].first_name == ""


def test_missing_header_row():
    with pytest.raises(IngestionError, match="Could not find header row"):
        parse_punch_rows([["Name", "Date"], ["Ana", "2024-03-01"]])


def test_missing_required_columns():
    with pytest.raises(IngestionError, match="Missing required columns"):
        parse_punch_rows([["Employee ID", "First Name", "Date", "Time"]])


def test_read_csv_upload(punches_csv):
    punches = read_punch_file(io.BytesIO(punches_csv), "punches.csv")

    assert len(punches) == 7
    assert punches[0].employee_id == "1001"
    assert punches[0].first_name == "Alice"
    assert {p.department for p in punches} == {"Operations", "ID", "HR"}


def test_read_xlsx_upload():
    wb = Workbook()
    ws = wb.active
    ws.append(["Biometric export"])
    ws.append(["Employee ID", "First Name", "Department", "Date", "Time"])
    ws.append([1001, "Ana", "Operations", date(2024, 3, 1), time(6, 40, 0)])
    ws.append([1001, "Ana", "Operations", date(2024, 3, 1), time(14, 35, 0)])
    buf = io.BytesIO()
    wb.save(buf)
    buf.seek(0)

    punches = read_punch_file(buf, "punches.xlsx")

    assert [(p.employee_id, p.date, p.time) for p in punches] == [
        ("1001", "2024-03-01", "06:40:00"),
        ("1001", "2024-03-01", "14:35:00"),
    ]


def test_file_with_header_but_no_rows_is_rejected():
    payload = b"Employee ID,First Name,Department,Date,Time\n"

    with pytest.raises(IngestionError, match="No valid records found in the file"):
        read_punch_file(io.BytesIO(payload), "empty.csv")


def test_unsupported_extension_is_rejected():
    with pytest.raises(IngestionError):
        read_punch_file(io.BytesIO(b"whatever"), "punches.txt")


def test_unique_helpers(punch):
    punches = [
        punch("2", "HR", "2024-03-03", "08:00:00"),
        punch("1", "ID", "2024-03-01", "08:00:00"),
        punch("2", "HR", "2024-03-02", "17:00:00"),
    ]

    assert [e.employee_id for e in unique_employees(punches)] == ["2", "1"]
    assert unique_departments(punches) == ["HR", "ID"]
    assert date_range(punches) == ("2024-03-01", "2024-03-03")
    assert date_range([]) is None


def test_csv_with_single_cell_banner_row():
    payload = (
        b"Attendance export\n"
        b"Employee ID,First Name,Department,Date,Time\n"
        b"1001,Alice,HR,2024-03-01,08:00:00\n"
    )

    [p] = read_punch_file(io.BytesIO(payload), "x.csv")

    assert (p.employee_id, p.first_name, p.department, p.date, p.time) == ("1001", "Alice", "HR", "2024-03-01", "08:00:00")


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("01/03/2024", "2024-03-01"),
        ("1.3.2024", "2024-03-01"),
        ("2024/03/01", "2024-03-01"),
        ("2024-03-01 00:00:00", "2024-03-01"),
        ("sometime in March", "sometime in March"),
    ],
)
def test_string_dates_are_normalised_to_iso(raw, expected):
    rows = [
        ["Employee ID", "First Name", "Department", "Date", "Time"],
        ["1", "Ana", "HR", raw, "08:00:00"],
    ]

    assert parse_punch_rows(rows)[0].date == expected


def test_slashed_csv_dates_keep_night_shift_arrival():
    payload = (
        b"Employee ID,First Name,Department,Date,Time\n"
        b"7,Ana,OPERATION,01/03/2024,05:30:00\n"
        b"7,Ana,OPERATION,01/03/2024,17:00:00\n"
    )

    punches = read_punch_file(io.BytesIO(payload), "night.csv")
    [record] = reconcile(punches)

    assert record.date == "2024-03-01"
    assert record.arrival_time == "05:30:00"
    assert record.departure_time == "17:00:00"

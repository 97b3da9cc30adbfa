"""Spreadsheet ingestion: turn an uploaded punch export into PunchEvents.

The export may carry banner rows above the real header, so the header row is
located by scanning for the employee id column. Rows missing an employee id,
a date or a time are dropped silently.
"""

from __future__ import annotations

import csv
import io
import logging
import os
from datetime import date, datetime, time
from typing import Any, BinaryIO, Optional, Sequence

import pandas as pd

from ..core.exceptions import IngestionError
from .model import Employee, PunchEvent

logger = logging.getLogger(__name__)

ID_HEADERS = ("Employee ID", "EmployeeID")
NAME_HEADERS = ("First Name", "FirstName", "Name")
DEPARTMENT_HEADERS = ("Department",)
DATE_HEADERS = ("Date",)
TIME_HEADERS = ("Time",)

# Day-first for slashed and dotted dates, as the punch clocks export them.
DATE_FORMATS = ("%Y-%m-%d", "%Y/%m/%d", "%d/%m/%Y", "%d.%m.%Y", "%d-%m-%Y")


def _find_column(headers: Sequence[Any], candidates: Sequence[str]) -> int:
    for index, header in enumerate(headers):
        if isinstance(header, str) and header.strip() in candidates:
            return index
    return -1


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float):
        if pd.isna(value):
            return ""
        if value.is_integer():
            return str(int(value))
    return str(value).strip()


def _date_text(value: Any) -> str:
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    text = _cell_text(value)
    if not text:
        return text
    day_part = text.replace("T", " ").split()[0]
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(day_part, fmt).date().isoformat()
        except ValueError:
            continue
    return text


def _time_text(value: Any) -> str:
    if isinstance(value, datetime):
        return value.strftime("%H:%M:%S")
    if isinstance(value, time):
        return value.strftime("%H:%M:%S")
    if isinstance(value, float) and not pd.isna(value) and 0 <= value < 1:
        # Excel stores bare times as a fraction of a day.
        total_seconds = int(round(value * 86400)) % 86400
        return f"{total_seconds // 3600:02d}:{(total_seconds % 3600) // 60:02d}:{total_seconds % 60:02d}"
    return _cell_text(value)


def parse_punch_rows(rows: Sequence[Sequence[Any]]) -> list[PunchEvent]:
    """Parse a grid of cells (first sheet, header somewhere near the top)."""

    header_index = next(
        (
            i
            for i, row in enumerate(rows)
            if row is not None and any(isinstance(c, str) and c.strip() in ID_HEADERS for c in row)
        ),
        -1,
    )
    if header_index == -1:
        raise IngestionError("Invalid file format: Could not find header row")

    headers = rows[header_index]
    id_idx = _find_column(headers, ID_HEADERS)
    name_idx = _find_column(headers, NAME_HEADERS)
    dept_idx = _find_column(headers, DEPARTMENT_HEADERS)
    date_idx = _find_column(headers, DATE_HEADERS)
    time_idx = _find_column(headers, TIME_HEADERS)

    if -1 in (id_idx, name_idx, dept_idx, date_idx, time_idx):
        raise IngestionError("Invalid file format: Missing required columns")

    widest = max(id_idx, name_idx, dept_idx, date_idx, time_idx)
    punches: list[PunchEvent] = []
    for row in rows[header_index + 1:]:
        if not row or len(row) <= widest:
            continue

        employee_id = _cell_text(row[id_idx])
        work_date = _date_text(row[date_idx])
        work_time = _time_text(row[time_idx])
        if not (employee_id and work_date and work_time):
            continue

        punches.append(
            PunchEvent(
                employee_id=employee_id,
                first_name=_cell_text(row[name_idx]),
                department=_cell_text(row[dept_idx]),
                date=work_date,
                time=work_time,
            )
        )

    return punches


def _read_rows(stream: BinaryIO, file_name: str) -> list[list[Any]]:
    """Cell grid of the upload; CSV rows keep their own widths."""

    extension = os.path.splitext(file_name)[1].lower()
    payload = stream.read()
    try:
        if extension == ".csv":
            return list(csv.reader(io.StringIO(payload.decode("utf-8-sig"))))
        if extension in (".xlsx", ".xls"):
            frame = pd.read_excel(io.BytesIO(payload), header=None, sheet_name=0)
            return frame.astype(object).where(pd.notna(frame), None).values.tolist()
    except Exception as e:
        raise IngestionError(f"Could not read file '{file_name}': {e}") from e
    raise IngestionError(f"Unsupported file type for '{file_name}'")


def read_punch_file(stream: BinaryIO, file_name: str) -> list[PunchEvent]:
    rows = _read_rows(stream, file_name)
    punches = parse_punch_rows(rows)
    logger.info("Parsed %d punches from %s (%d rows)", len(punches), file_name, len(rows))
    if not punches:
        raise IngestionError("No valid records found in the file")
    return punches


def unique_employees(punches: Sequence[PunchEvent]) -> list[Employee]:
    """Distinct employees by id; the last punch seen for an id wins."""
    by_id: dict[str, Employee] = {}
    for p in punches:
        by_id[p.employee_id] = Employee(employee_id=p.employee_id, first_name=p.first_name, department=p.department)
    return list(by_id.values())


def unique_departments(punches: Sequence[PunchEvent]) -> list[str]:
    return list(dict.fromkeys(p.department for p in punches))


def date_range(punches: Sequence[PunchEvent]) -> Optional[tuple[str, str]]:
    dates = [p.date for p in punches if p.date]
    if not dates:
        return None
    return min(dates), max(dates)

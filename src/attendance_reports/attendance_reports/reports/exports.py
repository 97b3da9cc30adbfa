from __future__ import annotations

import csv
import io

import pandas as pd

from .department_view import DepartmentView

EXPORT_COLUMNS = [
    "Department",
    "Employee",
    "Date",
    "Scheduled Start",
    "Arrival Time",
    "Departure Time",
    "Delay/Early",
    "Duration",
    "Punches",
    "All Time Entries",
]


def export_rows(view: DepartmentView) -> list[dict]:
    return [
        {
            "Department": row.department,
            "Employee": row.first_name,
            "Date": row.date,
            "Scheduled Start": row.scheduled_time,
            "Arrival Time": row.arrival_time,
            "Departure Time": row.departure_time,
            "Delay/Early": row.delay.value,
            "Duration": row.duration,
            "Punches": str(row.punch_count),
            "All Time Entries": ", ".join(row.time_entries),
        }
        for row in view.rows()
    ]


def export_filename(view: DepartmentView, extension: str) -> str:
    return f"attendance-report-{view.selected_department or 'all'}.{extension}"


def to_csv_bytes(view: DepartmentView) -> bytes:
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=EXPORT_COLUMNS)
    writer.writeheader()
    for row in export_rows(view):
        writer.writerow(row)
    return out.getvalue().encode("utf-8-sig")


def _summary_frame(view: DepartmentView) -> pd.DataFrame:
    s = view.summary
    rows = [
        {
            "Scope": "All",
            "Employees": s.total_employees,
            "Entries": s.total_entries,
            "On Time": s.on_time_count,
            "Late": s.late_count,
            "Early": s.early_count,
            "Average Delay (min)": round(s.average_delay, 1),
        }
    ]
    for dept, stats in s.department_stats.items():
        rows.append(
            {
                "Scope": dept,
                "Employees": stats.employees,
                "Entries": stats.entries,
                "On Time": stats.on_time,
                "Late": stats.late,
                "Early": stats.early,
                "Average Delay (min)": round(stats.avg_delay, 1),
            }
        )
    return pd.DataFrame(rows)


def to_excel_bytes(view: DepartmentView) -> bytes:
    output = io.BytesIO()
    records = pd.DataFrame(export_rows(view), columns=EXPORT_COLUMNS)
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        records.to_excel(writer, sheet_name="Attendance", index=False)
        _summary_frame(view).to_excel(writer, sheet_name="Summary", index=False)
    return output.getvalue()

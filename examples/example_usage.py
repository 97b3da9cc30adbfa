"""Example: reconcile a punch file through the service layer (no Flask).

Usage: python -m examples.example_usage path/to/punches.xlsx
"""

import sys

from src.attendance_reports.attendance_reports.container import build_container


def main(path: str) -> None:
    container = build_container(store="memory")
    with open(path, "rb") as fh:
        report = container.report_service.create_from_upload(fh, path)

    view = container.report_service.department_view(report.report_id)
    print(report.header_dict())
    for row in view.rows():
        print(row.department, row.first_name, row.date, row.arrival_time, row.departure_time, row.delay.value, row.duration)
    print(view.summary.to_dict())


if __name__ == "__main__":
    main(sys.argv[1])

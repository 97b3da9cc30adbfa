from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.attendance_reports.attendance_reports.container import build_container
from src.attendance_reports.attendance_reports.punches.model import PunchEvent


def _make_punch(employee_id: str, department: str, date: str, time: str, first_name: str = "") -> PunchEvent:
    return PunchEvent(
        employee_id=employee_id,
        first_name=first_name or f"Emp{employee_id}",
        department=department,
        date=date,
        time=time,
    )


@pytest.fixture
def punch():
    return _make_punch


@pytest.fixture
def fixed_now():
    return datetime(2024, 3, 4, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def memory_container():
    return build_container(store="memory")


@pytest.fixture
def app(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from src.attendance_reports.attendance_reports.main import create_app

    app = create_app()
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def punches_csv() -> bytes:
    lines = [
        "Attendance export,,,,",
        "Employee ID,First Name,Department,Date,Time",
        "1001,Alice,Operations,2024-03-01,06:40:00",
        "1001,Alice,Operations,2024-03-01,14:35:00",
        "1002,Bob,ID,2024-03-01,08:20:00",
        "1002,Bob,ID,2024-03-01,17:00:00",
        "1003,Chen,HR,2024-03-01,09:00:00",
        "1001,Alice,Operations,2024-03-02,06:10:00",
        "1001,Alice,Operations,2024-03-02,14:00:00",
        ",Ghost,HR,2024-03-02,09:00:00",
    ]
    return ("\n".join(lines) + "\n").encode("utf-8")

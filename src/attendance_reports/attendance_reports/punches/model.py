from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PunchEvent:
    """Domain entity: one raw access-control scan."""

    employee_id: str
    first_name: str
    department: str
    date: str
    time: str

    @property
    def timestamp(self) -> str:
        return f"{self.date} {self.time}"


@dataclass(frozen=True)
class Employee:
    employee_id: str
    first_name: str
    department: str

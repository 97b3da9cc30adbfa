from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .core.constants import ADJACENT_DAY_CALENDAR
from .core.enums import ReportStoreKind
from .core.exceptions import ValidationError
from .database.connection import DBConfig, DatabaseConnection
from .overrides.memory_override_repository import InMemoryShiftOverrideRepository
from .overrides.mysql_override_repository import MySQLShiftOverrideRepository
from .overrides.repository import ShiftOverrideRepository
from .overrides.service import ShiftOverrideService
from .reports.memory_report_repository import InMemoryReportStore
from .reports.mysql_report_repository import MySQLReportStore
from .reports.repository import ReportStore
from .reports.service import ReportService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    reports_repo: ReportStore
    overrides_repo: ShiftOverrideRepository

    report_service: ReportService
    override_service: ShiftOverrideService


def build_container(
    *,
    store: str = ReportStoreKind.MYSQL.value,
    db_config: Optional[dict] = None,
    adjacent_day_mode: str = ADJACENT_DAY_CALENDAR,
) -> Container:
    try:
        kind = ReportStoreKind(store.lower())
    except ValueError:
        raise ValidationError(f"Unknown REPORT_STORE: {store!r}")

    conn: Optional[DatabaseConnection] = None
    if kind is ReportStoreKind.MYSQL:
        conn = DatabaseConnection(DBConfig.from_mapping(db_config or {}))
        reports_repo: ReportStore = MySQLReportStore(conn)
        overrides_repo: ShiftOverrideRepository = MySQLShiftOverrideRepository(conn)
    else:
        reports_repo = InMemoryReportStore()
        overrides_repo = InMemoryShiftOverrideRepository()

    report_service = ReportService(reports_repo, adjacent_day_mode=adjacent_day_mode)
    override_service = ShiftOverrideService(overrides_repo, reports_repo)

    return Container(
        conn=conn,
        reports_repo=reports_repo,
        overrides_repo=overrides_repo,
        report_service=report_service,
        override_service=override_service,
    )

import pytest

from config import get_settings_module
from src.attendance_reports.attendance_reports.container import build_container
from src.attendance_reports.attendance_reports.core.exceptions import ValidationError
from src.attendance_reports.attendance_reports.overrides.memory_override_repository import (
    InMemoryShiftOverrideRepository,
)
from src.attendance_reports.attendance_reports.reports.memory_report_repository import InMemoryReportStore


@pytest.mark.parametrize(
    "env, module",
    [("production", "config.production"), ("TEST", "config.testing"), ("anything", "config.development")],
)
def test_settings_module_follows_app_env(monkeypatch, env, module):
    monkeypatch.setenv("APP_ENV", env)

    assert get_settings_module() == module


def test_memory_container():
    container = build_container(store="memory")

    assert container.conn is None
    assert isinstance(container.reports_repo, InMemoryReportStore)
    assert isinstance(container.overrides_repo, InMemoryShiftOverrideRepository)


def test_unknown_store_is_rejected():
    with pytest.raises(ValidationError):
        build_container(store="mongo")


def test_testing_app_uses_memory_store(app):
    container = app.extensions["attendance_reports"]

    assert container.conn is None
    assert app.config["MAX_CONTENT_LENGTH"] == 2 * 1024 * 1024

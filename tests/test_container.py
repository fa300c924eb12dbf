import pytest

from staff_presence.clock.memory_dtr_repository import InMemoryDtrRepository
from staff_presence.config import get_settings_module
from staff_presence.config import testing as testing_settings
from staff_presence.container import build_container, build_container_from_settings
from staff_presence.core.exceptions import ValidationError


def test_memory_backend_wires_shared_stores(directory):
    c = build_container(backend="memory", directory=directory)

    assert c.conn is None
    assert isinstance(c.dtr_repo, InMemoryDtrRepository)
    c.clock_service.clock_in("T-001", "2024-05-01T08:00:00")
    c.clock_service.clock_out("T-001", "2024-05-01T10:00:00")
    assert c.summary_service.summarize("2024-05-01").average_worked_hours == 2.0


def test_mysql_backend_needs_db_config():
    with pytest.raises(ValidationError):
        build_container(backend="mysql", db_config=None, timezone="UTC")


def test_mysql_backend_needs_timezone():
    with pytest.raises(ValidationError):
        build_container(backend="mysql", db_config={"host": "localhost"}, timezone=None)


def test_unknown_backend_is_rejected():
    with pytest.raises(ValidationError):
        build_container(backend="sqlite")


def test_unknown_timezone_is_rejected():
    with pytest.raises(ValidationError):
        build_container(backend="memory", timezone="Mars/Olympus_Mons")


def test_settings_module_follows_app_env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
    assert get_settings_module() == "staff_presence.config.production"
    monkeypatch.setenv("APP_ENV", "test")
    assert get_settings_module() == "staff_presence.config.testing"
    monkeypatch.delenv("APP_ENV")
    assert get_settings_module() == "staff_presence.config.development"


def test_testing_settings_build_memory_container(directory):
    c = build_container_from_settings(testing_settings, directory=directory)

    assert c.conn is None
    result = c.clock_service.clock_in("E-010", "2024-05-01T08:00:00+00:00")
    # 08:00 UTC is 16:00 in Manila, same calendar day
    assert str(result.record.work_date) == "2024-05-01"

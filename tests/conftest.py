from __future__ import annotations

from datetime import datetime

import pytest

from staff_presence.clock.memory_dtr_repository import InMemoryDtrRepository
from staff_presence.clock.service import ClockLedgerService
from staff_presence.common.retry import RetryPolicy
from staff_presence.core.enums import RoleClass
from staff_presence.directory.memory_directory_repository import InMemoryDirectory
from staff_presence.directory.model import Person
from staff_presence.presence.memory_posting_repository import InMemoryPostingRepository
from staff_presence.presence.service import PresenceBoardService
from staff_presence.reports.service import AttendanceSummaryService

NO_WAIT = RetryPolicy(attempts=3, wait_min=0, wait_max=0)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 5, 1, 8, 0, 0)


@pytest.fixture
def no_wait_retry() -> RetryPolicy:
    return NO_WAIT


@pytest.fixture
def directory() -> InMemoryDirectory:
    return InMemoryDirectory([
        Person("T-001", "Maria Santos", RoleClass.TEACHER, "Instructor I"),
        Person("T-002", "Jose Reyes", RoleClass.TEACHER),
        Person("E-010", "Ana Cruz", RoleClass.EMPLOYEE, "Registrar Staff"),
        Person("O-100", "Guard On Duty", RoleClass.OTHER),
    ])


@pytest.fixture
def dtr_repo() -> InMemoryDtrRepository:
    return InMemoryDtrRepository()


@pytest.fixture
def clock_service(dtr_repo) -> ClockLedgerService:
    return ClockLedgerService(dtr_repo, retry_policy=NO_WAIT)


@pytest.fixture
def summary_service(clock_service, directory) -> AttendanceSummaryService:
    return AttendanceSummaryService(clock_service, directory)


@pytest.fixture
def postings_repo() -> InMemoryPostingRepository:
    return InMemoryPostingRepository()


@pytest.fixture
def presence_service(postings_repo, directory) -> PresenceBoardService:
    return PresenceBoardService(postings_repo, directory, retry_policy=NO_WAIT)

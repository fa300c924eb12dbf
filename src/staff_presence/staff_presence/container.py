from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .clock.factory import ClockStrategyFactory
from .clock.memory_dtr_repository import InMemoryDtrRepository
from .clock.mysql_dtr_repository import MySQLDtrRepository
from .clock.repository import DtrRepository
from .clock.service import ClockLedgerService
from .common.datetime_utils import load_timezone
from .common.retry import RetryPolicy
from .core.constants import DEFAULT_POSTING_MINUTES, MAX_POSTING_MINUTES
from .core.exceptions import ValidationError
from .database.connection import DBConfig, DatabaseConnection
from .directory.memory_directory_repository import InMemoryDirectory
from .directory.mysql_directory_repository import MySQLDirectoryRepository
from .directory.repository import DirectoryLookup
from .presence.memory_posting_repository import InMemoryPostingRepository
from .presence.mysql_posting_repository import MySQLPostingRepository
from .presence.repository import PostingRepository
from .presence.service import PresenceBoardService
from .reports.service import AttendanceSummaryService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    directory: DirectoryLookup
    dtr_repo: DtrRepository
    postings_repo: PostingRepository

    clock_service: ClockLedgerService
    summary_service: AttendanceSummaryService
    presence_service: PresenceBoardService


def build_container(
    *,
    db_config: Optional[dict] = None,
    backend: str = "mysql",
    timezone: Optional[str] = None,
    retry_policy: Optional[RetryPolicy] = None,
    default_posting_minutes: int = DEFAULT_POSTING_MINUTES,
    max_posting_minutes: int = MAX_POSTING_MINUTES,
    directory: Optional[DirectoryLookup] = None,
) -> Container:
    tz = load_timezone(timezone)
    conn: Optional[DatabaseConnection] = None

    if backend == "mysql":
        if not db_config:
            raise ValidationError("DB_CONFIG is required for the mysql backend")
        if tz is None:
            # DATETIME columns are stored as UTC, so timestamps must be zone-aware
            raise ValidationError("TIMEZONE is required for the mysql backend")
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
        directory = directory or MySQLDirectoryRepository(conn)
        dtr_repo: DtrRepository = MySQLDtrRepository(conn)
        postings_repo: PostingRepository = MySQLPostingRepository(conn)
    elif backend == "memory":
        directory = directory or InMemoryDirectory()
        dtr_repo = InMemoryDtrRepository()
        postings_repo = InMemoryPostingRepository()
    else:
        raise ValidationError(f"Unknown storage backend: {backend!r}")

    retry_policy = retry_policy or RetryPolicy()
    clock_service = ClockLedgerService(
        dtr_repo,
        strategy_factory=ClockStrategyFactory(),
        retry_policy=retry_policy,
        tz=tz,
    )
    summary_service = AttendanceSummaryService(clock_service, directory)
    presence_service = PresenceBoardService(
        postings_repo,
        directory,
        retry_policy=retry_policy,
        tz=tz,
        default_minutes=default_posting_minutes,
        max_minutes=max_posting_minutes,
    )

    return Container(
        conn=conn,
        directory=directory,
        dtr_repo=dtr_repo,
        postings_repo=postings_repo,
        clock_service=clock_service,
        summary_service=summary_service,
        presence_service=presence_service,
    )


def build_container_from_settings(settings, *, directory: Optional[DirectoryLookup] = None) -> Container:
    return build_container(
        db_config=dict(getattr(settings, "DB_CONFIG", {}) or {}),
        backend=getattr(settings, "STORAGE_BACKEND", "mysql"),
        timezone=getattr(settings, "TIMEZONE", None),
        retry_policy=RetryPolicy(
            attempts=int(getattr(settings, "RETRY_ATTEMPTS", 3)),
            wait_min=float(getattr(settings, "RETRY_WAIT_MIN", 0.1)),
            wait_max=float(getattr(settings, "RETRY_WAIT_MAX", 2.0)),
        ),
        default_posting_minutes=int(getattr(settings, "DEFAULT_POSTING_MINUTES", DEFAULT_POSTING_MINUTES)),
        max_posting_minutes=int(getattr(settings, "MAX_POSTING_MINUTES", MAX_POSTING_MINUTES)),
        directory=directory,
    )

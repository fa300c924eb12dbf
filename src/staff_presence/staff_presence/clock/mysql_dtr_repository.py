from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Callable, Iterable, Optional, Sequence

from ..core.enums import EventKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..database.timestamps import from_db, to_db
from .model import ClockEvent, DtrRecord
from .repository import DtrRepository


def _to_record(head: dict, events: Iterable[dict]) -> DtrRecord:
    return DtrRecord(
        identifier=head["identifier"],
        work_date=head["work_date"],
        first_in=from_db(head.get("first_in")),
        last_out=from_db(head.get("last_out")),
        events=tuple(ClockEvent(kind=EventKind(e["kind"]), at=from_db(e["at"])) for e in events),
    )


class MySQLDtrRepository(DtrRepository):
    """DTR storage over two tables: ``dtr_records`` (one row per key) and ``dtr_events``.

    Writers lock the ``dtr_records`` row with SELECT ... FOR UPDATE, so
    read-modify-write is serialized per key by InnoDB row locks only.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, identifier: str, work_date: date) -> Optional[DtrRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._load(cur, identifier, work_date, for_update=False)

    def list_for_date(self, work_date: date) -> Sequence[DtrRecord]:
        return self._list("r.work_date=%s", (work_date,))

    def list_for_identifier(self, identifier: str, *, start_date: date, end_date: date) -> Sequence[DtrRecord]:
        return self._list("r.identifier=%s AND r.work_date BETWEEN %s AND %s", (identifier, start_date, end_date))

    def mutate(
        self,
        identifier: str,
        work_date: date,
        fn: Callable[[Optional[DtrRecord]], DtrRecord],
    ) -> DtrRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            # Make sure the key row exists so there is something to lock.
            cur.execute(
                "INSERT IGNORE INTO dtr_records(identifier, work_date) VALUES(%s,%s)",
                (identifier, work_date),
            )
            current = self._load(cur, identifier, work_date, for_update=True)
            updated = fn(current)

            known = set(current.events) if current else set()
            for event in updated.events:
                if event in known:
                    continue
                cur.execute(
                    """
                    INSERT IGNORE INTO dtr_events(identifier, work_date, kind, at)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (identifier, work_date, event.kind.value, to_db(event.at)),
                )
            cur.execute(
                """
                UPDATE dtr_records
                SET first_in=%s, last_out=%s
                WHERE identifier=%s AND work_date=%s
                """,
                (to_db(updated.first_in), to_db(updated.last_out), identifier, work_date),
            )
            return updated

    def _load(self, cur, identifier: str, work_date: date, *, for_update: bool) -> Optional[DtrRecord]:
        lock = " FOR UPDATE" if for_update else ""
        cur.execute(
            f"""
            SELECT identifier, work_date, first_in, last_out
            FROM dtr_records
            WHERE identifier=%s AND work_date=%s{lock}
            """,
            (identifier, work_date),
        )
        head = fetchone(cur)
        if not head:
            return None
        cur.execute(
            """
            SELECT kind, at
            FROM dtr_events
            WHERE identifier=%s AND work_date=%s
            ORDER BY event_id ASC
            """,
            (identifier, work_date),
        )
        events = fetchall(cur)
        if not events:
            # placeholder row from an aborted or in-flight first write
            return None
        return _to_record(head, events)

    def _list(self, where: str, params: tuple) -> Sequence[DtrRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT r.identifier, r.work_date, r.first_in, r.last_out
                FROM dtr_records r
                WHERE {where}
                ORDER BY r.work_date ASC, r.identifier ASC
                """,
                params,
            )
            heads = fetchall(cur)
            cur.execute(
                f"""
                SELECT e.identifier, e.work_date, e.kind, e.at
                FROM dtr_events e
                JOIN dtr_records r ON r.identifier = e.identifier AND r.work_date = e.work_date
                WHERE {where}
                ORDER BY e.event_id ASC
                """,
                params,
            )
            grouped: dict[tuple[str, date], list[dict]] = defaultdict(list)
            for e in fetchall(cur):
                grouped[(e["identifier"], e["work_date"])].append(e)

        return [
            _to_record(h, grouped[(h["identifier"], h["work_date"])])
            for h in heads
            if grouped.get((h["identifier"], h["work_date"]))
        ]

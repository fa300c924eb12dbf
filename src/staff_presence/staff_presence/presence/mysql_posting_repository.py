from __future__ import annotations

from typing import Iterator, Optional, Sequence

from ..core.enums import RoleClass
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..database.timestamps import from_db, to_db
from .model import LocationPosting
from .repository import Chooser, PostingRepository

_COLUMNS = """
    p.posting_id, p.identifier, p.location, p.reason, p.posted_at, p.expires_at,
    p.duration_minutes, p.role_at_posting, p.posted_by_identifier, p.posted_by_name
"""


def _to_posting(row: dict) -> LocationPosting:
    return LocationPosting(
        identifier=row["identifier"],
        location=row["location"],
        reason=row.get("reason") or "",
        posted_at=from_db(row["posted_at"]),
        expires_at=from_db(row["expires_at"]),
        duration_minutes=int(row["duration_minutes"]),
        role_at_posting=RoleClass(row["role_at_posting"]),
        posted_by_identifier=row.get("posted_by_identifier") or row["identifier"],
        posted_by_name=row.get("posted_by_name") or "",
    )


class MySQLPostingRepository(PostingRepository):
    """Every submission lands in ``location_postings``; ``current_locations``
    points at the canonical one per identifier and is the row writers lock.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def submit(self, posting: LocationPosting, choose: Chooser) -> LocationPosting:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO location_postings(
                    identifier, location, reason, posted_at, expires_at,
                    duration_minutes, role_at_posting, posted_by_identifier, posted_by_name
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    posting.identifier,
                    posting.location,
                    posting.reason,
                    to_db(posting.posted_at),
                    to_db(posting.expires_at),
                    int(posting.duration_minutes),
                    posting.role_at_posting.value,
                    posting.posted_by_identifier,
                    posting.posted_by_name,
                ),
            )
            posting_id = int(cur.lastrowid)

            cur.execute(
                "INSERT IGNORE INTO current_locations(identifier, posting_id) VALUES(%s, NULL)",
                (posting.identifier,),
            )
            cur.execute(
                "SELECT posting_id FROM current_locations WHERE identifier=%s FOR UPDATE",
                (posting.identifier,),
            )
            pointer = fetchone(cur)
            current = None
            if pointer and pointer.get("posting_id"):
                cur.execute(f"SELECT {_COLUMNS} FROM location_postings p WHERE p.posting_id=%s", (pointer["posting_id"],))
                row = fetchone(cur)
                current = _to_posting(row) if row else None

            chosen = choose(current, posting)
            if chosen is posting:
                cur.execute(
                    "UPDATE current_locations SET posting_id=%s WHERE identifier=%s",
                    (posting_id, posting.identifier),
                )
            return chosen

    def get_current(self, identifier: str) -> Optional[LocationPosting]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM current_locations c
                JOIN location_postings p ON p.posting_id = c.posting_id
                WHERE c.identifier=%s
                """,
                (identifier,),
            )
            row = fetchone(cur)
            return _to_posting(row) if row else None

    def iter_current(self) -> Iterator[LocationPosting]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM current_locations c
                JOIN location_postings p ON p.posting_id = c.posting_id
                ORDER BY p.posted_at DESC
                """
            )
            rows = fetchall(cur)
        for row in rows:
            yield _to_posting(row)

    def recent(self, identifier: str, limit: int) -> Sequence[LocationPosting]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM location_postings p
                WHERE p.identifier=%s
                ORDER BY p.posted_at DESC, p.posting_id DESC
                LIMIT %s
                """,
                (identifier, max(int(limit), 0)),
            )
            return [_to_posting(r) for r in fetchall(cur)]

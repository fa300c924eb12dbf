from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import RoleClass
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Person
from .repository import DirectoryLookup


def _to_person(row: dict) -> Person:
    try:
        role = RoleClass(row["role_class"])
    except ValueError:
        role = RoleClass.OTHER
    return Person(
        identifier=row["identifier"],
        display_name=row["display_name"] or "",
        role_class=role,
        employment_classification=row.get("employment_classification"),
    )


class MySQLDirectoryRepository(DirectoryLookup):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_persons(self) -> Sequence[Person]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT identifier, display_name, role_class, employment_classification
                FROM persons
                ORDER BY identifier
                """
            )
            return [_to_person(r) for r in fetchall(cur)]

    def get_person(self, identifier: str) -> Optional[Person]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT identifier, display_name, role_class, employment_classification
                FROM persons
                WHERE identifier=%s
                """,
                (identifier,),
            )
            row = fetchone(cur)
            return _to_person(row) if row else None

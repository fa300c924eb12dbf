"""Example: drive the service layer directly (no Flask), in memory.

Controllers are a thin layer; the attendance rules live in the services.
"""

from datetime import datetime, timedelta

from staff_presence.container import build_container
from staff_presence.core.enums import RoleClass
from staff_presence.directory.memory_directory_repository import InMemoryDirectory
from staff_presence.directory.model import Person


def main():
    directory = InMemoryDirectory([
        Person("T-001", "Maria Santos", RoleClass.TEACHER),
        Person("E-010", "Ana Cruz", RoleClass.EMPLOYEE),
    ])
    container = build_container(backend="memory", directory=directory)

    day = datetime(2024, 5, 1)
    container.clock_service.clock_in("T-001", day.replace(hour=8))
    result = container.clock_service.clock_out("T-001", day.replace(hour=12))
    print(result.status.value, result.record.first_in, result.record.last_out)
    print(container.summary_service.summarize(day.date()))

    t0 = day.replace(hour=9)
    container.presence_service.post_location("E-010", RoleClass.EMPLOYEE, "Library", None, 30, t0)
    container.presence_service.post_location("E-010", RoleClass.TEACHER, "Gym", None, 15, t0 + timedelta(minutes=5))
    print(container.presence_service.current_location("E-010", now=t0 + timedelta(minutes=10)))


if __name__ == "__main__":
    main()

"""Example: use the service layer directly (no Flask).

Controllers stay thin; the timetable and attendance rules live in the services.
"""

import importlib

from attendify.config import get_settings_module
from attendify.container import build_container
from attendify.core.constants import DEFAULT_SECTION


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    for day in container.timetable_service.timetable_for(DEFAULT_SECTION):
        print(day.day.value)
        for slot in day.slots:
            print(f"  {slot.display_range:<22} {slot.subject} ({slot.room})")

    print(container.attendance_service.stats(section=DEFAULT_SECTION).to_dict())


if __name__ == "__main__":
    main()

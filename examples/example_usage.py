"""Example: drive the service layer directly (no Flask).

Controllers are a thin layer; the check-in/check-out rules live in the services.
"""

import importlib

from config import get_settings_module

from src.childcare_register.childcare_register.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, timezone=settings.TIMEZONE)

    for record in container.attendance_service.get_current_attendance():
        print(f"child={record.child_id} since={record.check_in_time:%H:%M} notes={record.notes or '-'}")

    for row in container.meal_service.get_daily_meals():
        print(f"{row.child_name}: {row.meal.meal_type.value} ({row.meal.consumed_label})")


if __name__ == "__main__":
    main()

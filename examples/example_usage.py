"""Use the service layer directly (no Flask): print a user's month and the active tags."""

import importlib

from dotenv import load_dotenv

from config import get_settings_module

from src.kintai_system.kintai_system.container import build_container


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(settings=settings)
    try:
        summary = container.attendance_service.get_summary(user_id=1)
        print("this month:", summary.to_dict())
        print("active tags:", [t.name for t in container.tag_service.list_active()])
    finally:
        container.conn.close()


if __name__ == "__main__":
    main()

"""Run one Notion -> tags synchronisation from the command line."""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.kintai_system.kintai_system.container import build_container
from src.kintai_system.kintai_system.core.exceptions import ExternalServiceError


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(settings=settings)
    try:
        result = container.tag_sync_service.sync()
    except ExternalServiceError as e:
        raise SystemExit(f"FAILED: {e.message}")
    finally:
        if container.conn is not None:
            container.conn.close()

    print(
        f"OK: {result.new_tags} new, {result.updated_tags} updated, "
        f"{result.total_synced} synced at {result.last_sync_at}"
    )


if __name__ == "__main__":
    main()

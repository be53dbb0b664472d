"""Load demo departments/tags from database/seed.sql and create the demo accounts."""

from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.kintai_system.kintai_system.database.bootstrap import DEMO_PASSWORD, apply_seed_sql, ensure_demo_users


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--seed", type=Path, default=REPO_ROOT / "database" / "seed.sql")
    parser.add_argument("--skip-users", action="store_true", help="only load seed.sql")
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_seed_sql(db_config, seed_path=args.seed)
    if not args.skip_users:
        ensure_demo_users(db_config)

    print(f"OK: seeded {db_config.get('database')} on {db_config.get('host')}:{db_config.get('port', 3306)}")
    if not args.skip_users:
        print(f"    demo logins: admin@company.com / user@company.com (password: {DEMO_PASSWORD})")


if __name__ == "__main__":
    main()

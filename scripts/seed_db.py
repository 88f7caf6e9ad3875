from __future__ import annotations

import importlib

from dotenv import load_dotenv

from attendify.config import get_settings_module
from attendify.database.bootstrap import DEMO_ACCOUNTS, DEMO_PASSWORD, apply_schema, ensure_demo_users


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config)
    ensure_demo_users(db_config)

    print(
        "OK: Seeded database -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )
    for account in DEMO_ACCOUNTS:
        print(f"  {account['role']:<8} {account['email']} / {DEMO_PASSWORD}")


if __name__ == "__main__":
    main()

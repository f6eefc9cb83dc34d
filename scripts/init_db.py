from __future__ import annotations

import importlib
from pathlib import Path

from config import get_settings_module

from team_scheduler.database.bootstrap import apply_schema, list_tables
from team_scheduler.logging_config import configure_logging

REPO_ROOT = Path(__file__).resolve().parents[1]


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    logger = configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    tables = list_tables(db_config)
    logger.info(
        "Schema applied",
        target=f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}",
        tables=len(tables),
    )


if __name__ == "__main__":
    main()

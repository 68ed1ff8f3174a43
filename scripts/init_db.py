from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv

from payroll_service.common.logging_config import configure_logging
from payroll_service.config import get_settings_module
from payroll_service.database.bootstrap import apply_schema, list_tables
from payroll_service.main import SCHEMA_PATH

logger = logging.getLogger("payroll_service.scripts.init_db")


def main() -> None:
    load_dotenv(override=False)
    configure_logging()
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config, schema_path=SCHEMA_PATH)
    tables = list_tables(db_config)
    logger.info(
        "applied schema.sql -> %s@%s:%s/%s (tables=%d)",
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
        len(tables),
    )


if __name__ == "__main__":
    main()

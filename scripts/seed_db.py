from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv

from payroll_service.common.logging_config import configure_logging
from payroll_service.config import get_settings_module
from payroll_service.database.bootstrap import ensure_demo_business

logger = logging.getLogger("payroll_service.scripts.seed_db")


def main() -> None:
    load_dotenv(override=False)
    configure_logging()
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    business_id = ensure_demo_business(db_config)
    if business_id:
        logger.info("seeded demo business %s into %s", business_id, db_config.get("database"))
    else:
        logger.info("database %s already has the demo business; nothing to seed", db_config.get("database"))


if __name__ == "__main__":
    main()

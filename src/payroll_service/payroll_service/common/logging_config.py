from __future__ import annotations

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"


def configure_logging(*, debug: bool = False, level: Optional[str] = None) -> None:
    """Set up the root logger once; safe to call again from tests."""
    resolved = (level or ("DEBUG" if debug else "INFO")).upper()

    root = logging.getLogger()
    root.setLevel(resolved)

    if not any(getattr(h, "_payroll_service", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handler._payroll_service = True  # type: ignore[attr-defined]
        root.addHandler(handler)

    # werkzeug's per-request lines are noise outside debug runs.
    logging.getLogger("werkzeug").setLevel(logging.INFO if debug else logging.WARNING)

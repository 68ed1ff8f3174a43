from __future__ import annotations

import json
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional

from .connection import DatabaseConnection

Row = Dict[str, Any]


@contextmanager
def db_cursor(conn_factory: DatabaseConnection) -> Iterator[Any]:
    """Dictionary cursor on a fresh connection; commits on success, rolls back on error."""
    conn = conn_factory.connect()
    cur = conn.cursor(dictionary=True)
    try:
        yield cur
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        cur.close()
        conn.close()


def fetchone(cur) -> Optional[Row]:
    return cur.fetchone() or None


def fetchall(cur) -> List[Row]:
    return list(cur.fetchall() or ())


def dump_json(value: Any) -> Optional[str]:
    if value is None:
        return None
    return json.dumps(value)


def load_json(value: Any, default: Any = None) -> Any:
    """Decode a JSON column; mysql-connector may hand back str, bytes or already-parsed data."""
    if value is None or value == "":
        return default
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        return json.loads(value)
    return value


def placeholders(values) -> str:
    return ",".join(["%s"] * len(values))


def db_now() -> datetime:
    # DATETIME columns carry no zone; store naive local time like the rest of the app.
    return datetime.now().replace(microsecond=0)

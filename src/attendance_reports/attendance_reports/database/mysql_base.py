from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterable, List, Optional

from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (connection, cursor) inside one transaction.

    Commits when the block exits normally, rolls back and re-raises otherwise.
    The connection is always closed.
    """

    conn = conn_factory.connect()
    cur = conn.cursor(dictionary=dictionary)
    try:
        yield conn, cur
        conn.commit()
    except Exception:
        logger.exception("Rolling back transaction on %s", conn_factory.config.database)
        conn.rollback()
        raise
    finally:
        cur.close()
        conn.close()


def _text(value: Any) -> Any:
    # Pure-python connector may hand back VARCHAR/TEXT as bytearray.
    if isinstance(value, (bytes, bytearray)):
        return value.decode("utf-8")
    return value


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    if not row:
        return None
    return {k: _text(v) for k, v in row.items()}


def fetchall(cur) -> List[Dict[str, Any]]:
    return [{k: _text(v) for k, v in row.items()} for row in cur.fetchall() or []]


def dump_text_list(values: Iterable[str]) -> str:
    return json.dumps(list(values))


def load_text_list(value: Optional[str]) -> tuple[str, ...]:
    if not value:
        return ()
    return tuple(str(v) for v in json.loads(value))

"""
FILE: taskboard/core/store.py
PURPOSE: Document store adapter (the only component doing raw storage I/O)
EXPORTS:
  - Filter (dataclass) - conjunctive equality / set-membership predicate
  - OrderBy (dataclass) - single-field ordering
  - DocumentStore
      - insert(collection, fields) -> str
      - list_where(collection, filters, order_by) -> List[dict]
      - get_by_id(collection, doc_id) -> dict | None
      - update(collection, doc_id, fields) -> bool
      - delete(collection, doc_id) -> bool
DEPENDENCIES:
  - sqlite3 (stdlib, JSON1 functions)
  - json, uuid, threading, logging (stdlib)
  - taskboard.core.exceptions (StoreError, InvalidInputError)
NOTES:
  - Documents live in one table keyed by (collection, id), body stored as JSON
  - insert() stamps createdAt; callers never supply it
  - Records come back as plain dicts with the id merged into the body
  - Each operation opens its own connection, so worker threads can share a store
  - No retries: every sqlite3.Error is logged and re-raised as StoreError
"""

import json
import logging
import re
import sqlite3
import threading
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from .constants import FIELD_CREATED_AT, FIELD_ID, OP_ARRAY_CONTAINS, OP_EQ, VALID_OPERATORS
from .exceptions import InvalidInputError, StoreError

logger = logging.getLogger(__name__)

_FIELD_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

SCHEMA = """
CREATE TABLE IF NOT EXISTS documents (
    seq INTEGER PRIMARY KEY AUTOINCREMENT,
    collection TEXT NOT NULL,
    id TEXT NOT NULL,
    body TEXT NOT NULL,
    UNIQUE (collection, id)
);
CREATE INDEX IF NOT EXISTS idx_documents_collection ON documents(collection);
"""


@dataclass(frozen=True)
class Filter:
    """A single predicate. `op` is '==' or 'array-contains'."""

    field: str
    op: str
    value: Any

    def __post_init__(self):
        _check_field(self.field)
        if self.op not in VALID_OPERATORS:
            raise InvalidInputError(
                f"Invalid filter operator '{self.op}'. Must be one of: {', '.join(VALID_OPERATORS)}"
            )


@dataclass(frozen=True)
class OrderBy:
    field: str
    descending: bool = True

    def __post_init__(self):
        _check_field(self.field)


def _check_field(name: str) -> None:
    if not _FIELD_RE.match(name or ""):
        raise InvalidInputError(f"Invalid field name '{name}'")


def _json_path(name: str) -> str:
    return f"$.{name}"


def _format_timestamp(moment: datetime) -> str:
    # Fixed width so lexical order equals chronological order
    return moment.isoformat(timespec="microseconds")


class DocumentStore:
    """
    SQLite-backed document collections.

    Construct one per process (or per test) and pass it to the repositories.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._clock_lock = threading.Lock()
        self._last_stamp: Optional[datetime] = None
        self._ensure_schema()
        logger.debug("DocumentStore ready db=%s", self.path)

    # ---- low-level helpers ----

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self.path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        return conn

    def _run(self, operation: str, collection: str, fn):
        """Run fn(conn) on a fresh connection, translating store faults."""
        try:
            conn = self._connect()
        except sqlite3.Error as e:
            logger.error("Store %s on %s failed to connect: %s", operation, collection, e)
            raise StoreError(operation, collection, str(e)) from e
        try:
            with conn:
                return fn(conn)
        except sqlite3.Error as e:
            logger.error("Store %s on %s failed: %s", operation, collection, e)
            raise StoreError(operation, collection, str(e)) from e
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        def create(conn: sqlite3.Connection) -> None:
            conn.executescript(SCHEMA)
            row = conn.execute(
                "SELECT MAX(json_extract(body, ?)) AS latest FROM documents",
                (_json_path(FIELD_CREATED_AT),),
            ).fetchone()
            if row and row["latest"]:
                try:
                    self._last_stamp = datetime.fromisoformat(row["latest"])
                except ValueError:
                    self._last_stamp = None

        self._run("init", "*", create)

    def _next_timestamp(self) -> str:
        """Server-assigned creation stamp, strictly increasing per store."""
        with self._clock_lock:
            now = datetime.now(timezone.utc)
            if self._last_stamp is not None and now <= self._last_stamp:
                now = self._last_stamp + timedelta(microseconds=1)
            self._last_stamp = now
            return _format_timestamp(now)

    @staticmethod
    def _to_record(row: sqlite3.Row) -> Dict[str, Any]:
        body = json.loads(row["body"])
        body[FIELD_ID] = row["id"]
        return body

    # ---- operations ----

    def insert(self, collection: str, fields: Dict[str, Any]) -> str:
        """
        Insert a new document.

        Args:
            collection: Collection name
            fields: Document body (id and createdAt are ignored if present)

        Returns:
            Generated document id
        """
        doc_id = uuid.uuid4().hex
        body = {k: v for k, v in fields.items() if k not in (FIELD_ID, FIELD_CREATED_AT)}
        body[FIELD_CREATED_AT] = self._next_timestamp()
        payload = json.dumps(body)

        self._run(
            "insert",
            collection,
            lambda conn: conn.execute(
                "INSERT INTO documents (collection, id, body) VALUES (?, ?, ?)",
                (collection, doc_id, payload),
            ),
        )
        logger.debug("Inserted %s/%s", collection, doc_id)
        return doc_id

    def list_where(
        self,
        collection: str,
        filters: Iterable[Filter] = (),
        order_by: Optional[OrderBy] = None,
    ) -> List[Dict[str, Any]]:
        """
        List documents matching every filter.

        Without order_by, documents come back in insertion order.
        """
        where = ["collection = ?"]
        params: List[Any] = [collection]

        for f in filters:
            if f.op == OP_EQ:
                if f.value is None:
                    where.append("json_extract(body, ?) IS NULL")
                    params.append(_json_path(f.field))
                    continue
                value = f.value
                if isinstance(value, (list, dict)):
                    value = json.dumps(value, separators=(",", ":"))
                where.append("json_extract(body, ?) = ?")
                params.extend([_json_path(f.field), value])
            elif f.op == OP_ARRAY_CONTAINS:
                where.append(
                    "json_type(body, ?) = 'array' AND EXISTS ("
                    "SELECT 1 FROM json_each(documents.body, ?) AS item WHERE item.value = ?)"
                )
                params.extend([_json_path(f.field), _json_path(f.field), f.value])

        if order_by is not None:
            direction = "DESC" if order_by.descending else "ASC"
            order_sql = f"json_extract(body, ?) {direction}, seq {direction}"
            params.append(_json_path(order_by.field))
        else:
            order_sql = "seq ASC"

        sql = f"SELECT id, body FROM documents WHERE {' AND '.join(where)} ORDER BY {order_sql}"
        rows = self._run("list", collection, lambda conn: conn.execute(sql, params).fetchall())
        return [self._to_record(row) for row in rows]

    def get_by_id(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        """Fetch one document, or None if it doesn't exist."""
        row = self._run(
            "get",
            collection,
            lambda conn: conn.execute(
                "SELECT id, body FROM documents WHERE collection = ? AND id = ?",
                (collection, doc_id),
            ).fetchone(),
        )
        return self._to_record(row) if row else None

    def update(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> bool:
        """
        Merge fields into an existing document.

        Returns:
            True if the document existed, False otherwise

        Note:
            id and createdAt are store-managed and never overwritten.
        """
        changes = {k: v for k, v in fields.items() if k not in (FIELD_ID, FIELD_CREATED_AT)}

        def merge(conn: sqlite3.Connection) -> bool:
            row = conn.execute(
                "SELECT body FROM documents WHERE collection = ? AND id = ?",
                (collection, doc_id),
            ).fetchone()
            if row is None:
                return False
            body = json.loads(row["body"])
            body.update(changes)
            conn.execute(
                "UPDATE documents SET body = ? WHERE collection = ? AND id = ?",
                (json.dumps(body), collection, doc_id),
            )
            return True

        return self._run("update", collection, merge)

    def delete(self, collection: str, doc_id: str) -> bool:
        """Delete one document. Returns False if it didn't exist."""
        deleted = self._run(
            "delete",
            collection,
            lambda conn: conn.execute(
                "DELETE FROM documents WHERE collection = ? AND id = ?",
                (collection, doc_id),
            ).rowcount,
        )
        return deleted > 0

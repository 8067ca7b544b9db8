"""
SQLite Database Adapter.

Implements the database port on a single indexed `files` table.

Durability: with fast_writes enabled (the default) the connection runs
`synchronous = OFF` and keeps the rollback journal in memory. Bulk scans
are much faster, but a process killed mid-scan can leave the index
incomplete or damaged. Recovery is to re-run indexing with a clear first.
"""

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import List, Sequence, Tuple

from ..ports.db_port import DBPort
from ..domain.models import FileRecord
from ..domain.enums import Comparison, EntryKind, SortKey
from ..domain.query import (
    ExtensionEquals, KindIs, ModifiedSince, NameContains, PathPrefix,
    Predicate, QueryPlan, SizeCompare,
)
from ..errors import StoreInitError, StoreQueryError, StoreWriteError

logger = logging.getLogger(__name__)


# SQL Schema
SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS files (
    id INTEGER PRIMARY KEY,
    path TEXT NOT NULL UNIQUE,
    name TEXT NOT NULL,
    extension TEXT,
    size INTEGER NOT NULL,
    last_modified INTEGER NOT NULL,
    is_dir INTEGER NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_files_name ON files(name);
CREATE INDEX IF NOT EXISTS idx_files_extension ON files(extension);
CREATE INDEX IF NOT EXISTS idx_files_size ON files(size);
CREATE INDEX IF NOT EXISTS idx_files_last_modified ON files(last_modified);
"""

UPSERT_SQL = """
INSERT INTO files (path, name, extension, size, last_modified, is_dir)
VALUES (?, ?, ?, ?, ?, ?)
ON CONFLICT(path) DO UPDATE SET
  name=excluded.name,
  extension=excluded.extension,
  size=excluded.size,
  last_modified=excluded.last_modified,
  is_dir=excluded.is_dir
"""

SELECT_COLUMNS = "path, name, extension, size, last_modified, is_dir"

# Whitelists: the only tokens ever placed into SQL text
SORT_COLUMNS = {
    SortKey.NAME: "name",
    SortKey.SIZE: "size",
    SortKey.MODIFIED: "last_modified",
    SortKey.EXTENSION: "extension",
}

COMPARISON_TOKENS = {
    Comparison.GT: ">",
    Comparison.LT: "<",
    Comparison.EQ: "=",
}


def compile_predicate(predicate: Predicate) -> Tuple[str, list]:
    """Translate one predicate into a SQL condition and its parameters."""
    if isinstance(predicate, NameContains):
        if predicate.case_sensitive:
            return "instr(name, ?) > 0", [predicate.text]
        # casefold() is registered per connection; SQLite's own LIKE only folds ASCII
        return "instr(casefold(name), ?) > 0", [predicate.text.casefold()]
    if isinstance(predicate, ExtensionEquals):
        return "extension = ?", [predicate.extension]
    if isinstance(predicate, PathPrefix):
        return "substr(path, 1, ?) = ?", [len(predicate.prefix), predicate.prefix]
    if isinstance(predicate, KindIs):
        return "is_dir = ?", [1 if predicate.kind == EntryKind.DIR else 0]
    if isinstance(predicate, SizeCompare):
        return f"size {COMPARISON_TOKENS[predicate.op]} ?", [predicate.size]
    if isinstance(predicate, ModifiedSince):
        return "last_modified >= ?", [predicate.timestamp]
    raise TypeError(f"Unsupported predicate: {predicate!r}")


def compile_plan(plan: QueryPlan) -> Tuple[str, list]:
    """Translate a query plan into one parameterized SELECT."""
    sql = f"SELECT {SELECT_COLUMNS} FROM files WHERE 1=1"
    params: list = []

    for predicate in plan.predicates:
        condition, values = compile_predicate(predicate)
        sql += f" AND {condition}"
        params.extend(values)

    if plan.sort is not None:
        direction = "DESC" if plan.descending else "ASC"
        sql += f" ORDER BY {SORT_COLUMNS[plan.sort]} {direction}, path {direction}"

    sql += " LIMIT ?"
    params.append(plan.limit)
    return sql, params


class SqliteDB(DBPort):
    """SQLite implementation of the database port."""

    def __init__(self, db_path: Path, fast_writes: bool = True):
        """
        Initialize the SQLite database.

        Args:
            db_path: Path to the SQLite database file
            fast_writes: Trade durability for bulk write throughput

        Raises:
            StoreInitError: If the file cannot be created, opened or initialized
        """
        self.db_path = Path(db_path)
        self.fast_writes = fast_writes

        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(
                str(self.db_path),
                check_same_thread=False,
                isolation_level=None  # Autocommit mode
            )
        except (OSError, sqlite3.Error) as e:
            raise StoreInitError(f"Cannot open index at {self.db_path}: {e}") from e

        self._conn.row_factory = sqlite3.Row
        try:
            self._init_schema()
        except sqlite3.Error as e:
            self._conn.close()
            raise StoreInitError(f"Cannot initialize index at {self.db_path}: {e}") from e

    def _init_schema(self):
        """Initialize database schema and connection pragmas."""
        self._conn.create_function("casefold", 1, str.casefold, deterministic=True)
        self._conn.executescript(SCHEMA_SQL)
        if self.fast_writes:
            self._conn.execute("PRAGMA synchronous = OFF")
            self._conn.execute("PRAGMA journal_mode = MEMORY").fetchone()
        logger.debug("Opened index %s (fast_writes=%s)", self.db_path, self.fast_writes)

    @contextmanager
    def _transaction(self):
        """Context manager for transactions."""
        self._conn.execute("BEGIN")
        try:
            yield
            self._conn.execute("COMMIT")
        except Exception:
            self._conn.execute("ROLLBACK")
            raise

    # === Writes ===

    def upsert_batch(self, records: Sequence[FileRecord]) -> None:
        if not records:
            return
        try:
            with self._transaction():
                self._conn.executemany(
                    UPSERT_SQL,
                    (
                        (r.path, r.name, r.extension, r.size,
                         r.last_modified, 1 if r.is_dir else 0)
                        for r in records
                    ),
                )
        except sqlite3.Error as e:
            raise StoreWriteError(f"Batch of {len(records)} records failed: {e}") from e

    def clear(self) -> None:
        try:
            with self._transaction():
                self._conn.execute("DELETE FROM files")
        except sqlite3.Error as e:
            raise StoreWriteError(f"Clearing the index failed: {e}") from e

    # === Reads ===

    def query(self, plan: QueryPlan) -> List[FileRecord]:
        sql, params = compile_plan(plan)
        try:
            rows = self._conn.execute(sql, params).fetchall()
        except (sqlite3.Error, UnicodeEncodeError) as e:
            raise StoreQueryError(f"Query failed: {e}") from e
        return [self._row_to_file(row) for row in rows]

    def count(self) -> int:
        try:
            row = self._conn.execute("SELECT COUNT(*) FROM files").fetchone()
        except sqlite3.Error as e:
            raise StoreQueryError(f"Count failed: {e}") from e
        return row[0] if row else 0

    def _row_to_file(self, row) -> FileRecord:
        return FileRecord(
            path=row["path"],
            name=row["name"],
            extension=row["extension"],
            size=row["size"],
            last_modified=row["last_modified"],
            is_dir=bool(row["is_dir"]),
        )

    # === Maintenance ===

    def vacuum(self) -> None:
        try:
            self._conn.execute("VACUUM")
        except sqlite3.Error as e:
            raise StoreWriteError(f"Vacuum failed: {e}") from e

    def close(self) -> None:
        self._conn.close()

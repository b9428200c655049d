"""
Record of the batch ranges sent for verification.

The ledger writes through whatever DB-API connection or cursor the caller
passes in and never commits or rolls back itself; the caller's transaction
decides when the write becomes visible.
"""

from __future__ import annotations

import re
from typing import Any, Optional

from .types import Sequence

_PLACEHOLDERS = {
    "qmark": "?",
    "format": "%s",
    "pyformat": "%s",
}

_TABLE_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?")


class SequenceLedger:
    def __init__(self, table: str = "sequence", paramstyle: str = "qmark"):
        if not _TABLE_NAME.fullmatch(table):
            raise ValueError(f"Invalid table name: {table!r}")
        if paramstyle not in _PLACEHOLDERS:
            raise ValueError(f"Unsupported paramstyle: {paramstyle!r}")
        self.table = table
        self.paramstyle = paramstyle
        p = _PLACEHOLDERS[paramstyle]
        self._add_sequence_sql = (
            f"INSERT INTO {table} (from_batch_num, to_batch_num) VALUES ({p}, {p}) "
            f"ON CONFLICT (from_batch_num) DO UPDATE SET to_batch_num = excluded.to_batch_num"
        )
        self._get_sequence_sql = (
            f"SELECT from_batch_num, to_batch_num FROM {table} WHERE from_batch_num = {p}"
        )

    def create_schema(self, tx: Any) -> None:
        tx.execute(
            f"CREATE TABLE IF NOT EXISTS {self.table} ("
            "from_batch_num BIGINT PRIMARY KEY, "
            "to_batch_num BIGINT NOT NULL)"
        )

    def add_sequence(self, sequence: Sequence, tx: Any) -> None:
        """Upsert the range keyed by its first batch; an existing range gets the new end."""
        tx.execute(self._add_sequence_sql, (sequence.from_batch_number, sequence.to_batch_number))

    def get_sequence(self, from_batch_number: int, tx: Any) -> Optional[Sequence]:
        cursor = tx.execute(self._get_sequence_sql, (from_batch_number,))
        # psycopg-style cursors return None from execute and hold the rows themselves.
        row = (cursor if cursor is not None else tx).fetchone()
        if row is None:
            return None
        return Sequence(from_batch_number=int(row[0]), to_batch_number=int(row[1]))

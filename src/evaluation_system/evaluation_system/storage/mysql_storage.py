from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .base import ObservableStorage


class MySQLStorage(ObservableStorage):
    """local_storage table backend (see database/schema.sql)."""

    def __init__(self, conn_factory: DatabaseConnection):
        super().__init__()
        self._conn_factory = conn_factory

    def _read(self, key: str) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT storage_value FROM local_storage WHERE storage_key=%s",
                (key,),
            )
            row = fetchone(cur)
            return row["storage_value"] if row else None

    def _write(self, key: str, value: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO local_storage(storage_key, storage_value)
                VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE storage_value=VALUES(storage_value)
                """,
                (key, value),
            )

    def _delete(self, key: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM local_storage WHERE storage_key=%s", (key,))

    def _delete_all(self) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM local_storage")

    def keys(self) -> list[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT storage_key FROM local_storage ORDER BY storage_key")
            return [r["storage_key"] for r in fetchall(cur)]

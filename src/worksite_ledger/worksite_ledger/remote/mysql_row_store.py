from __future__ import annotations

from typing import Any, Mapping, Sequence

import mysql.connector

from ..core.exceptions import RemoteStoreError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, placeholders
from ..state.snapshot import get_table
from .repository import RowStore

_ORDER_COLUMNS = {"created_at", "date", "id"}


class MySQLRowStore(RowStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _columns(table: str) -> tuple[str, ...]:
        try:
            return get_table(table).columns
        except ValueError as e:
            raise RemoteStoreError(str(e), table=table) from e

    def select_page(
        self,
        table: str,
        *,
        order_by: str,
        ascending: bool,
        offset: int,
        limit: int,
    ) -> Sequence[Mapping[str, Any]]:
        cols = self._columns(table)
        if order_by not in _ORDER_COLUMNS:
            raise RemoteStoreError(f"Unsupported order column: {order_by}", table=table)
        direction = "ASC" if ascending else "DESC"
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"""
                    SELECT {", ".join(cols)}
                    FROM {table}
                    ORDER BY {order_by} {direction}, id ASC
                    LIMIT %s OFFSET %s
                    """,
                    (int(limit), int(offset)),
                )
                return fetchall(cur)
        except mysql.connector.Error as e:
            raise RemoteStoreError(f"select {table} failed: {e}", table=table) from e

    def upsert(self, table: str, rows: Sequence[Mapping[str, Any]]) -> None:
        if not rows:
            return
        cols = self._columns(table)
        updates = ", ".join(f"{c}=VALUES({c})" for c in cols if c != "id")
        sql = (
            f"INSERT INTO {table} ({', '.join(cols)}) VALUES ({placeholders(len(cols))}) "
            f"ON DUPLICATE KEY UPDATE {updates}"
        )
        params = [tuple(r.get(c) for c in cols) for r in rows]
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.executemany(sql, params)
        except mysql.connector.Error as e:
            raise RemoteStoreError(f"upsert {table} failed: {e}", table=table) from e

    def delete(self, table: str, ids: Sequence[str]) -> None:
        if not ids:
            return
        self._columns(table)
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(f"DELETE FROM {table} WHERE id IN ({placeholders(len(ids))})", tuple(ids))
        except mysql.connector.Error as e:
            raise RemoteStoreError(f"delete {table} failed: {e}", table=table) from e

"""DocumentStore 的 SQLite 实现

文档以 JSON 文本存储，查询借助 SQLite JSON1 函数完成。
aiosqlite 异常统一转换为 StoreUnavailableError。
"""

import json
from typing import Any

import aiosqlite
import structlog

from ..exceptions import StoreUnavailableError
from .protocols import Record
from .sqlite_init import INDEXED_FIELDS, indexed_field_expr, json_path

log = structlog.get_logger()


def equals_query(collection: str, field: str, value: Any) -> tuple[str, tuple[Any, ...]]:
    """构造等值查询 SQL

    索引字段内联字面量 path 以命中表达式索引，其余字段使用绑定参数。
    """
    if field in INDEXED_FIELDS:
        expr = indexed_field_expr(field)
        params: tuple[Any, ...] = (collection, value)
    else:
        expr = "json_extract(data, ?)"
        params = (collection, json_path(field), value)
    sql = f"SELECT data FROM documents WHERE collection = ? AND {expr} = ? ORDER BY rowid"
    return sql, params


class SqliteDocumentStore:
    """DocumentStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def get(self, collection: str, doc_id: str) -> Record | None:
        """按 ID 读取文档"""
        rows = await self._fetch_all(
            "get",
            "SELECT data FROM documents WHERE collection = ? AND doc_id = ?",
            (collection, doc_id),
        )
        if not rows:
            return None
        return json.loads(rows[0][0])

    async def set(self, collection: str, doc_id: str, record: Record) -> None:
        """整体替换文档，保留原有写入顺序"""
        await self._execute_write(
            "set",
            """
            INSERT INTO documents (collection, doc_id, data)
            VALUES (?, ?, ?)
            ON CONFLICT (collection, doc_id) DO UPDATE SET data = excluded.data
            """,
            (collection, doc_id, json.dumps(record, ensure_ascii=False)),
        )

    async def merge_fields(self, collection: str, doc_id: str, fields: Record) -> bool:
        """仅覆盖给定字段，其他字段保持不变"""
        if not fields:
            return await self.get(collection, doc_id) is not None

        set_args: list[str] = []
        params: list[Any] = []
        for field, value in fields.items():
            set_args.append("?, json(?)")
            params.extend([json_path(field), json.dumps(value, ensure_ascii=False)])

        rowcount = await self._execute_write(
            "merge_fields",
            f"""
            UPDATE documents
            SET data = json_set(data, {", ".join(set_args)})
            WHERE collection = ? AND doc_id = ?
            """,
            (*params, collection, doc_id),
        )
        return rowcount > 0

    async def query_equals(self, collection: str, field: str, value: Any) -> list[Record]:
        """等值查询，按写入顺序返回"""
        sql, params = equals_query(collection, field, value)
        rows = await self._fetch_all("query_equals", sql, params)
        return [json.loads(row[0]) for row in rows]

    async def query_array_contains(
        self,
        collection: str,
        field: str,
        value: Any,
    ) -> list[Record]:
        """数组包含查询，按写入顺序返回"""
        rows = await self._fetch_all(
            "query_array_contains",
            """
            SELECT data FROM documents
            WHERE collection = ?
              AND EXISTS (
                  SELECT 1 FROM json_each(documents.data, ?)
                  WHERE json_each.value = ?
              )
            ORDER BY rowid
            """,
            (collection, json_path(field), value),
        )
        return [json.loads(row[0]) for row in rows]

    async def scan(self, collection: str) -> list[Record]:
        """遍历集合内所有文档"""
        rows = await self._fetch_all(
            "scan",
            "SELECT data FROM documents WHERE collection = ? ORDER BY rowid",
            (collection,),
        )
        return [json.loads(row[0]) for row in rows]

    async def delete(self, collection: str, doc_id: str) -> bool:
        """删除文档"""
        rowcount = await self._execute_write(
            "delete",
            "DELETE FROM documents WHERE collection = ? AND doc_id = ?",
            (collection, doc_id),
        )
        return rowcount > 0

    async def _fetch_all(self, operation: str, sql: str, params: tuple) -> list:
        try:
            cursor = await self._conn.execute(sql, params)
            return list(await cursor.fetchall())
        except aiosqlite.Error as e:
            raise self._unavailable(operation, e) from e

    async def _execute_write(self, operation: str, sql: str, params: tuple) -> int:
        try:
            cursor = await self._conn.execute(sql, params)
            await self._conn.commit()
            return cursor.rowcount
        except aiosqlite.Error as e:
            await self._conn.rollback()
            raise self._unavailable(operation, e) from e

    @staticmethod
    def _unavailable(operation: str, error: Exception) -> StoreUnavailableError:
        log.error(
            "document_store_error",
            operation=operation,
            error_type=type(error).__name__,
        )
        return StoreUnavailableError(operation, error)

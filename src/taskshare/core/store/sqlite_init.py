"""SQLite 数据库初始化

PRAGMA 配置 + documents 表 DDL + 索引创建。
每个集合的文档以 JSON 文本存放在同一张表中。
"""

import aiosqlite

_DOCUMENTS_DDL = """
CREATE TABLE IF NOT EXISTS documents (
    collection  TEXT NOT NULL,
    doc_id      TEXT NOT NULL,
    data        TEXT NOT NULL DEFAULT '{}',

    PRIMARY KEY (collection, doc_id)
);
"""

# 建有表达式索引的等值查询字段 -> 索引名
INDEXED_FIELDS: dict[str, str] = {
    "owner_id": "idx_documents_owner",
    "username": "idx_documents_username",
}


def json_path(field: str) -> str:
    """字段名转换为 JSON path"""
    return f'$."{field}"'


def indexed_field_expr(field: str) -> str:
    """索引字段的 json_extract 表达式

    查询必须使用与索引定义完全相同的字面量表达式，SQLite 才会命中索引；
    绑定参数形式的 path 无法匹配。
    """
    return f"json_extract(data, '{json_path(field)}')"


_DOCUMENTS_INDEXES = [
    f"CREATE INDEX IF NOT EXISTS {name} ON documents(collection, {indexed_field_expr(field)});"
    for field, name in INDEXED_FIELDS.items()
]


async def init_db(conn: aiosqlite.Connection) -> None:
    """初始化数据库：设置 PRAGMA + 创建表 + 创建索引

    Args:
        conn: aiosqlite 数据库连接
    """
    await conn.execute("PRAGMA journal_mode = WAL;")
    await conn.execute("PRAGMA busy_timeout = 5000;")

    await conn.execute(_DOCUMENTS_DDL)
    for idx_sql in _DOCUMENTS_INDEXES:
        await conn.execute(idx_sql)

    await conn.commit()

"""TaskShare Core Store -- SQLite 持久化实现

提供工厂函数创建共享数据库连接的 Store 实例组。
"""

from pathlib import Path

import aiosqlite

from .document_store import SqliteDocumentStore
from .group_store import GroupStore
from .protocols import DocumentStore, Record
from .sqlite_init import init_db
from .task_store import TaskStore
from .user_store import UserStore


class StoreGroup:
    """Store 实例组 -- 共享同一个文档存储"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self.conn = conn
        self.documents = SqliteDocumentStore(conn)
        self.task_store = TaskStore(self.documents)
        self.group_store = GroupStore(self.documents)
        self.user_store = UserStore(self.documents)


async def create_store_group(db_path: str) -> StoreGroup:
    """创建 Store 实例组

    Args:
        db_path: SQLite 数据库文件路径

    Returns:
        StoreGroup 实例
    """
    # 确保数据库目录存在
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = await aiosqlite.connect(db_path)
    await init_db(conn)

    return StoreGroup(conn=conn)


__all__ = [
    "StoreGroup",
    "create_store_group",
    "DocumentStore",
    "Record",
    "SqliteDocumentStore",
    "TaskStore",
    "GroupStore",
    "UserStore",
    "init_db",
]

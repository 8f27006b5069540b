"""全局 pytest 配置 -- 临时 SQLite 数据库与 StoreGroup fixture"""

from collections.abc import AsyncGenerator, Awaitable, Callable
from pathlib import Path

import pytest_asyncio
from taskshare.core.models import User
from taskshare.core.store import StoreGroup, create_store_group

from .factories import make_user


@pytest_asyncio.fixture
async def tmp_db_path(tmp_path: Path) -> Path:
    """提供临时 SQLite 数据库路径"""
    return tmp_path / "sqlite" / "test.db"


@pytest_asyncio.fixture
async def store_group(tmp_db_path: Path) -> AsyncGenerator[StoreGroup, None]:
    """提供已初始化的 StoreGroup"""
    sg = await create_store_group(str(tmp_db_path))
    yield sg
    await sg.conn.close()


@pytest_asyncio.fixture
async def seed_users(store_group: StoreGroup) -> Callable[..., Awaitable[list[User]]]:
    """按 user_id 批量写入用户"""

    async def _seed(*user_ids: str) -> list[User]:
        users = [make_user(user_id) for user_id in user_ids]
        for user in users:
            await store_group.user_store.save_user(user)
        return users

    return _seed

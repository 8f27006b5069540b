"""UserService -- 用户注册与查询

用户名唯一性通过写入前的查询预检保证，非事务性：
两个并发注册同一用户名的请求可能同时通过预检。
"""

from datetime import UTC, datetime

import structlog
from taskshare.core.exceptions import ConflictError, EntityNotFoundError
from taskshare.core.models import User, UserCreate, validate_entity
from taskshare.core.store import StoreGroup
from ulid import ULID

log = structlog.get_logger()


class UserService:
    """用户业务服务"""

    def __init__(self, store_group: StoreGroup) -> None:
        self._stores = store_group

    async def register_user(self, request: UserCreate) -> User:
        """注册用户

        Raises:
            ConflictError: 用户名已存在
            InvalidEntityError: 用户名或邮箱格式非法
        """
        user = validate_entity(
            User,
            {
                **request.model_dump(),
                "user_id": str(ULID()),
                "created_at": datetime.now(UTC),
            },
            "Invalid user data",
        )

        if await self._stores.user_store.find_by_username(user.username):
            raise ConflictError("Username already exists")

        await self._stores.user_store.save_user(user)
        log.info("user_registered", user_id=user.user_id, username=user.username)
        return user

    async def get_user(self, user_id: str) -> User:
        user = await self._stores.user_store.get_user(user_id)
        if user is None:
            raise EntityNotFoundError("user", user_id)
        return user

    async def search_users(self, email: str) -> list[User]:
        """按邮箱精确查找用户"""
        return await self._stores.user_store.find_by_email(email)

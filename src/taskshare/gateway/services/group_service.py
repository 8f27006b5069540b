"""GroupService -- 协作组创建/查询与成员管理"""

from datetime import UTC, datetime

import structlog
from taskshare.core.access import require_group_access
from taskshare.core.exceptions import EntityNotFoundError
from taskshare.core.membership import MembershipManager
from taskshare.core.models import (
    Group,
    GroupCreate,
    IdentityContext,
    User,
    validate_entity,
)
from taskshare.core.store import StoreGroup
from ulid import ULID

log = structlog.get_logger()


class GroupService:
    """协作组业务服务"""

    def __init__(self, store_group: StoreGroup) -> None:
        self._stores = store_group
        self._membership = MembershipManager(store_group.group_store, store_group.user_store)

    async def create_group(self, identity: IdentityContext, request: GroupCreate) -> Group:
        """创建协作组，创建者成为唯一初始成员"""
        now = datetime.now(UTC)
        group = validate_entity(
            Group,
            {
                "group_id": str(ULID()),
                "creator_id": identity.subject_id,
                "name": request.name,
                "description": request.description,
                "members": [identity.subject_id],
                "created_at": now,
                "updated_at": now,
            },
            "Invalid group data",
        )
        await self._stores.group_store.save_group(group)
        log.info("group_created", group_id=group.group_id, creator_id=group.creator_id)

        await self._membership.mirror_join(identity.subject_id, group.group_id)
        return group

    async def get_group(
        self,
        identity: IdentityContext,
        group_id: str,
    ) -> tuple[Group, list[User]]:
        """查询组详情及成员信息，仅 creator 与成员可见

        成员用户记录缺失时跳过该成员。
        """
        group = await self._stores.group_store.get_group(group_id)
        if group is None:
            raise EntityNotFoundError("group", group_id)
        require_group_access(group, identity.subject_id)

        members: list[User] = []
        for member_id in group.members:
            user = await self._stores.user_store.get_user(member_id)
            if user is None:
                log.warning("group_member_user_missing", group_id=group_id, user_id=member_id)
                continue
            members.append(user)
        return group, members

    async def list_groups(self, identity: IdentityContext) -> list[Group]:
        """请求者所在的所有组（以组侧成员列表为准）"""
        return await self._stores.group_store.list_groups_for_member(identity.subject_id)

    async def add_member(self, identity: IdentityContext, group_id: str, user_id: str) -> Group:
        return await self._membership.add_member(group_id, user_id, identity.subject_id)

    async def remove_member(
        self,
        identity: IdentityContext,
        group_id: str,
        user_id: str,
    ) -> Group:
        return await self._membership.remove_member(group_id, user_id, identity.subject_id)

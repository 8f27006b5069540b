"""MembershipManager -- 协作组成员增删

成员关系同时存放在两处：Group.members（权威来源）与 User.groups（镜像）。
两处写入之间没有跨集合事务：
1. 先写组侧，失败则整个操作失败
2. 再尽力写用户侧镜像，失败仅记录日志，不回滚组侧

镜像落后的用户可通过 reconcile_memberships 修复。
读-改-写之间不加锁，也没有版本号校验，并发修改同一组可能丢失更新。
"""

from datetime import UTC, datetime

import structlog

from .access.roles import resolve_group_role
from .exceptions import ConflictError, EntityNotFoundError, ForbiddenError
from .models.enums import GroupRole
from .models.group import Group
from .store.group_store import GroupStore
from .store.user_store import UserStore

log = structlog.get_logger()


class MembershipManager:
    """协作组成员一致性管理"""

    def __init__(self, group_store: GroupStore, user_store: UserStore) -> None:
        self._groups = group_store
        self._users = user_store

    async def add_member(self, group_id: str, user_id: str, requester_id: str) -> Group:
        """添加成员

        Args:
            group_id: 目标组
            user_id: 被添加的用户
            requester_id: 请求者 subject 标识

        Returns:
            更新后的 Group

        Raises:
            EntityNotFoundError: 组或用户不存在
            ForbiddenError: 请求者既不是 creator 也不是成员
            ConflictError: 用户已是成员
        """
        group = await self._get_group(group_id)

        if resolve_group_role(group, requester_id) == GroupRole.UNRELATED:
            raise ForbiddenError("You don't have permission to add members to this group")

        if user_id in group.members:
            raise ConflictError("User is already a member of this group")

        if await self._users.get_user(user_id) is None:
            raise EntityNotFoundError("user", user_id)

        updated = group.model_copy(
            update={
                "members": [*group.members, user_id],
                "updated_at": datetime.now(UTC),
            }
        )
        await self._groups.update_members(updated)
        log.info(
            "group_member_added",
            group_id=group_id,
            user_id=user_id,
            requester_id=requester_id,
        )

        await self.mirror_join(user_id, group_id)
        return updated

    async def remove_member(self, group_id: str, user_id: str, requester_id: str) -> Group:
        """移除成员

        creator 只能移除他人；任何人都可以移除自己；creator 本身永远不可移除。

        Raises:
            EntityNotFoundError: 组不存在
            ForbiddenError: 试图移除 creator，或请求者无权移除该成员
            ConflictError: 用户不是成员
        """
        group = await self._get_group(group_id)

        if user_id == group.creator_id:
            raise ForbiddenError("Creator cannot be removed from the group")

        is_self_removal = user_id == requester_id
        if not is_self_removal and resolve_group_role(group, requester_id) != GroupRole.CREATOR:
            raise ForbiddenError("You don't have permission to remove this member from the group")

        if user_id not in group.members:
            raise ConflictError("User is not a member of this group")

        updated = group.model_copy(
            update={
                "members": [member for member in group.members if member != user_id],
                "updated_at": datetime.now(UTC),
            }
        )
        await self._groups.update_members(updated)
        log.info(
            "group_member_removed",
            group_id=group_id,
            user_id=user_id,
            requester_id=requester_id,
        )

        await self.mirror_leave(user_id, group_id)
        return updated

    async def mirror_join(self, user_id: str, group_id: str) -> None:
        """尽力把 group_id 写入用户侧镜像，失败只记日志"""
        try:
            user = await self._users.get_user(user_id)
            if user is None:
                log.warning("membership_mirror_user_missing", user_id=user_id, group_id=group_id)
                return
            if group_id in user.groups:
                return
            await self._users.update_groups(user_id, [*user.groups, group_id])
        except Exception as e:
            log.warning(
                "membership_mirror_write_failed",
                action="join",
                user_id=user_id,
                group_id=group_id,
                error_type=type(e).__name__,
            )

    async def mirror_leave(self, user_id: str, group_id: str) -> None:
        """尽力把 group_id 从用户侧镜像移除，失败只记日志"""
        try:
            user = await self._users.get_user(user_id)
            if user is None:
                log.warning("membership_mirror_user_missing", user_id=user_id, group_id=group_id)
                return
            if group_id not in user.groups:
                return
            await self._users.update_groups(
                user_id, [gid for gid in user.groups if gid != group_id]
            )
        except Exception as e:
            log.warning(
                "membership_mirror_write_failed",
                action="leave",
                user_id=user_id,
                group_id=group_id,
                error_type=type(e).__name__,
            )

    async def _get_group(self, group_id: str) -> Group:
        group = await self._groups.get_group(group_id)
        if group is None:
            raise EntityNotFoundError("group", group_id)
        return group

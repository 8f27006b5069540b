"""TaskService -- 任务创建/查询/更新/删除业务逻辑

更新流程：
1. 读取任务，不存在则 NotFound
2. 解析请求者角色，UNRELATED 则 Forbidden
3. 按角色白名单合并字段，校验合并结果
4. 仅写回被接受的字段与 updated_at
"""

from datetime import UTC, datetime

import structlog
from taskshare.core.access import (
    apply_task_update,
    require_task_access,
    requested_changes,
    resolve_task_role,
)
from taskshare.core.exceptions import EntityNotFoundError, ForbiddenError
from taskshare.core.models import (
    IdentityContext,
    Task,
    TaskCreate,
    TaskRole,
    TaskUpdate,
    validate_entity,
)
from taskshare.core.store import StoreGroup
from taskshare.core.visibility import TaskVisibilityAggregator
from ulid import ULID

log = structlog.get_logger()


class TaskService:
    """任务业务服务"""

    def __init__(self, store_group: StoreGroup) -> None:
        self._stores = store_group
        self._visibility = TaskVisibilityAggregator(store_group.task_store)

    async def create_task(self, identity: IdentityContext, request: TaskCreate) -> Task:
        """创建任务，请求者即 owner 与 creator

        Raises:
            InvalidEntityError: 任务数据违反不变量（例如设置了 group_id 却没有 assigned_to）
        """
        now = datetime.now(UTC)
        task = validate_entity(
            Task,
            {
                **request.model_dump(),
                "task_id": str(ULID()),
                "owner_id": identity.subject_id,
                "created_by": identity.subject_id,
                "created_at": now,
                "updated_at": now,
            },
            "Invalid task data",
        )
        await self._stores.task_store.save_task(task)
        log.info("task_created", task_id=task.task_id, owner_id=task.owner_id)
        return task

    async def get_task(self, identity: IdentityContext, task_id: str) -> Task:
        """查询任务详情，仅 owner 与 collaborator 可见"""
        task = await self._get_task(task_id)
        require_task_access(task, identity.subject_id)
        return task

    async def update_task(
        self,
        identity: IdentityContext,
        task_id: str,
        changes: TaskUpdate,
    ) -> tuple[Task, frozenset[str]]:
        """按角色部分更新任务

        Returns:
            (更新后的 Task, 被接受的字段集合)
        """
        task = await self._get_task(task_id)
        role = require_task_access(task, identity.subject_id)

        updated, accepted = apply_task_update(task, role, changes)

        ignored = set(requested_changes(changes)) - accepted
        if ignored:
            log.info(
                "task_update_fields_ignored",
                task_id=task_id,
                role=role.value,
                ignored=sorted(ignored),
            )

        written = await self._stores.task_store.update_task_fields(
            updated, accepted | {"updated_at"}
        )
        if not written:
            # 读取与写入之间任务被删除
            raise EntityNotFoundError("task", task_id)

        log.info(
            "task_updated",
            task_id=task_id,
            role=role.value,
            accepted=sorted(accepted),
        )
        return updated, accepted

    async def delete_task(self, identity: IdentityContext, task_id: str) -> None:
        """删除任务，仅 owner 可执行"""
        task = await self._get_task(task_id)
        if resolve_task_role(task, identity.subject_id) != TaskRole.OWNER:
            raise ForbiddenError(f"Unauthorized to delete task {task_id}")

        await self._stores.task_store.delete_task(task_id)
        log.info("task_deleted", task_id=task_id)

    async def list_visible_tasks(self, identity: IdentityContext) -> list[Task]:
        """请求者拥有或协作的任务"""
        return await self._visibility.list_visible_tasks(identity.subject_id)

    async def _get_task(self, task_id: str) -> Task:
        task = await self._stores.task_store.get_task(task_id)
        if task is None:
            raise EntityNotFoundError("task", task_id)
        return task

"""部分更新合并引擎

按角色白名单筛选请求字段，合并到已有 Task，再对合并结果整体校验不变量。

字段级别按角色"部分接受"（不允许的字段静默忽略），
不变量级别"全有或全无"（合并结果非法则整个请求拒绝）。
"""

from datetime import UTC, datetime
from typing import Any

from ..exceptions import ForbiddenError
from ..models.enums import TaskRole
from ..models.task import Task, TaskUpdate
from ..models.validation import validate_entity

# 内容字段：owner 与 collaborator 均可修改
CONTENT_FIELDS: frozenset[str] = frozenset(
    {"title", "description", "status", "time_until_due_s", "category", "remind_me"}
)

# 委派结构字段：仅 owner 可修改，防止 collaborator 越权改派
DELEGATION_FIELDS: frozenset[str] = frozenset({"group_id", "assigned_to", "collaborators"})

ROLE_FIELD_POLICY: dict[TaskRole, frozenset[str]] = {
    TaskRole.OWNER: CONTENT_FIELDS | DELEGATION_FIELDS,
    TaskRole.COLLABORATOR: CONTENT_FIELDS,
}


def requested_changes(changes: TaskUpdate) -> dict[str, Any]:
    """提取请求中真正要求修改的字段

    空字符串 / 0 / None 表示"不修改"；
    group_id、assigned_to、collaborators 只要不是 None 即视为请求修改。
    """
    requested: dict[str, Any] = {}
    for field in ("title", "description", "status", "category"):
        value = getattr(changes, field)
        if value != "":
            requested[field] = value
    if changes.time_until_due_s != 0:
        requested["time_until_due_s"] = changes.time_until_due_s
    for field in ("remind_me", "group_id", "assigned_to", "collaborators"):
        value = getattr(changes, field)
        if value is not None:
            requested[field] = value
    return requested


def apply_task_update(
    task: Task,
    role: TaskRole,
    changes: TaskUpdate,
    now: datetime | None = None,
) -> tuple[Task, frozenset[str]]:
    """将部分更新合并到任务

    Args:
        task: 已存在的任务
        role: 请求者相对任务的角色
        changes: 请求的字段修改
        now: 更新时间，缺省取当前 UTC 时间

    Returns:
        (合并后的新 Task, 被接受的字段集合)；原 task 不会被修改

    Raises:
        ForbiddenError: role 为 UNRELATED
        InvalidEntityError: 合并结果违反 Task 不变量
    """
    allowed = ROLE_FIELD_POLICY.get(role)
    if allowed is None:
        raise ForbiddenError(f"Unauthorized to modify task {task.task_id}")

    requested = requested_changes(changes)
    accepted = {field: value for field, value in requested.items() if field in allowed}

    merged = task.model_dump()
    merged.update(accepted)
    merged["updated_at"] = now or datetime.now(UTC)

    updated = validate_entity(Task, merged, "Invalid task data")

    return updated, frozenset(accepted)

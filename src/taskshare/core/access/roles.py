"""角色解析

对已取回的 Task / Group 计算请求者角色，纯函数，无副作用。
实体的读取与"不存在"判断由调用方负责。
"""

from ..exceptions import ForbiddenError
from ..models.enums import GroupRole, TaskRole
from ..models.group import Group
from ..models.task import Task


def resolve_task_role(task: Task, subject_id: str) -> TaskRole:
    """计算请求者相对任务的角色

    owner 优先于 collaborator：同时出现在两处时视为 OWNER。
    """
    if task.owner_id == subject_id:
        return TaskRole.OWNER
    if subject_id in task.collaborators:
        return TaskRole.COLLABORATOR
    return TaskRole.UNRELATED


def resolve_group_role(group: Group, subject_id: str) -> GroupRole:
    """计算请求者相对协作组的角色"""
    if group.creator_id == subject_id:
        return GroupRole.CREATOR
    if subject_id in group.members:
        return GroupRole.MEMBER
    return GroupRole.UNRELATED


def require_task_access(task: Task, subject_id: str) -> TaskRole:
    """解析角色，UNRELATED 时抛出 ForbiddenError"""
    role = resolve_task_role(task, subject_id)
    if role == TaskRole.UNRELATED:
        raise ForbiddenError(f"Unauthorized to access task {task.task_id}")
    return role


def require_group_access(group: Group, subject_id: str) -> GroupRole:
    """解析角色，UNRELATED 时抛出 ForbiddenError"""
    role = resolve_group_role(group, subject_id)
    if role == GroupRole.UNRELATED:
        raise ForbiddenError(f"You are not a member of group {group.group_id}")
    return role

"""TaskShare Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .enums import DEFAULT_USER_ROLE, GroupRole, TaskRole, TaskStatus
from .group import Group, GroupCreate
from .identity import IdentityContext
from .task import Task, TaskCreate, TaskUpdate, dedupe_ids
from .user import User, UserCreate
from .validation import validate_entity

__all__ = [
    # 枚举
    "TaskStatus",
    "TaskRole",
    "GroupRole",
    "DEFAULT_USER_ROLE",
    # 身份
    "IdentityContext",
    # Task
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "dedupe_ids",
    # Group
    "Group",
    "GroupCreate",
    # User
    "User",
    "UserCreate",
    # 校验
    "validate_entity",
]

"""枚举定义

包含任务状态 TaskStatus，以及请求者相对任务/组的角色 TaskRole、GroupRole。
"""

from enum import StrEnum


class TaskStatus(StrEnum):
    """Task 状态"""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TaskRole(StrEnum):
    """请求者相对某个 Task 的角色"""

    OWNER = "owner"
    COLLABORATOR = "collaborator"
    # 终态角色：任何后续操作都必须以 Forbidden 失败
    UNRELATED = "unrelated"


class GroupRole(StrEnum):
    """请求者相对某个 Group 的角色"""

    CREATOR = "creator"
    MEMBER = "member"
    UNRELATED = "unrelated"


# 用户角色标签缺省值
DEFAULT_USER_ROLE = "user"

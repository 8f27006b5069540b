"""核心异常体系

每个异常对应一种错误类别，调用方（如 HTTP 层）据 code 决定传输层状态码。
"""

from typing import Any


class TaskShareError(Exception):
    """核心层基础异常"""

    code = "INTERNAL"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class EntityNotFoundError(TaskShareError):
    """实体不存在"""

    code = "NOT_FOUND"

    def __init__(self, entity: str, entity_id: str) -> None:
        """
        Args:
            entity: 实体类型（task / group / user）
            entity_id: 实体 ID
        """
        super().__init__(f"{entity} with id {entity_id} does not exist")
        self.entity = entity
        self.entity_id = entity_id


class ForbiddenError(TaskShareError):
    """请求者角色不足以执行该操作"""

    code = "FORBIDDEN"


class ConflictError(TaskShareError):
    """状态已成立（重复成员、用户名冲突等）"""

    code = "CONFLICT"


class InvalidEntityError(TaskShareError):
    """合并或创建后的实体违反不变量

    整个请求被拒绝，实体不做任何修改。
    """

    code = "INVALID_ENTITY"

    def __init__(self, message: str, details: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.details = details or []


class StoreUnavailableError(TaskShareError):
    """存储协作方故障

    核心层不做本地重试，重试策略归存储层所有。
    """

    code = "UNAVAILABLE"

    def __init__(self, operation: str, original_error: Exception) -> None:
        super().__init__(f"Store unavailable during {operation}: {type(original_error).__name__}")
        self.operation = operation
        self.original_error = original_error

"""访问控制 -- 角色解析与按角色的部分更新合并"""

from .merge import (
    CONTENT_FIELDS,
    DELEGATION_FIELDS,
    ROLE_FIELD_POLICY,
    apply_task_update,
    requested_changes,
)
from .roles import (
    require_group_access,
    require_task_access,
    resolve_group_role,
    resolve_task_role,
)

__all__ = [
    "resolve_task_role",
    "resolve_group_role",
    "require_task_access",
    "require_group_access",
    "apply_task_update",
    "requested_changes",
    "CONTENT_FIELDS",
    "DELEGATION_FIELDS",
    "ROLE_FIELD_POLICY",
]

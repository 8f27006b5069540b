"""EntityContextMiddleware -- 把路径中的 task_id / group_id 绑定到日志上下文"""

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# 路径段 -> 日志字段名
_ENTITY_SEGMENTS = {
    "tasks": "task_id",
    "groups": "group_id",
}


class EntityContextMiddleware(BaseHTTPMiddleware):
    """实体级上下文中间件"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 从 /api/tasks/{task_id} 或 /api/groups/{group_id}/... 提取
        parts = request.url.path.strip("/").split("/")
        for i, part in enumerate(parts[:-1]):
            key = _ENTITY_SEGMENTS.get(part)
            if key is not None:
                structlog.contextvars.bind_contextvars(**{key: parts[i + 1]})
                break

        return await call_next(request)

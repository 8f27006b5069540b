"""依赖注入模块 -- 通过 FastAPI Depends 注入 Store 实例与请求者身份

Store 实例通过 app.state 管理，在 lifespan 中初始化/清理。
"""

import structlog
from fastapi import Request
from taskshare.core.config import get_identity_header
from taskshare.core.models import IdentityContext
from taskshare.core.store import StoreGroup

from .errors import UnauthenticatedError


def get_store_group(request: Request) -> StoreGroup:
    """从 app.state 获取 StoreGroup 实例"""
    return request.app.state.store_group


def get_identity(request: Request) -> IdentityContext:
    """读取上游凭据层写入的 subject 标识，并绑定到 structlog context"""
    subject_id = request.headers.get(get_identity_header(), "").strip()
    if not subject_id:
        raise UnauthenticatedError("Subject identifier not found in request")

    structlog.contextvars.bind_contextvars(subject_id=subject_id)
    return IdentityContext(subject_id=subject_id)

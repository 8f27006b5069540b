"""FastAPI 应用主文件

app 创建 + lifespan 管理：DB 初始化/关闭 + 路由注册。
存储句柄由 lifespan 持有，经依赖注入传给各服务。
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from taskshare.core.config import get_db_path
from taskshare.core.store import create_store_group

from .errors import register_error_handlers
from .middleware.entity_mw import EntityContextMiddleware
from .middleware.logging_config import setup_logging
from .middleware.logging_mw import LoggingMiddleware
from .routes import groups, health, tasks, users

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理：启动时初始化 Store，关闭时清理连接"""
    db_path = get_db_path()
    app.state.store_group = await create_store_group(db_path)
    log.info("store_initialized", db_path=db_path)

    yield

    if hasattr(app.state, "store_group") and app.state.store_group:
        await app.state.store_group.conn.close()


def create_app() -> FastAPI:
    """创建 FastAPI 应用实例"""
    app = FastAPI(
        title="TaskShare Gateway",
        version="0.1.0",
        description="共享任务与协作组 API",
        lifespan=lifespan,
    )

    # 注册中间件（后注册的先执行：Logging 清理上下文后，Entity 再绑定）
    app.add_middleware(EntityContextMiddleware)
    app.add_middleware(LoggingMiddleware)

    setup_logging()
    register_error_handlers(app)

    app.include_router(users.router, tags=["users"])
    app.include_router(tasks.router, tags=["tasks"])
    app.include_router(groups.router, tags=["groups"])
    app.include_router(health.router, tags=["health"])

    return app


# 默认 app 实例（uvicorn 入口）
app = create_app()

"""structlog 配置模块

dev 模式：pretty print 可读输出
json 模式：结构化 JSON 输出

所有事件在渲染前脱敏：凭据相关字段一律替换为 "***"。
"""

import logging
import os
from collections.abc import MutableMapping
from typing import Any

import structlog

_SENSITIVE_KEYS = frozenset({"credential_hash", "password", "authorization"})

# 过于啰嗦的第三方 logger
_QUIET_LOGGERS = ("aiosqlite",)


def redact_credentials(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """凭据字段脱敏"""
    for key in _SENSITIVE_KEYS & event_dict.keys():
        event_dict[key] = "***"
    return event_dict


def setup_logging() -> None:
    """初始化 structlog 配置

    环境变量：
    - TASKSHARE_LOG_FORMAT: "json" 为结构化输出，其余值（默认 "dev"）为可读输出
    - TASKSHARE_LOG_LEVEL: 根 logger 级别，默认 INFO
    """
    log_format = os.environ.get("TASKSHARE_LOG_FORMAT", "dev").lower()
    log_level = getattr(logging, os.environ.get("TASKSHARE_LOG_LEVEL", "INFO").upper(), logging.INFO)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        redact_credentials,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    renderer: structlog.types.Processor
    if log_format == "json":
        renderer = structlog.processors.JSONRenderer(ensure_ascii=False)
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

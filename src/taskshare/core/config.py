"""配置常量模块 -- 可通过环境变量覆盖"""

import os
from pathlib import Path


def _get_base_dir() -> Path:
    """获取项目 data 基础目录"""
    return Path(os.environ.get("TASKSHARE_DATA_DIR", "data"))


def get_db_path() -> str:
    """获取 SQLite 数据库路径"""
    return os.environ.get(
        "TASKSHARE_DB_PATH",
        str(_get_base_dir() / "sqlite" / "taskshare.db"),
    )


def get_identity_header() -> str:
    """获取携带已校验 subject 标识的请求头名称"""
    return os.environ.get("TASKSHARE_IDENTITY_HEADER", "X-Subject-ID")


# 文档集合名称
TASKS_COLLECTION = "tasks"
GROUPS_COLLECTION = "groups"
USERS_COLLECTION = "users"

"""CLI 入口模块 -- python -m taskshare.core <command>

支持的命令：
  init-db                 初始化数据库表结构
  reconcile-memberships   以组侧成员列表为准修复用户侧镜像
"""

import asyncio
import sys

from .config import get_db_path


def main() -> None:
    """CLI 主入口"""
    if len(sys.argv) < 2:
        print("用法: python -m taskshare.core <command>")
        print("命令:")
        print("  init-db                 初始化数据库表结构")
        print("  reconcile-memberships   以组侧成员列表为准修复用户侧镜像")
        sys.exit(1)

    command = sys.argv[1]

    if command == "init-db":
        asyncio.run(init_database())
    elif command == "reconcile-memberships":
        asyncio.run(reconcile())
    else:
        print(f"未知命令: {command}")
        print("可用命令: init-db, reconcile-memberships")
        sys.exit(1)


async def init_database() -> None:
    """创建数据库并初始化表结构"""
    from .store import create_store_group

    db_path = get_db_path()
    print(f"数据库路径: {db_path}")

    store_group = await create_store_group(db_path)
    await store_group.conn.close()
    print("初始化完成")


async def reconcile() -> None:
    """执行成员关系镜像修复"""
    from .reconcile import reconcile_memberships
    from .store import create_store_group

    db_path = get_db_path()
    print(f"数据库路径: {db_path}")
    print("开始修复成员关系镜像...")

    store_group = await create_store_group(db_path)

    try:
        report = await reconcile_memberships(
            store_group.group_store,
            store_group.user_store,
        )
        print(
            f"修复完成，扫描 {report.users_scanned} 个用户，"
            f"修复 {report.users_repaired} 个镜像"
        )
    finally:
        await store_group.conn.close()


if __name__ == "__main__":
    main()

"""成员关系镜像修复

以 Group.members 为权威来源，重新推导每个用户的 User.groups 镜像，
修复尽力写入失败后遗留的不一致。
"""

import time

import structlog
from pydantic import BaseModel

from .store.group_store import GroupStore
from .store.user_store import UserStore

log = structlog.get_logger()


class ReconcileReport(BaseModel):
    """修复结果统计"""

    users_scanned: int = 0
    users_repaired: int = 0


def _rebuild_mirror(current: list[str], expected: list[str]) -> list[str]:
    """保留仍然有效的现有顺序，再追加缺失的组"""
    expected_set = set(expected)
    kept = [gid for gid in current if gid in expected_set]
    kept_set = set(kept)
    return kept + [gid for gid in expected if gid not in kept_set]


async def reconcile_memberships(
    group_store: GroupStore,
    user_store: UserStore,
) -> ReconcileReport:
    """遍历所有用户，修复与组侧不一致的镜像

    Returns:
        ReconcileReport 统计
    """
    start_time = time.monotonic()
    report = ReconcileReport()

    await log.ainfo("membership_reconcile_started")

    for user in await user_store.list_users():
        report.users_scanned += 1
        groups = await group_store.list_groups_for_member(user.user_id)
        expected = [group.group_id for group in groups]
        if set(expected) == set(user.groups) and len(user.groups) == len(expected):
            continue

        repaired = _rebuild_mirror(user.groups, expected)
        await user_store.update_groups(user.user_id, repaired)
        report.users_repaired += 1
        log.info(
            "membership_mirror_repaired",
            user_id=user.user_id,
            before=user.groups,
            after=repaired,
        )

    elapsed_ms = int((time.monotonic() - start_time) * 1000)
    await log.ainfo(
        "membership_reconcile_completed",
        users_scanned=report.users_scanned,
        users_repaired=report.users_repaired,
        elapsed_ms=elapsed_ms,
    )
    return report

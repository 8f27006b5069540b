"""TaskVisibilityAggregator -- 用户可见任务的 scatter-gather 查询

两条互不依赖的查询并发执行：
(a) owner_id == 用户
(b) collaborators 包含用户
结果按 (a) 在前 (b) 在后拼接，并按 task_id 保留首次出现去重。
"""

import asyncio

import structlog

from .models.task import Task
from .store.task_store import TaskStore

log = structlog.get_logger()


def dedupe_tasks(tasks: list[Task]) -> list[Task]:
    """按 task_id 去重，保留首次出现，保持插入顺序"""
    seen: set[str] = set()
    unique: list[Task] = []
    for task in tasks:
        if task.task_id not in seen:
            seen.add(task.task_id)
            unique.append(task)
    return unique


class TaskVisibilityAggregator:
    """汇总用户拥有或协作的任务"""

    def __init__(self, task_store: TaskStore) -> None:
        self._tasks = task_store

    async def list_visible_tasks(self, subject_id: str) -> list[Task]:
        """返回用户可见的任务

        任一查询失败则整体失败，不返回部分结果。
        """
        owned, collaborating = await asyncio.gather(
            self._tasks.list_owned_by(subject_id),
            self._tasks.list_collaborating(subject_id),
        )
        tasks = dedupe_tasks([*owned, *collaborating])
        log.debug(
            "visible_tasks_listed",
            subject_id=subject_id,
            owned=len(owned),
            collaborating=len(collaborating),
            total=len(tasks),
        )
        return tasks

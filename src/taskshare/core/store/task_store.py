"""TaskStore -- tasks 集合的类型化访问"""

from collections.abc import Iterable

from ..config import TASKS_COLLECTION
from ..models.task import Task
from .protocols import DocumentStore
from .records import parse_record, parse_records


class TaskStore:
    """tasks 集合读写"""

    def __init__(self, documents: DocumentStore) -> None:
        self._documents = documents

    async def get_task(self, task_id: str) -> Task | None:
        """根据 task_id 查询任务"""
        record = await self._documents.get(TASKS_COLLECTION, task_id)
        if record is None:
            return None
        return parse_record(Task, record, "get_task")

    async def save_task(self, task: Task) -> None:
        """整体写入任务"""
        await self._documents.set(
            TASKS_COLLECTION,
            task.task_id,
            task.model_dump(mode="json"),
        )

    async def update_task_fields(self, task: Task, fields: Iterable[str]) -> bool:
        """仅写回 task 上指定字段的当前值"""
        record = task.model_dump(mode="json", include=set(fields))
        return await self._documents.merge_fields(TASKS_COLLECTION, task.task_id, record)

    async def delete_task(self, task_id: str) -> bool:
        """删除任务"""
        return await self._documents.delete(TASKS_COLLECTION, task_id)

    async def list_owned_by(self, owner_id: str) -> list[Task]:
        """owner_id 等于给定用户的任务"""
        records = await self._documents.query_equals(TASKS_COLLECTION, "owner_id", owner_id)
        return parse_records(Task, records, "list_owned_by")

    async def list_collaborating(self, user_id: str) -> list[Task]:
        """collaborators 包含给定用户的任务"""
        records = await self._documents.query_array_contains(
            TASKS_COLLECTION, "collaborators", user_id
        )
        return parse_records(Task, records, "list_collaborating")

"""GroupStore -- groups 集合的类型化访问"""

from ..config import GROUPS_COLLECTION
from ..models.group import Group
from .protocols import DocumentStore
from .records import parse_record, parse_records


class GroupStore:
    """groups 集合读写"""

    def __init__(self, documents: DocumentStore) -> None:
        self._documents = documents

    async def get_group(self, group_id: str) -> Group | None:
        record = await self._documents.get(GROUPS_COLLECTION, group_id)
        if record is None:
            return None
        return parse_record(Group, record, "get_group")

    async def save_group(self, group: Group) -> None:
        await self._documents.set(
            GROUPS_COLLECTION,
            group.group_id,
            group.model_dump(mode="json"),
        )

    async def update_members(self, group: Group) -> bool:
        """写回成员列表与 updated_at"""
        record = group.model_dump(mode="json", include={"members", "updated_at"})
        return await self._documents.merge_fields(GROUPS_COLLECTION, group.group_id, record)

    async def list_groups_for_member(self, user_id: str) -> list[Group]:
        """members 包含给定用户的组（组侧为成员关系的权威来源）"""
        records = await self._documents.query_array_contains(
            GROUPS_COLLECTION, "members", user_id
        )
        return parse_records(Group, records, "list_groups_for_member")

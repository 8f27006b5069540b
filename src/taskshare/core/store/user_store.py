"""UserStore -- users 集合的类型化访问"""

from ..config import USERS_COLLECTION
from ..models.user import User
from .protocols import DocumentStore
from .records import parse_record, parse_records


class UserStore:
    """users 集合读写"""

    def __init__(self, documents: DocumentStore) -> None:
        self._documents = documents

    async def get_user(self, user_id: str) -> User | None:
        record = await self._documents.get(USERS_COLLECTION, user_id)
        if record is None:
            return None
        return parse_record(User, record, "get_user")

    async def save_user(self, user: User) -> None:
        """整体写入用户；credential_hash 不参与对外序列化，需要单独落库"""
        record = user.model_dump(mode="json")
        record["credential_hash"] = user.credential_hash
        await self._documents.set(USERS_COLLECTION, user.user_id, record)

    async def find_by_username(self, username: str) -> list[User]:
        records = await self._documents.query_equals(USERS_COLLECTION, "username", username)
        return parse_records(User, records, "find_by_username")

    async def find_by_email(self, email: str) -> list[User]:
        records = await self._documents.query_equals(USERS_COLLECTION, "email", email)
        return parse_records(User, records, "find_by_email")

    async def update_groups(self, user_id: str, groups: list[str]) -> bool:
        """写回用户侧的组镜像列表"""
        return await self._documents.merge_fields(USERS_COLLECTION, user_id, {"groups": groups})

    async def list_users(self) -> list[User]:
        records = await self._documents.scan(USERS_COLLECTION)
        return parse_records(User, records, "list_users")

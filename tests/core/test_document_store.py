"""SqliteDocumentStore 单元测试

测试内容：
1. get / set / merge_fields / delete
2. 等值查询与数组包含查询按写入顺序返回
3. aiosqlite 异常转换为 StoreUnavailableError
"""

import aiosqlite
import pytest
from taskshare.core.exceptions import StoreUnavailableError
from taskshare.core.store import StoreGroup
from taskshare.core.store.document_store import equals_query


class TestDocumentStore:
    async def test_get_missing_returns_none(self, store_group: StoreGroup):
        assert await store_group.documents.get("tasks", "nope") is None

    async def test_set_and_get(self, store_group: StoreGroup):
        docs = store_group.documents
        await docs.set("tasks", "T1", {"task_id": "T1", "title": "中文标题", "tags": ["a"]})
        assert await docs.get("tasks", "T1") == {
            "task_id": "T1",
            "title": "中文标题",
            "tags": ["a"],
        }

    async def test_set_replaces_whole_document(self, store_group: StoreGroup):
        docs = store_group.documents
        await docs.set("tasks", "T1", {"a": 1, "b": 2})
        await docs.set("tasks", "T1", {"a": 3})
        assert await docs.get("tasks", "T1") == {"a": 3}

    async def test_collections_are_isolated(self, store_group: StoreGroup):
        docs = store_group.documents
        await docs.set("tasks", "X", {"kind": "task"})
        await docs.set("groups", "X", {"kind": "group"})
        assert (await docs.get("tasks", "X"))["kind"] == "task"
        assert (await docs.get("groups", "X"))["kind"] == "group"

    async def test_merge_fields_only_touches_given_fields(self, store_group: StoreGroup):
        docs = store_group.documents
        await docs.set("tasks", "T1", {"title": "old", "status": "pending", "members": ["a"]})
        written = await docs.merge_fields(
            "tasks", "T1", {"title": "new", "members": ["a", "b"], "group_id": None}
        )
        assert written is True
        assert await docs.get("tasks", "T1") == {
            "title": "new",
            "status": "pending",
            "members": ["a", "b"],
            "group_id": None,
        }

    async def test_merge_fields_on_missing_document(self, store_group: StoreGroup):
        assert await store_group.documents.merge_fields("tasks", "nope", {"a": 1}) is False

    async def test_query_equals_in_insertion_order(self, store_group: StoreGroup):
        docs = store_group.documents
        await docs.set("tasks", "T2", {"owner_id": "alice", "n": 2})
        await docs.set("tasks", "T1", {"owner_id": "alice", "n": 1})
        await docs.set("tasks", "T3", {"owner_id": "bob", "n": 3})
        # 覆盖写不改变原有顺序
        await docs.set("tasks", "T2", {"owner_id": "alice", "n": 22})

        results = await docs.query_equals("tasks", "owner_id", "alice")
        assert [r["n"] for r in results] == [22, 1]

    async def test_query_array_contains(self, store_group: StoreGroup):
        docs = store_group.documents
        await docs.set("tasks", "T1", {"collaborators": ["bob", "carol"]})
        await docs.set("tasks", "T2", {"collaborators": ["carol"]})
        await docs.set("tasks", "T3", {"collaborators": []})
        await docs.set("tasks", "T4", {"other": "no array"})
        await docs.set("tasks", "T5", {"collaborators": ["bobby"]})

        bob = await docs.query_array_contains("tasks", "collaborators", "bob")
        carol = await docs.query_array_contains("tasks", "collaborators", "carol")
        assert bob == [{"collaborators": ["bob", "carol"]}]
        assert len(carol) == 2

    async def test_scan_and_delete(self, store_group: StoreGroup):
        docs = store_group.documents
        await docs.set("users", "A", {"id": "A"})
        await docs.set("users", "B", {"id": "B"})
        assert await docs.delete("users", "A") is True
        assert await docs.delete("users", "A") is False
        assert await docs.scan("users") == [{"id": "B"}]

    async def test_sqlite_error_surfaces_as_unavailable(
        self, store_group: StoreGroup, monkeypatch
    ):
        async def broken_execute(*args, **kwargs):
            raise aiosqlite.OperationalError("database is locked")

        monkeypatch.setattr(store_group.conn, "execute", broken_execute)

        with pytest.raises(StoreUnavailableError) as exc_info:
            await store_group.documents.get("tasks", "T1")
        assert exc_info.value.code == "UNAVAILABLE"
        assert exc_info.value.operation == "get"

    async def test_write_error_rolls_back_and_surfaces(
        self, store_group: StoreGroup, monkeypatch
    ):
        async def broken_execute(*args, **kwargs):
            raise aiosqlite.OperationalError("disk I/O error")

        monkeypatch.setattr(store_group.conn, "execute", broken_execute)

        with pytest.raises(StoreUnavailableError):
            await store_group.documents.set("tasks", "T1", {"a": 1})

        monkeypatch.undo()
        assert await store_group.documents.get("tasks", "T1") is None


class TestIndexedQueries:
    """索引字段的等值查询命中表达式索引"""

    @pytest.mark.parametrize(
        ("collection", "field", "index_name"),
        [
            ("tasks", "owner_id", "idx_documents_owner"),
            ("users", "username", "idx_documents_username"),
        ],
    )
    async def test_query_plan_uses_expression_index(
        self, store_group: StoreGroup, collection: str, field: str, index_name: str
    ):
        sql, params = equals_query(collection, field, "alice")
        cursor = await store_group.conn.execute(f"EXPLAIN QUERY PLAN {sql}", params)
        plan = " ".join(str(row[-1]) for row in await cursor.fetchall())
        assert index_name in plan

    async def test_unindexed_field_still_queryable(self, store_group: StoreGroup):
        docs = store_group.documents
        await docs.set("users", "A", {"email": "a@example.com"})
        await docs.set("users", "B", {"email": "b@example.com"})
        assert await docs.query_equals("users", "email", "b@example.com") == [
            {"email": "b@example.com"}
        ]

"""Store Protocol 接口定义

核心层通过窄接口访问文档存储：按 ID 读写、按字段等值查询、按数组包含查询。
使用 Python Protocol 实现结构化子类型（duck typing）。
"""

from typing import Any, Protocol

Record = dict[str, Any]


class DocumentStore(Protocol):
    """文档存储接口

    所有方法在存储故障时抛出 StoreUnavailableError；
    超时与重试策略归具体实现所有。
    """

    async def get(self, collection: str, doc_id: str) -> Record | None:
        """按 ID 读取文档，不存在返回 None"""
        ...

    async def set(self, collection: str, doc_id: str, record: Record) -> None:
        """整体替换（或创建）文档"""
        ...

    async def merge_fields(self, collection: str, doc_id: str, fields: Record) -> bool:
        """部分字段更新，文档不存在返回 False"""
        ...

    async def query_equals(self, collection: str, field: str, value: Any) -> list[Record]:
        """查询 field == value 的文档，按写入顺序返回"""
        ...

    async def query_array_contains(
        self,
        collection: str,
        field: str,
        value: Any,
    ) -> list[Record]:
        """查询数组字段 field 包含 value 的文档，按写入顺序返回"""
        ...

    async def scan(self, collection: str) -> list[Record]:
        """遍历集合内所有文档（维护任务使用）"""
        ...

    async def delete(self, collection: str, doc_id: str) -> bool:
        """删除文档，不存在返回 False"""
        ...

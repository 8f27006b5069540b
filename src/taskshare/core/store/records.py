"""存储记录到领域模型的转换

无法通过模型校验的记录视为存储侧损坏：记录日志并抛出 StoreUnavailableError，
单条读取与列表查询一致处理。
"""

from collections.abc import Iterable
from typing import TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from ..exceptions import StoreUnavailableError
from .protocols import Record

log = structlog.get_logger()

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_record(model: type[ModelT], record: Record, operation: str) -> ModelT:
    """校验单条记录

    Raises:
        StoreUnavailableError: 记录无法还原为 model
    """
    try:
        return model.model_validate(record)
    except ValidationError as e:
        log.error(
            "stored_record_invalid",
            operation=operation,
            model=model.__name__,
            error_count=e.error_count(),
        )
        raise StoreUnavailableError(operation, e) from e


def parse_records(model: type[ModelT], records: Iterable[Record], operation: str) -> list[ModelT]:
    return [parse_record(model, record, operation) for record in records]

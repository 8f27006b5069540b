"""实体构造校验

把 pydantic 校验失败统一转换为 InvalidEntityError。
"""

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from ..exceptions import InvalidEntityError

M = TypeVar("M", bound=BaseModel)


def validate_entity(model: type[M], data: dict[str, Any], message: str) -> M:
    """校验并构造实体

    Raises:
        InvalidEntityError: data 违反模型约束或不变量
    """
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise InvalidEntityError(
            message,
            details=e.errors(include_url=False, include_context=False, include_input=False),
        ) from e

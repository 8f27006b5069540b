"""请求者身份上下文

由外部凭据层校验后产出的 subject 标识，贯穿每一次核心操作。
"""

from pydantic import BaseModel, ConfigDict, Field


class IdentityContext(BaseModel):
    """请求者身份"""

    model_config = ConfigDict(frozen=True)

    subject_id: str = Field(min_length=1, description="已校验的请求者 subject 标识")

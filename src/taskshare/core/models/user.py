"""User 数据模型"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from .enums import DEFAULT_USER_ROLE

USERNAME_PATTERN = r"^[a-zA-Z0-9_-]+$"
EMAIL_PATTERN = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"


class User(BaseModel):
    """用户

    credential_hash 由外部凭据层生成，只落库，不对外序列化。
    groups 是 Group.members 在用户侧的镜像，可能短暂落后于组侧。
    """

    user_id: str = Field(description="唯一标识，ULID 格式")
    username: str = Field(min_length=3, max_length=20, pattern=USERNAME_PATTERN)
    email: str = Field(pattern=EMAIL_PATTERN)
    role: str = Field(default=DEFAULT_USER_ROLE, description="角色标签")
    credential_hash: str = Field(default="", exclude=True, repr=False)
    groups: list[str] = Field(default_factory=list, description="所属组 ID 镜像")
    created_at: datetime = Field(description="创建时间")

    @field_validator("role", mode="before")
    @classmethod
    def _default_role(cls, value: str | None) -> str:
        return value or DEFAULT_USER_ROLE


class UserCreate(BaseModel):
    """注册用户请求"""

    username: str
    email: str
    credential_hash: str = Field(min_length=1, description="外部凭据层产出的哈希")
    role: str = DEFAULT_USER_ROLE

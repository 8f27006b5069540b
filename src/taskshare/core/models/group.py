"""Group 数据模型"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator, model_validator

from .task import dedupe_ids


class Group(BaseModel):
    """协作组

    不变量：members 非空且始终包含 creator_id。
    """

    group_id: str = Field(description="唯一标识，ULID 格式")
    creator_id: str = Field(min_length=1, description="创建者用户 ID")
    name: str = Field(min_length=1, max_length=100, description="组名")
    description: str = Field(default="", max_length=500, description="组描述")
    members: list[str] = Field(min_length=1, description="成员 ID 列表")
    created_at: datetime = Field(description="创建时间")
    updated_at: datetime = Field(description="更新时间")

    @field_validator("members")
    @classmethod
    def _dedupe_members(cls, value: list[str]) -> list[str]:
        return dedupe_ids(value)

    @model_validator(mode="after")
    def _creator_is_member(self) -> "Group":
        if self.creator_id not in self.members:
            raise ValueError("creator 必须是组成员")
        return self


class GroupCreate(BaseModel):
    """创建协作组请求"""

    name: str = Field(description="组名")
    description: str = Field(default="", description="组描述")

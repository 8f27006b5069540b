"""Task 数据模型

Task 可以属于单一 owner、委派给协作组并指定组内执行人，
并由 collaborators 列表中的用户共同编辑内容字段。
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator, model_validator

from .enums import TaskStatus


def dedupe_ids(ids: list[str]) -> list[str]:
    """按首次出现顺序去重"""
    seen: set[str] = set()
    result: list[str] = []
    for item in ids:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


class Task(BaseModel):
    """Task 数据模型

    不变量：group_id 非空时 assigned_to 必须同时非空，
    委派给组的任务必须有具体执行人。
    """

    task_id: str = Field(description="唯一标识，ULID 格式")
    owner_id: str = Field(min_length=1, description="拥有者用户 ID")
    created_by: str = Field(min_length=1, description="创建者用户 ID")
    group_id: str | None = Field(default=None, description="委派的协作组 ID")
    assigned_to: str | None = Field(default=None, description="组内指定执行人 ID")
    title: str = Field(min_length=1, description="任务标题")
    description: str = Field(min_length=1, description="任务描述")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="当前状态")
    category: str = Field(default="", description="分类（自由文本）")
    time_until_due_s: int = Field(default=0, ge=0, description="距截止时长（秒）")
    remind_me: bool = Field(default=False, description="是否提醒")
    collaborators: list[str] = Field(default_factory=list, description="协作者 ID 列表")
    created_at: datetime = Field(description="创建时间")
    updated_at: datetime = Field(description="更新时间")

    @field_validator("collaborators")
    @classmethod
    def _dedupe_collaborators(cls, value: list[str]) -> list[str]:
        return dedupe_ids(value)

    @model_validator(mode="after")
    def _group_requires_assignee(self) -> "Task":
        if self.group_id and not self.assigned_to:
            raise ValueError("group_id 已设置时必须指定 assigned_to")
        return self


class TaskCreate(BaseModel):
    """创建任务请求

    仅做类型解析；业务不变量由 Task 模型在创建时统一校验。
    """

    title: str = Field(description="任务标题")
    description: str = Field(description="任务描述")
    status: str = Field(default=TaskStatus.PENDING.value, description="初始状态")
    category: str = Field(default="", description="分类")
    time_until_due_s: int = Field(default=0, description="距截止时长（秒）")
    remind_me: bool = Field(default=False, description="是否提醒")
    group_id: str | None = Field(default=None, description="委派的协作组 ID")
    assigned_to: str | None = Field(default=None, description="组内指定执行人 ID")
    collaborators: list[str] = Field(default_factory=list, description="协作者 ID 列表")


class TaskUpdate(BaseModel):
    """部分更新请求

    空字符串 / 0 / None 均表示"不修改"，而不是"清空"。
    group_id / assigned_to 例外：只要不是 None（包括空字符串）即视为请求修改。
    """

    title: str = ""
    description: str = ""
    status: str = ""
    category: str = ""
    time_until_due_s: int = 0
    remind_me: bool | None = None
    group_id: str | None = None
    assigned_to: str | None = None
    collaborators: list[str] | None = None

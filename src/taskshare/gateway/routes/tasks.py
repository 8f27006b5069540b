"""任务路由

GET    /api/tasks: 当前用户拥有或协作的任务
POST   /api/tasks: 创建任务
GET    /api/tasks/{task_id}: 任务详情
PATCH  /api/tasks/{task_id}: 按角色部分更新
DELETE /api/tasks/{task_id}: 删除任务（仅 owner）
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from taskshare.core.models import IdentityContext, Task, TaskCreate, TaskUpdate

from ..deps import get_identity, get_store_group
from ..services.task_service import TaskService

router = APIRouter()


class TaskResponse(BaseModel):
    """单个任务响应"""

    task: Task


class TaskUpdateResponse(BaseModel):
    """部分更新响应，accepted_fields 为实际生效的字段"""

    task: Task
    accepted_fields: list[str]


class TaskListResponse(BaseModel):
    """任务列表响应"""

    tasks: list[Task]


class MessageResponse(BaseModel):
    message: str


@router.get("/api/tasks", response_model=TaskListResponse)
async def list_tasks(
    identity: IdentityContext = Depends(get_identity),
    store_group=Depends(get_store_group),
):
    """owner 任务在前，其后是尚未出现过的协作任务"""
    service = TaskService(store_group)
    tasks = await service.list_visible_tasks(identity)
    return TaskListResponse(tasks=tasks)


@router.post("/api/tasks", response_model=TaskResponse, status_code=201)
async def create_task(
    body: TaskCreate,
    identity: IdentityContext = Depends(get_identity),
    store_group=Depends(get_store_group),
):
    service = TaskService(store_group)
    task = await service.create_task(identity, body)
    return TaskResponse(task=task)


@router.get("/api/tasks/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: str,
    identity: IdentityContext = Depends(get_identity),
    store_group=Depends(get_store_group),
):
    service = TaskService(store_group)
    task = await service.get_task(identity, task_id)
    return TaskResponse(task=task)


@router.patch("/api/tasks/{task_id}", response_model=TaskUpdateResponse)
async def update_task(
    task_id: str,
    body: TaskUpdate,
    identity: IdentityContext = Depends(get_identity),
    store_group=Depends(get_store_group),
):
    """部分更新任务

    - collaborator 提交的委派字段被静默忽略，不报错
    - 合并结果违反不变量时整体返回 400，任务不做任何修改
    """
    service = TaskService(store_group)
    task, accepted = await service.update_task(identity, task_id, body)
    return TaskUpdateResponse(task=task, accepted_fields=sorted(accepted))


@router.delete("/api/tasks/{task_id}", response_model=MessageResponse)
async def delete_task(
    task_id: str,
    identity: IdentityContext = Depends(get_identity),
    store_group=Depends(get_store_group),
):
    service = TaskService(store_group)
    await service.delete_task(identity, task_id)
    return MessageResponse(message="Task deleted successfully")

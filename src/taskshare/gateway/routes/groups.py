"""协作组路由

GET    /api/groups: 当前用户所在的组
POST   /api/groups: 创建组
GET    /api/groups/{group_id}: 组详情（含成员信息）
POST   /api/groups/{group_id}/members/{user_id}: 添加成员
DELETE /api/groups/{group_id}/members/{user_id}: 移除成员
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from taskshare.core.models import Group, GroupCreate, IdentityContext, User

from ..deps import get_identity, get_store_group
from ..services.group_service import GroupService

router = APIRouter()


class GroupResponse(BaseModel):
    group: Group


class GroupDetailResponse(BaseModel):
    """组详情响应，members 为可解析到用户记录的成员"""

    group: Group
    members: list[User]


class GroupListResponse(BaseModel):
    groups: list[Group]


@router.get("/api/groups", response_model=GroupListResponse)
async def list_groups(
    identity: IdentityContext = Depends(get_identity),
    store_group=Depends(get_store_group),
):
    service = GroupService(store_group)
    groups = await service.list_groups(identity)
    return GroupListResponse(groups=groups)


@router.post("/api/groups", response_model=GroupResponse, status_code=201)
async def create_group(
    body: GroupCreate,
    identity: IdentityContext = Depends(get_identity),
    store_group=Depends(get_store_group),
):
    service = GroupService(store_group)
    group = await service.create_group(identity, body)
    return GroupResponse(group=group)


@router.get("/api/groups/{group_id}", response_model=GroupDetailResponse)
async def get_group(
    group_id: str,
    identity: IdentityContext = Depends(get_identity),
    store_group=Depends(get_store_group),
):
    service = GroupService(store_group)
    group, members = await service.get_group(identity, group_id)
    return GroupDetailResponse(group=group, members=members)


@router.post("/api/groups/{group_id}/members/{user_id}", response_model=GroupResponse)
async def add_member(
    group_id: str,
    user_id: str,
    identity: IdentityContext = Depends(get_identity),
    store_group=Depends(get_store_group),
):
    """添加成员：creator 或任一现有成员可执行"""
    service = GroupService(store_group)
    group = await service.add_member(identity, group_id, user_id)
    return GroupResponse(group=group)


@router.delete("/api/groups/{group_id}/members/{user_id}", response_model=GroupResponse)
async def remove_member(
    group_id: str,
    user_id: str,
    identity: IdentityContext = Depends(get_identity),
    store_group=Depends(get_store_group),
):
    """移除成员：creator 移除他人，或成员移除自己；creator 不可被移除"""
    service = GroupService(store_group)
    group = await service.remove_member(identity, group_id, user_id)
    return GroupResponse(group=group)

"""用户路由

POST /api/users: 注册用户（凭据哈希由外部凭据层提供）
GET  /api/user: 当前请求者
GET  /api/users/search?email=: 按邮箱查找
"""

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from taskshare.core.models import IdentityContext, User, UserCreate

from ..deps import get_identity, get_store_group
from ..services.user_service import UserService

router = APIRouter()


class UserResponse(BaseModel):
    """用户响应，credential_hash 不会出现在序列化结果中"""

    user: User


class UserSummary(BaseModel):
    """对其他用户可见的字段，不含组镜像"""

    user_id: str
    username: str
    email: str
    role: str


class UserListResponse(BaseModel):
    users: list[UserSummary]


@router.post("/api/users", response_model=UserResponse, status_code=201)
async def register_user(
    body: UserCreate,
    store_group=Depends(get_store_group),
):
    service = UserService(store_group)
    user = await service.register_user(body)
    return UserResponse(user=user)


@router.get("/api/user", response_model=UserResponse)
async def get_current_user(
    identity: IdentityContext = Depends(get_identity),
    store_group=Depends(get_store_group),
):
    service = UserService(store_group)
    user = await service.get_user(identity.subject_id)
    return UserResponse(user=user)


@router.get("/api/users/search", response_model=UserListResponse)
async def search_users(
    email: str = Query(min_length=1, description="邮箱"),
    identity: IdentityContext = Depends(get_identity),
    store_group=Depends(get_store_group),
):
    service = UserService(store_group)
    users = await service.search_users(email)
    return UserListResponse(
        users=[UserSummary.model_validate(user, from_attributes=True) for user in users]
    )

"""Users API routes: own profile and admin user management."""

from typing import List, Optional

from fastapi import APIRouter, Depends

from app.application.services import user_service
from app.domain.models.user import User, UserRole
from app.domain.repositories.event_repository import EventRepository
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.auth import UserRead, UserUpdate
from app.domain.schemas.base import MessageResponse
from app.interfaces.api.deps import get_current_user, require_admin
from app.interfaces.deps import get_event_repository, get_user_repository

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("/profile", response_model=UserRead)
def get_profile(user: User = Depends(get_current_user)):
    return UserRead.from_user(user)


@router.get("", response_model=List[UserRead])
def list_users(
    role: Optional[UserRole] = None,
    repo: UserRepository = Depends(get_user_repository),
    admin: User = Depends(require_admin),
):
    return [UserRead.from_user(u) for u in user_service.list_users(repo, role)]


@router.get("/stats")
def user_stats(
    repo: UserRepository = Depends(get_user_repository),
    admin: User = Depends(require_admin),
):
    """User counts, overall and per role, for the admin dashboard."""
    return {
        "total": user_service.count_users(repo),
        "by_role": {role.value: user_service.count_users(repo, role) for role in UserRole},
    }


@router.get("/{user_id}", response_model=UserRead)
def get_user(
    user_id: int,
    repo: UserRepository = Depends(get_user_repository),
    admin: User = Depends(require_admin),
):
    return UserRead.from_user(user_service.get_user(repo, user_id))


@router.put("/{user_id}", response_model=UserRead)
def update_user(
    user_id: int,
    body: UserUpdate,
    repo: UserRepository = Depends(get_user_repository),
    admin: User = Depends(require_admin),
):
    return UserRead.from_user(user_service.update_user(repo, user_id, body))


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    repo: UserRepository = Depends(get_user_repository),
    event_repo: EventRepository = Depends(get_event_repository),
    admin: User = Depends(require_admin),
):
    user_service.delete_user(repo, event_repo, user_id)
    return MessageResponse(message="User deleted successfully")

"""Auth API routes: login, register, profile, password and role details."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.infrastructure.database import get_db
from app.application.services.auth_service import authenticate_user, issue_token
from app.application.services import profile_service, user_service
from app.core.exceptions import EntityNotFoundException, ForbiddenException
from app.domain.models.user import User, UserRole
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.auth import (
    ChangePasswordRequest,
    LoginRequest,
    ProfileUpdate,
    RegisterRequest,
    TokenResponse,
    UserRead,
)
from app.domain.schemas.base import MessageResponse
from app.domain.schemas.profile import EventManagerDetails, StudentDetails
from app.interfaces.api.deps import get_current_user
from app.interfaces.deps import get_user_repository

router = APIRouter(prefix="/api/auth", tags=["Auth"])


def _require_role(user: User, role: UserRole, message: str) -> None:
    if user.role != role:
        raise ForbiddenException(message)


@router.post("/login", response_model=TokenResponse)
def login(body: LoginRequest, db: Session = Depends(get_db)):
    user = authenticate_user(db, body.email, body.password, body.role)
    return TokenResponse(token=issue_token(user), user=UserRead.from_user(user))


@router.post("/register", response_model=TokenResponse)
def register(body: RegisterRequest, repo: UserRepository = Depends(get_user_repository)):
    user = user_service.create_user(repo, body)
    return TokenResponse(token=issue_token(user), user=UserRead.from_user(user))


@router.get("/profile", response_model=UserRead)
def get_profile(user: User = Depends(get_current_user)):
    return UserRead.from_user(user)


@router.put("/profile", response_model=UserRead)
def update_profile(
    body: ProfileUpdate,
    repo: UserRepository = Depends(get_user_repository),
    user: User = Depends(get_current_user),
):
    return UserRead.from_user(user_service.update_profile(repo, user, body))


@router.post("/change-password", response_model=MessageResponse)
def change_password(
    body: ChangePasswordRequest,
    repo: UserRepository = Depends(get_user_repository),
    user: User = Depends(get_current_user),
):
    user_service.change_password(repo, user, body.current_password, body.new_password)
    return MessageResponse(message="Password changed successfully")


@router.get("/student-details", response_model=StudentDetails)
def get_student_details(user: User = Depends(get_current_user)):
    _require_role(user, UserRole.STUDENT, "This endpoint is only for students")
    details = profile_service.get_student_details(user)
    if details is None:
        raise EntityNotFoundException("Student details not found")
    return details


@router.put("/student-details", response_model=StudentDetails)
def update_student_details(
    body: StudentDetails,
    repo: UserRepository = Depends(get_user_repository),
    user: User = Depends(get_current_user),
):
    _require_role(user, UserRole.STUDENT, "This endpoint is only for students")
    return profile_service.update_student_details(repo, user, body)


@router.get("/event-manager-details", response_model=EventManagerDetails)
def get_event_manager_details(user: User = Depends(get_current_user)):
    _require_role(user, UserRole.EVENT_MANAGER, "Only event managers can access event manager details")
    details = profile_service.get_event_manager_details(user)
    if details is None:
        raise EntityNotFoundException("Event manager details not found")
    return details


@router.put("/event-manager-details", response_model=EventManagerDetails)
def update_event_manager_details(
    body: EventManagerDetails,
    repo: UserRepository = Depends(get_user_repository),
    user: User = Depends(get_current_user),
):
    _require_role(user, UserRole.EVENT_MANAGER, "Only event managers can update event manager details")
    return profile_service.update_event_manager_details(repo, user, body)

"""User service: account lifecycle for the user directory."""

from typing import List, Optional

import structlog

from app.application.services.auth_service import hash_password, verify_password
from app.core.exceptions import (
    DuplicateEmailException,
    EntityNotFoundException,
    InvalidCredentialsException,
    InvalidStateException,
)
from app.domain.models.profile import EventManager, Student
from app.domain.models.user import User, UserRole
from app.domain.repositories.event_repository import EventRepository
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.auth import ProfileUpdate, RegisterRequest, UserUpdate

logger = structlog.get_logger(__name__)


def create_user(repo: UserRepository, request: RegisterRequest) -> User:
    """Create an account plus the profile extension its role gets at sign-up.

    Students get a profile only when a department is given; event managers
    always get one. Admin profiles are only created by the startup seed.
    """
    if repo.exists_by_email(request.email):
        raise DuplicateEmailException(f"User with email {request.email} already exists")

    user = User(
        email=request.email,
        password_hash=hash_password(request.password),
        name=request.name,
        role=request.role,
        active=True,
    )

    if request.role == UserRole.STUDENT and request.department and request.department.strip():
        user.student = Student(department=request.department.strip())
    elif request.role == UserRole.EVENT_MANAGER:
        user.event_manager = EventManager(
            designation=request.designation,
            phone_number=request.phone_number,
        )

    user = repo.save(user)
    logger.info("User registered", user_id=user.id, role=user.role.value)
    return user


def get_user(repo: UserRepository, user_id: int) -> User:
    user = repo.get_by_id(user_id)
    if user is None:
        raise EntityNotFoundException(f"User not found with id: {user_id}")
    return user


def get_user_by_email(repo: UserRepository, email: str) -> User:
    user = repo.get_by_email(email)
    if user is None:
        raise EntityNotFoundException(f"User not found with email: {email}")
    return user


def list_users(repo: UserRepository, role: Optional[UserRole] = None) -> List[User]:
    if role is not None:
        return repo.list_by_role(role)
    return repo.list(limit=None)


def count_users(repo: UserRepository, role: Optional[UserRole] = None) -> int:
    return repo.count(role)


def ensure_email_available(repo: UserRepository, user: User, email: str) -> None:
    if email != user.email and repo.exists_by_email(email):
        raise DuplicateEmailException(f"User with email {email} already exists")


def update_user(repo: UserRepository, user_id: int, changes: UserUpdate) -> User:
    """Partial update: only fields that are not None are applied."""
    user = get_user(repo, user_id)

    if changes.name is not None:
        user.name = changes.name
    if changes.email is not None:
        ensure_email_available(repo, user, changes.email)
        user.email = changes.email
    if changes.role is not None:
        user.role = changes.role
    if changes.active is not None:
        user.active = changes.active

    user = repo.save(user)
    logger.info("User updated", user_id=user.id)
    return user


def update_profile(repo: UserRepository, user: User, changes: ProfileUpdate) -> User:
    """Self-service update of name, email and (for students) department."""
    if changes.name is not None:
        user.name = changes.name
    if changes.email is not None:
        ensure_email_available(repo, user, changes.email)
        user.email = changes.email
    if user.role == UserRole.STUDENT and changes.department is not None and user.student is not None:
        user.student.department = changes.department

    return repo.save(user)


def change_password(repo: UserRepository, user: User, current_password: str, new_password: str) -> None:
    if not verify_password(current_password, user.password_hash):
        raise InvalidCredentialsException("Current password is incorrect")

    user.password_hash = hash_password(new_password)
    repo.save(user)
    logger.info("Password changed", user_id=user.id)


def delete_user(repo: UserRepository, event_repo: EventRepository, user_id: int) -> None:
    user = get_user(repo, user_id)

    if event_repo.count_by_creator(user.id):
        raise InvalidStateException("Cannot delete a user who still owns events")

    withdrawn = event_repo.remove_user_from_all(user.id)
    repo.delete(user)
    logger.info("User deleted", user_id=user_id, withdrawn_from=withdrawn)

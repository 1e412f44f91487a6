"""Pydantic schemas for User and Auth."""

from typing import Optional

from pydantic import Field

from app.domain.models.user import User, UserRole
from app.domain.schemas.base import CamelModel


class UserRead(CamelModel):
    id: int
    email: str
    name: str
    role: UserRole
    department: Optional[str] = None
    active: bool

    @classmethod
    def from_user(cls, user: User) -> "UserRead":
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            role=user.role,
            department=user.student.department if user.student else None,
            active=user.active,
        )


class LoginRequest(CamelModel):
    email: str
    password: str
    role: Optional[UserRole] = None


class RegisterRequest(CamelModel):
    email: str = Field(min_length=3, max_length=100)
    password: str = Field(min_length=1)
    name: str = Field(min_length=1, max_length=50)
    role: UserRole = UserRole.STUDENT
    department: Optional[str] = None
    designation: Optional[str] = None
    phone_number: Optional[str] = None


class TokenResponse(CamelModel):
    token: str
    token_type: str = "Bearer"
    user: UserRead


class UserUpdate(CamelModel):
    """Admin-side partial update; None means 'leave unchanged'."""

    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[UserRole] = None
    active: Optional[bool] = None


class ProfileUpdate(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    department: Optional[str] = None


class ChangePasswordRequest(CamelModel):
    current_password: str
    new_password: str = Field(min_length=1)

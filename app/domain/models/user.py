"""User domain model: maps to the 'users' table."""

import enum

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.infrastructure.database import Base


class UserRole(str, enum.Enum):
    STUDENT = "STUDENT"
    ADMIN = "ADMIN"
    EVENT_MANAGER = "EVENT_MANAGER"

    @property
    def authority(self) -> str:
        return f"ROLE_{self.value}"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(100), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(50), nullable=False)
    role = Column(Enum(UserRole, native_enum=False, length=20), nullable=False)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # At most one of these is populated, matching the role
    student = relationship("Student", uselist=False, back_populates="user", cascade="all, delete-orphan")
    admin = relationship("Admin", uselist=False, back_populates="user", cascade="all, delete-orphan")
    event_manager = relationship(
        "EventManager", uselist=False, back_populates="user", cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<User {self.email} ({self.role.value if self.role else None})>"

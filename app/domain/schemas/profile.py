"""Pydantic schemas for the role-specific profile details."""

from typing import Optional

from app.domain.schemas.base import CamelModel


class StudentDetails(CamelModel):
    id: Optional[int] = None
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    roll_number: Optional[str] = None
    department: Optional[str] = None
    phone_number: Optional[str] = None
    year: Optional[str] = None
    college_name: Optional[str] = None


class EventManagerDetails(CamelModel):
    id: Optional[int] = None
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    designation: Optional[str] = None
    phone_number: Optional[str] = None

"""Pydantic schemas for Event domain."""

import datetime as dt
from typing import Optional

from pydantic import Field

from app.domain.schemas.base import CamelModel


class EventCreate(CamelModel):
    """Body of both create and update; update overwrites every editable field."""

    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    date: dt.date
    time: Optional[dt.time] = None
    department: str = Field(min_length=1, max_length=100)
    location: str = Field(min_length=1, max_length=255)
    max_participants: int = Field(ge=1)
    image: Optional[str] = None


class EventRead(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    date: dt.date
    time: Optional[dt.time] = None
    department: str
    location: str
    max_participants: int
    current_participants: int
    image: Optional[str] = None
    registration_closed: bool
    created_by: str
    participants: set[str]
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

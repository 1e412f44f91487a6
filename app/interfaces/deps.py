"""
Repository dependencies.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from app.domain.models.event import Event
from app.domain.models.user import User
from app.domain.repositories.event_repository import EventRepository
from app.domain.repositories.user_repository import UserRepository
from app.infrastructure.database import get_db
from app.infrastructure.repositories.event_repository import SQLAlchemyEventRepository
from app.infrastructure.repositories.user_repository import SQLAlchemyUserRepository


def get_event_repository(db: Session = Depends(get_db)) -> EventRepository:
    """Get event repository instance."""
    return SQLAlchemyEventRepository(db, Event)


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    """Get user repository instance."""
    return SQLAlchemyUserRepository(db, User)

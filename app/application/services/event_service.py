"""Event service: event lifecycle and the registration state machine.

An event's *effective* closed status is its stored ``registration_closed``
flag OR whether it has already started. Callers only ever see the effective
value; the stored flag is switched on lazily by the first registration
attempt made after the start time.
"""

from datetime import date, datetime, time
from typing import List, Optional

import pytz
import structlog
from sqlalchemy.exc import IntegrityError

from app.config import get_settings
from app.core.exceptions import (
    AlreadyRegisteredException,
    EntityNotFoundException,
    EventFullException,
    ForbiddenException,
    InvalidStateException,
    NotRegisteredException,
    RegistrationClosedException,
)
from app.domain.models.event import Event
from app.domain.models.user import User, UserRole
from app.domain.repositories.event_repository import EventRepository
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.event import EventCreate, EventRead

settings = get_settings()
tz = pytz.timezone(settings.TIMEZONE)
logger = structlog.get_logger(__name__)

EDITABLE_FIELDS = (
    "title",
    "description",
    "date",
    "time",
    "department",
    "location",
    "max_participants",
    "image",
)


def get_current_datetime() -> datetime:
    """Current wall-clock time in the configured timezone, without tzinfo."""
    return datetime.now(tz).replace(tzinfo=None)


def get_current_date() -> date:
    """Today's date in the configured timezone."""
    return get_current_datetime().date()


def has_started(event: Event, now: Optional[datetime] = None) -> bool:
    """True once the scheduled start (midnight when no time is set) is reached."""
    starts_at = datetime.combine(event.date, event.time or time.min)
    return (now or get_current_datetime()) >= starts_at


def is_registration_closed(event: Event, now: Optional[datetime] = None) -> bool:
    return bool(event.registration_closed) or has_started(event, now)


def to_event_read(event: Event, now: Optional[datetime] = None) -> EventRead:
    return EventRead(
        id=event.id,
        title=event.title,
        description=event.description,
        date=event.date,
        time=event.time,
        department=event.department,
        location=event.location,
        max_participants=event.max_participants,
        current_participants=event.current_participants,
        image=event.image,
        registration_closed=is_registration_closed(event, now),
        created_by=event.created_by.email,
        participants={participant.email for participant in event.participants},
        created_at=event.created_at,
        updated_at=event.updated_at,
    )


def _to_event_reads(events: List[Event]) -> List[EventRead]:
    now = get_current_datetime()
    return [to_event_read(event, now) for event in events]


def _get_event(repo: EventRepository, event_id: int, for_update: bool = False) -> Event:
    event = repo.get_for_update(event_id) if for_update else repo.get_by_id(event_id)
    if event is None:
        raise EntityNotFoundException("Event not found", details={"event_id": event_id})
    return event


def _get_user(user_repo: UserRepository, user_id: int) -> User:
    user = user_repo.get_by_id(user_id)
    if user is None:
        raise EntityNotFoundException("User not found", details={"user_id": user_id})
    return user


def _ensure_creator(event: Event, user: User, action: str) -> None:
    if event.created_by_id != user.id:
        raise ForbiddenException(f"You are not authorized to {action} this event")


# Queries


def get_all_events(repo: EventRepository) -> List[EventRead]:
    """List every event ordered by date and time."""
    return _to_event_reads(repo.list_all())


def get_event_by_id(repo: EventRepository, event_id: int) -> EventRead:
    """Get a single event by ID."""
    return to_event_read(_get_event(repo, event_id))


def get_events_by_department(repo: EventRepository, department: str) -> List[EventRead]:
    """List events organised by a department."""
    return _to_event_reads(repo.find_by_department(department))


def get_upcoming_events(repo: EventRepository) -> List[EventRead]:
    """List events scheduled after today."""
    return _to_event_reads(repo.find_after(get_current_date()))


def search_events(repo: EventRepository, term: str) -> List[EventRead]:
    """Search events by title or description, ignoring case."""
    return _to_event_reads(repo.search(term))


def get_events_by_creator(repo: EventRepository, user_id: int) -> List[EventRead]:
    """List events created by a user."""
    return _to_event_reads(repo.find_by_creator(user_id))


def get_events_by_participant(repo: EventRepository, user_id: int) -> List[EventRead]:
    """List events a user is registered for."""
    return _to_event_reads(repo.find_by_participant(user_id))


# Commands


def create_event(repo: EventRepository, request: EventCreate, created_by: User) -> EventRead:
    """Create an event owned by the given user."""
    data = request.model_dump(include=set(EDITABLE_FIELDS))
    data.update(
        created_by_id=created_by.id,
        current_participants=0,
        registration_closed=False,
    )
    event = repo.create(data)
    logger.info("Event created", event_id=event.id, created_by=created_by.id)
    return to_event_read(event)


def update_event(
    repo: EventRepository, event_id: int, request: EventCreate, current_user: User
) -> EventRead:
    """Overwrite every editable field. Participants and creator are untouched."""
    event = _get_event(repo, event_id, for_update=True)
    _ensure_creator(event, current_user, "edit")

    if request.max_participants < event.current_participants:
        raise InvalidStateException(
            "Max participants cannot be lower than the number of registered participants",
            details={"current_participants": event.current_participants},
        )

    event = repo.update(event, request.model_dump(include=set(EDITABLE_FIELDS)))
    logger.info("Event updated", event_id=event.id)
    return to_event_read(event)


def delete_event(repo: EventRepository, event_id: int, current_user: User) -> None:
    """Delete an event and its participant rows."""
    # Creator only, no admin override
    event = _get_event(repo, event_id)
    _ensure_creator(event, current_user, "delete")

    repo.delete(event)
    logger.info("Event deleted", event_id=event_id, deleted_by=current_user.id)


def register_participant(
    repo: EventRepository, user_repo: UserRepository, event_id: int, user_id: int
) -> EventRead:
    """Register a user for an event."""
    event = _get_event(repo, event_id, for_update=True)

    if has_started(event):
        if not event.registration_closed:
            event.registration_closed = True
            repo.save(event)
            logger.info("Registration auto-closed", event_id=event.id)
        raise RegistrationClosedException(
            "Registration is closed as the event has already started"
        )

    if event.current_participants >= event.max_participants:
        raise EventFullException()

    if event.registration_closed:
        raise RegistrationClosedException()

    user = _get_user(user_repo, user_id)

    if repo.is_participant(event.id, user.id):
        raise AlreadyRegisteredException()

    try:
        added = repo.add_participant(event.id, user.id)
    except IntegrityError:
        raise AlreadyRegisteredException() from None
    if not added:
        raise EventFullException()

    event = _get_event(repo, event_id)
    logger.info(
        "Participant registered",
        event_id=event.id,
        user_id=user.id,
        current_participants=event.current_participants,
    )
    return to_event_read(event)


def unregister_participant(
    repo: EventRepository, user_repo: UserRepository, event_id: int, user_id: int
) -> EventRead:
    """Remove a user from an event's participants."""
    # Allowed after the event started or registration closed
    event = _get_event(repo, event_id, for_update=True)
    user = _get_user(user_repo, user_id)

    if not repo.remove_participant(event.id, user.id):
        raise NotRegisteredException()

    event = _get_event(repo, event_id)
    logger.info(
        "Participant unregistered",
        event_id=event.id,
        user_id=user.id,
        current_participants=event.current_participants,
    )
    return to_event_read(event)


def set_registration_closed(
    repo: EventRepository, event_id: int, closed: bool, current_user: User
) -> EventRead:
    """Close or reopen registration for an event."""
    event = _get_event(repo, event_id, for_update=True)

    is_creator = event.created_by_id == current_user.id
    is_admin = current_user.role == UserRole.ADMIN
    if not is_creator and not is_admin:
        raise ForbiddenException(
            "Only the event creator or an admin can modify registration state for this event"
        )

    if not closed and has_started(event):
        raise InvalidStateException(
            "Cannot reopen registration. The event has already started"
        )

    event.registration_closed = closed
    event = repo.save(event)
    logger.info("Registration state changed", event_id=event.id, closed=closed)
    return to_event_read(event)

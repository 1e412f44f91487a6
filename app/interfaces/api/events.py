"""Events API routes: CRUD, participation, registration toggles and lookups."""

from typing import List

from fastapi import APIRouter, Depends, Query, Response, status

from app.application.services import event_service
from app.domain.models.user import User
from app.domain.repositories.event_repository import EventRepository
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.event import EventCreate, EventRead
from app.interfaces.api.deps import get_current_user
from app.interfaces.deps import get_event_repository, get_user_repository

router = APIRouter(prefix="/api/events", tags=["Events"])


@router.get("", response_model=List[EventRead])
def list_events(
    repo: EventRepository = Depends(get_event_repository),
    user: User = Depends(get_current_user),
):
    return event_service.get_all_events(repo)


# Static paths are declared before "/{event_id}" so they are not captured by it


@router.get("/department/{department}", response_model=List[EventRead])
def events_by_department(
    department: str,
    repo: EventRepository = Depends(get_event_repository),
    user: User = Depends(get_current_user),
):
    return event_service.get_events_by_department(repo, department)


@router.get("/upcoming", response_model=List[EventRead])
def upcoming_events(
    repo: EventRepository = Depends(get_event_repository),
    user: User = Depends(get_current_user),
):
    return event_service.get_upcoming_events(repo)


@router.get("/search", response_model=List[EventRead])
def search_events(
    q: str = Query(..., min_length=1),
    repo: EventRepository = Depends(get_event_repository),
    user: User = Depends(get_current_user),
):
    return event_service.search_events(repo, q)


@router.get("/my-events", response_model=List[EventRead])
def my_events(
    repo: EventRepository = Depends(get_event_repository),
    user: User = Depends(get_current_user),
):
    """Events created by the caller."""
    return event_service.get_events_by_creator(repo, user.id)


@router.get("/registered", response_model=List[EventRead])
def registered_events(
    repo: EventRepository = Depends(get_event_repository),
    user: User = Depends(get_current_user),
):
    """Events the caller is registered for."""
    return event_service.get_events_by_participant(repo, user.id)


@router.get("/{event_id}", response_model=EventRead)
def get_event(
    event_id: int,
    repo: EventRepository = Depends(get_event_repository),
    user: User = Depends(get_current_user),
):
    return event_service.get_event_by_id(repo, event_id)


@router.post("", response_model=EventRead)
def create_event(
    body: EventCreate,
    repo: EventRepository = Depends(get_event_repository),
    user: User = Depends(get_current_user),
):
    return event_service.create_event(repo, body, user)


@router.put("/{event_id}", response_model=EventRead)
def update_event(
    event_id: int,
    body: EventCreate,
    repo: EventRepository = Depends(get_event_repository),
    user: User = Depends(get_current_user),
):
    return event_service.update_event(repo, event_id, body, user)


@router.delete("/{event_id}", status_code=status.HTTP_200_OK)
def delete_event(
    event_id: int,
    repo: EventRepository = Depends(get_event_repository),
    user: User = Depends(get_current_user),
):
    event_service.delete_event(repo, event_id, user)
    return Response(status_code=status.HTTP_200_OK)


@router.post("/{event_id}/register", response_model=EventRead)
def register_for_event(
    event_id: int,
    repo: EventRepository = Depends(get_event_repository),
    user_repo: UserRepository = Depends(get_user_repository),
    user: User = Depends(get_current_user),
):
    return event_service.register_participant(repo, user_repo, event_id, user.id)


@router.post("/{event_id}/unregister", response_model=EventRead)
def unregister_from_event(
    event_id: int,
    repo: EventRepository = Depends(get_event_repository),
    user_repo: UserRepository = Depends(get_user_repository),
    user: User = Depends(get_current_user),
):
    return event_service.unregister_participant(repo, user_repo, event_id, user.id)


@router.post("/{event_id}/close-registration", response_model=EventRead)
def close_registration(
    event_id: int,
    repo: EventRepository = Depends(get_event_repository),
    user: User = Depends(get_current_user),
):
    return event_service.set_registration_closed(repo, event_id, True, user)


@router.post("/{event_id}/open-registration", response_model=EventRead)
def open_registration(
    event_id: int,
    repo: EventRepository = Depends(get_event_repository),
    user: User = Depends(get_current_user),
):
    return event_service.set_registration_closed(repo, event_id, False, user)

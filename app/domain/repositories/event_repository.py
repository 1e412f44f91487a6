"""
Event Repository Interface.
Defines data access for Events and their participant set.
"""

from datetime import date
from typing import List, Optional

from app.domain.repositories.base import BaseRepository
from app.domain.models.event import Event


class EventRepository(BaseRepository[Event]):
    """Interface for Event-specific operations."""

    def get_for_update(self, id: int) -> Optional[Event]:
        """Get an event, locking its row for the rest of the transaction."""
        ...

    def list_all(self) -> List[Event]:
        ...

    def find_by_department(self, department: str) -> List[Event]:
        ...

    def find_after(self, day: date) -> List[Event]:
        """Events scheduled strictly after the given day."""
        ...

    def search(self, term: str) -> List[Event]:
        """Case-insensitive substring match over title or description."""
        ...

    def find_by_creator(self, user_id: int) -> List[Event]:
        ...

    def find_by_participant(self, user_id: int) -> List[Event]:
        ...

    def count_by_creator(self, user_id: int) -> int:
        ...

    def is_participant(self, event_id: int, user_id: int) -> bool:
        ...

    def add_participant(self, event_id: int, user_id: int) -> bool:
        """Insert the membership and bump the count in one transaction.

        Returns False, without changes, when the event is already at capacity.
        Raises IntegrityError if the user is already a participant.
        """
        ...

    def remove_participant(self, event_id: int, user_id: int) -> bool:
        """Delete the membership and decrement the count in one transaction.

        Returns False when the user was not a participant.
        """
        ...

    def remove_user_from_all(self, user_id: int) -> int:
        """Withdraw a user from every event they joined. Returns the number of events."""
        ...

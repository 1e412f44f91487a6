"""
Base Repository Interface.
Defines the standard contract for data access operations.
"""

from typing import TypeVar, List, Optional, Any, Protocol

T = TypeVar("T")


class BaseRepository(Protocol[T]):
    """Interface for generic CRUD operations."""

    def get_by_id(self, id: int) -> Optional[T]:
        """Get a single entity by ID."""
        ...

    def list(self, skip: int = 0, limit: int = 100) -> List[T]:
        """List entities with pagination."""
        ...

    def create(self, obj_in: Any) -> T:
        """Create a new entity from a dict or pydantic model."""
        ...

    def update(self, db_obj: T, obj_in: Any) -> T:
        """Copy the given fields onto an existing entity and persist it."""
        ...

    def save(self, db_obj: T) -> T:
        """Persist pending changes on an entity."""
        ...

    def delete(self, db_obj: T) -> None:
        """Delete an entity."""
        ...

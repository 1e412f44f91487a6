"""
User Repository Interface.
Defines data access for Users.
"""

from typing import List, Optional

from app.domain.repositories.base import BaseRepository
from app.domain.models.user import User, UserRole


class UserRepository(BaseRepository[User]):
    """Interface for User-specific operations."""

    def get_by_email(self, email: str) -> Optional[User]:
        ...

    def exists_by_email(self, email: str) -> bool:
        ...

    def list_by_role(self, role: UserRole) -> List[User]:
        ...

    def get_by_roll_number(self, roll_number: str) -> Optional[User]:
        ...

    def count(self, role: Optional[UserRole] = None) -> int:
        """Count users, optionally restricted to one role."""
        ...

"""Profile service: student and event-manager detail views.

A missing profile row is created on the first detail update.
"""

from typing import Optional

from app.core.exceptions import ConflictException
from app.domain.models.profile import EventManager, Student
from app.domain.models.user import User
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.profile import EventManagerDetails, StudentDetails
from app.application.services.user_service import ensure_email_available


def _student_details(user: User) -> StudentDetails:
    student = user.student
    return StudentDetails(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role.value,
        roll_number=student.roll_number,
        department=student.department,
        phone_number=student.phone_number,
        year=student.year,
        college_name=student.college_name,
    )


def _event_manager_details(user: User) -> EventManagerDetails:
    manager = user.event_manager
    return EventManagerDetails(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role.value,
        designation=manager.designation,
        phone_number=manager.phone_number,
    )


def _apply_identity(repo: UserRepository, user: User, name: Optional[str], email: Optional[str]) -> None:
    if name is not None:
        user.name = name
    if email is not None:
        ensure_email_available(repo, user, email)
        user.email = email


def get_student_details(user: User) -> Optional[StudentDetails]:
    if user.student is None:
        return None
    return _student_details(user)


def update_student_details(repo: UserRepository, user: User, details: StudentDetails) -> StudentDetails:
    _apply_identity(repo, user, details.name, details.email)

    if details.roll_number:
        owner = repo.get_by_roll_number(details.roll_number)
        if owner is not None and owner.id != user.id:
            raise ConflictException(f"Roll number {details.roll_number} is already in use")

    if user.student is None:
        user.student = Student()
    user.student.roll_number = details.roll_number
    user.student.department = details.department
    user.student.phone_number = details.phone_number
    user.student.year = details.year
    user.student.college_name = details.college_name

    user = repo.save(user)
    return _student_details(user)


def get_event_manager_details(user: User) -> Optional[EventManagerDetails]:
    if user.event_manager is None:
        return None
    return _event_manager_details(user)


def update_event_manager_details(
    repo: UserRepository, user: User, details: EventManagerDetails
) -> EventManagerDetails:
    _apply_identity(repo, user, details.name, details.email)

    if user.event_manager is None:
        user.event_manager = EventManager()
    user.event_manager.designation = details.designation
    user.event_manager.phone_number = details.phone_number

    user = repo.save(user)
    return _event_manager_details(user)

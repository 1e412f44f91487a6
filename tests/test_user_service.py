"""
User directory tests: sign-up profiles, partial updates, passwords, deletion, seeding.
"""
import pytest

from app.application.services import event_service, profile_service, user_service
from app.application.services.auth_service import verify_password
from app.application.services.bootstrap_service import seed_default_users
from app.core.exceptions import (
    ConflictException,
    DuplicateEmailException,
    EntityNotFoundException,
    InvalidCredentialsException,
    InvalidStateException,
)
from app.domain.models.user import UserRole
from app.domain.schemas.auth import RegisterRequest, UserUpdate
from app.domain.schemas.profile import EventManagerDetails, StudentDetails


def signup(user_repo, email, role=UserRole.STUDENT, **extra):
    request = RegisterRequest(email=email, password="secret123", name="Someone", role=role, **extra)
    return user_service.create_user(user_repo, request)


def test_student_profile_created_when_department_given(user_repo):
    with_dept = signup(user_repo, "a@college.edu", department="Physics")
    without_dept = signup(user_repo, "b@college.edu", department="   ")

    assert with_dept.student.department == "Physics"
    assert without_dept.student is None
    assert verify_password("secret123", with_dept.password_hash)


def test_event_manager_and_admin_profiles(user_repo):
    manager = signup(
        user_repo, "m@college.edu", role=UserRole.EVENT_MANAGER,
        designation="Coordinator", phone_number="555-0101",
    )
    admin = signup(user_repo, "root@college.edu", role=UserRole.ADMIN)

    assert manager.event_manager.designation == "Coordinator"
    assert manager.event_manager.phone_number == "555-0101"
    assert admin.admin is None


def test_duplicate_email_rejected(user_repo):
    signup(user_repo, "dup@college.edu")
    with pytest.raises(DuplicateEmailException):
        signup(user_repo, "dup@college.edu")


def test_update_user_applies_only_given_fields(user_repo):
    user = signup(user_repo, "p@college.edu")

    updated = user_service.update_user(user_repo, user.id, UserUpdate(name="Renamed"))
    assert updated.name == "Renamed"
    assert updated.email == "p@college.edu"
    assert updated.role == UserRole.STUDENT
    assert updated.active is True

    updated = user_service.update_user(user_repo, user.id, UserUpdate(active=False, role=UserRole.ADMIN))
    assert updated.name == "Renamed"
    assert updated.active is False
    assert updated.role == UserRole.ADMIN


def test_update_user_email_must_be_free(user_repo):
    signup(user_repo, "taken@college.edu")
    user = signup(user_repo, "mine@college.edu")

    with pytest.raises(DuplicateEmailException):
        user_service.update_user(user_repo, user.id, UserUpdate(email="taken@college.edu"))
    with pytest.raises(EntityNotFoundException):
        user_service.update_user(user_repo, 9999, UserUpdate(name="ghost"))


def test_change_password(user_repo):
    user = signup(user_repo, "pw@college.edu")

    with pytest.raises(InvalidCredentialsException):
        user_service.change_password(user_repo, user, "wrong", "new-secret")

    user_service.change_password(user_repo, user, "secret123", "new-secret")
    assert verify_password("new-secret", user_repo.get_by_id(user.id).password_hash)


def test_student_details_created_lazily(user_repo):
    user = signup(user_repo, "lazy@college.edu")
    assert profile_service.get_student_details(user) is None

    details = profile_service.update_student_details(
        user_repo, user, StudentDetails(roll_number="CS-042", department="CS", year="2")
    )
    assert details.roll_number == "CS-042"
    assert details.role == "STUDENT"
    assert profile_service.get_student_details(user).department == "CS"

    other = signup(user_repo, "other@college.edu")
    with pytest.raises(ConflictException) as excinfo:
        profile_service.update_student_details(user_repo, other, StudentDetails(roll_number="CS-042"))
    assert excinfo.value.status_code == 409


def test_event_manager_details_update(user_repo):
    manager = signup(user_repo, "em@college.edu", role=UserRole.EVENT_MANAGER)

    details = profile_service.update_event_manager_details(
        user_repo, manager, EventManagerDetails(name="Events Lead", designation="Head", phone_number="1")
    )
    assert details.name == "Events Lead"
    assert details.designation == "Head"


def test_delete_user_withdraws_participation(user_repo, event_repo, make_user, event_payload):
    creator = make_user(role=UserRole.EVENT_MANAGER)
    student = make_user()
    event = event_service.create_event(event_repo, event_payload(max_participants=3), creator)
    event_service.register_participant(event_repo, user_repo, event.id, student.id)

    with pytest.raises(InvalidStateException):
        user_service.delete_user(user_repo, event_repo, creator.id)

    user_service.delete_user(user_repo, event_repo, student.id)

    assert user_repo.get_by_id(student.id) is None
    read = event_service.get_event_by_id(event_repo, event.id)
    assert read.current_participants == 0
    assert read.participants == set()


def test_counts(user_repo, make_user):
    make_user()
    make_user()
    make_user(role=UserRole.ADMIN)

    assert user_service.count_users(user_repo) == 3
    assert user_service.count_users(user_repo, UserRole.STUDENT) == 2
    assert [u.role for u in user_service.list_users(user_repo, UserRole.ADMIN)] == [UserRole.ADMIN]


def test_seed_is_idempotent(db, user_repo):
    created = seed_default_users(db)
    assert sorted(created) == ["admin@example.com", "eventmanager@example.com", "student@example.com"]

    assert seed_default_users(db) == []
    assert user_service.count_users(user_repo) == 3

    admin = user_repo.get_by_email("admin@example.com")
    assert admin.role == UserRole.ADMIN
    assert admin.admin is not None
    assert user_repo.get_by_email("student@example.com").student.department == "Computer Science"


def test_seed_restores_admin_role(db, user_repo):
    seed_default_users(db)
    admin = user_repo.get_by_email("admin@example.com")
    admin.role = UserRole.STUDENT
    user_repo.save(admin)

    assert seed_default_users(db) == ["admin@example.com"]
    assert user_repo.get_by_email("admin@example.com").role == UserRole.ADMIN

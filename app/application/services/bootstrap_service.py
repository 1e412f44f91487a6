"""Startup seeding of the default accounts. Safe to run on every boot."""

import structlog
from sqlalchemy.orm import Session

from app.application.services.auth_service import hash_password
from app.config import get_settings
from app.domain.models.profile import Admin, EventManager, Student
from app.domain.models.user import User, UserRole
from app.infrastructure.repositories.user_repository import SQLAlchemyUserRepository

settings = get_settings()
logger = structlog.get_logger(__name__)

DEFAULT_ADMIN_EMAIL = "admin@example.com"
DEFAULT_STUDENT_EMAIL = "student@example.com"
DEFAULT_EVENT_MANAGER_EMAIL = "eventmanager@example.com"


def seed_default_users(db: Session) -> list[str]:
    """Create the default admin, student and event manager if missing.

    Returns the emails of the accounts created or repaired.
    """
    repo = SQLAlchemyUserRepository(db, User)
    password = settings.DEFAULT_USER_PASSWORD
    touched = []

    admin = repo.get_by_email(DEFAULT_ADMIN_EMAIL)
    if admin is None:
        admin = User(
            email=DEFAULT_ADMIN_EMAIL,
            password_hash=hash_password(password),
            name="Default Admin",
            role=UserRole.ADMIN,
        )
        admin.admin = Admin(designation="Administrator")
        repo.save(admin)
        touched.append(DEFAULT_ADMIN_EMAIL)
        logger.info("Default admin user created", email=DEFAULT_ADMIN_EMAIL)
    elif admin.role != UserRole.ADMIN:
        admin.role = UserRole.ADMIN
        admin.password_hash = hash_password(password)
        repo.save(admin)
        touched.append(DEFAULT_ADMIN_EMAIL)
        logger.warning("Default admin role and password restored", email=DEFAULT_ADMIN_EMAIL)

    if not repo.exists_by_email(DEFAULT_STUDENT_EMAIL):
        student = User(
            email=DEFAULT_STUDENT_EMAIL,
            password_hash=hash_password(password),
            name="Default Student",
            role=UserRole.STUDENT,
        )
        student.student = Student(department="Computer Science")
        repo.save(student)
        touched.append(DEFAULT_STUDENT_EMAIL)
        logger.info("Default student user created", email=DEFAULT_STUDENT_EMAIL)

    if not repo.exists_by_email(DEFAULT_EVENT_MANAGER_EMAIL):
        manager = User(
            email=DEFAULT_EVENT_MANAGER_EMAIL,
            password_hash=hash_password(password),
            name="Default Event Manager",
            role=UserRole.EVENT_MANAGER,
        )
        manager.event_manager = EventManager(
            designation="Senior Event Coordinator",
            phone_number="+1234567890",
        )
        repo.save(manager)
        touched.append(DEFAULT_EVENT_MANAGER_EMAIL)
        logger.info("Default event manager user created", email=DEFAULT_EVENT_MANAGER_EMAIL)

    return touched

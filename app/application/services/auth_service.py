"""Auth service: JWT token management and password hashing."""

from datetime import datetime, timedelta, timezone
from typing import Optional

import structlog
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from app.config import get_settings
from app.core.exceptions import ForbiddenException, InvalidCredentialsException
from app.domain.models.user import User, UserRole

settings = get_settings()
logger = structlog.get_logger(__name__)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    now = datetime.now(timezone.utc)
    to_encode = data.copy()
    to_encode.update({
        "iat": now,
        "exp": now + (expires_delta or timedelta(minutes=settings.JWT_EXPIRATION_MINUTES)),
    })
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def issue_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    """Issue a bearer token carrying the user's identity and authority."""
    return create_access_token(
        data={
            "sub": user.email,
            "userId": user.id,
            "name": user.name,
            "role": user.role.value,
            "authorities": user.role.authority,
        },
        expires_delta=expires_delta,
    )


def decode_access_token(token: str) -> Optional[dict]:
    try:
        payload = jwt.decode(
            token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM]
        )
        return payload
    except JWTError:
        return None


def validate_token(token: str) -> bool:
    """True when the token is well-signed and not expired."""
    return decode_access_token(token) is not None


def resolve_user(db: Session, token: str) -> Optional[User]:
    """Return the user a valid token was issued to, or None."""
    payload = decode_access_token(token)
    if payload is None or not payload.get("sub"):
        return None
    return get_user_by_email(db, payload["sub"])


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def authenticate_user(
    db: Session, email: str, password: str, role: Optional[UserRole] = None
) -> User:
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        logger.info("Login rejected", email=email, reason="bad_credentials")
        raise InvalidCredentialsException()
    if not user.active:
        logger.info("Login rejected", email=email, reason="inactive")
        raise ForbiddenException("Account is deactivated. Please contact admin.")
    if role is not None and user.role != role:
        logger.info("Login rejected", email=email, reason="role_mismatch")
        raise InvalidCredentialsException("Invalid role for this user")
    return user

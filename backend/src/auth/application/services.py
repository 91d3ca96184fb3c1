import logging
from datetime import datetime, timedelta, timezone
from uuid import UUID

import bcrypt
import jwt

from auth.domain.entities import User
from auth.domain.repository import UserRepository
from shared.config import settings
from shared.exceptions import AuthenticationError, ConflictError

logger = logging.getLogger(__name__)


async def register_user(
    repo: UserRepository,
    name: str,
    email: str,
    password: str,
) -> User:
    if await repo.get_by_email(email):
        raise ConflictError("Email already registered")

    user = User(
        name=name,
        email=email,
        password_hash=bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode(),
    )
    created = await repo.create(user)
    logger.info("Registered user %s", created.id)
    return created


async def authenticate_user(
    repo: UserRepository, email: str, password: str
) -> tuple[User, str]:
    user = await repo.get_by_email(email)
    if not user or not bcrypt.checkpw(password.encode(), user.password_hash.encode()):
        raise AuthenticationError("Invalid email or password")

    return user, create_access_token(user.id)


async def verify_token(repo: UserRepository, token: str) -> User:
    try:
        payload = jwt.decode(
            token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM]
        )
        user_id = UUID(payload["sub"])
    except (jwt.PyJWTError, KeyError, ValueError):
        raise AuthenticationError("Invalid or expired token")

    user = await repo.get_by_id(user_id)
    if not user:
        raise AuthenticationError("User not found")
    return user


def create_access_token(user_id: UUID) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + timedelta(minutes=settings.JWT_EXPIRATION_MINUTES),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)

# app/security.py
import functools
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional, Protocol

import jwt
from jwt import InvalidTokenError
from passlib.context import CryptContext

from .config import settings

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# In a real deployment this would come from a user database
DEMO_USER_EMAIL = "user@tryperdiem.com"
DEMO_USER_PASSWORD = "password"


class AuthError(Exception):
    """Bad credentials, or a token that is malformed, tampered with or expired."""


@dataclass(frozen=True)
class UserRecord:
    email: str
    hashed_password: str
    name: Optional[str] = None
    role: Optional[str] = None
    permissions: List[str] = field(default_factory=list)


class UserDirectory(Protocol):
    def get_by_email(self, email: str) -> Optional[UserRecord]:
        ...


class StaticUserDirectory:
    """Read-only directory over a fixed set of users, keyed by email."""

    def __init__(self, users: Iterable[UserRecord]):
        self._users: Dict[str, UserRecord] = {u.email: u for u in users}

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        return self._users.get(email)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


# Hashing with bcrypt is slow, so the demo directory is built once
@functools.lru_cache(maxsize=1)
def get_user_directory() -> StaticUserDirectory:
    demo_user = UserRecord(
        email=DEMO_USER_EMAIL,
        hashed_password=get_password_hash(DEMO_USER_PASSWORD),
        name="Demo User",
        role="admin",
        permissions=["store-times:read", "store-times:write", "store-overwrites:read", "store-overwrites:write"],
    )
    return StaticUserDirectory([demo_user])


def authenticate_user(directory: UserDirectory, email: str, password: str) -> UserRecord:
    user = directory.get_by_email(email)
    if user is None or not verify_password(password, user.hashed_password):
        logger.warning(f"Failed login attempt for {email}")
        raise AuthError("Invalid email or password")
    return user


def create_access_token(email: str, expires_delta: Optional[timedelta] = None) -> str:
    issued_at = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.token_expire_minutes)
    claims = {
        "email": email,
        "iat": issued_at,
        "exp": issued_at + expires_delta,
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_access_token(token: str) -> dict:
    """Returns the token claims; raises AuthError on a bad signature or expiry."""
    try:
        claims = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except InvalidTokenError as e:
        raise AuthError("Invalid token") from e
    if not claims.get("email"):
        raise AuthError("Invalid token")
    return claims

"""
Security: password hashing and JWT issuance/decoding.
"""

import uuid
from datetime import datetime, timedelta
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from farm_registry.config import get_settings
from farm_registry.core.timeutils import utcnow

settings = get_settings()
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def create_access_token(subject: str | uuid.UUID, extra: dict[str, Any] | None = None) -> tuple[str, datetime]:
    """Create a JWT for `subject` (the user id). Returns the token and its expiry."""
    expire = (utcnow() + timedelta(minutes=settings.jwt_expire_minutes)).replace(microsecond=0)
    to_encode = {"sub": str(subject), "exp": expire, "jti": uuid.uuid4().hex}
    if extra:
        to_encode.update(extra)
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.jwt_algorithm), expire


def decode_access_token(token: str) -> dict[str, Any] | None:
    """Decode and validate JWT (signature and expiry). Returns payload or None if invalid."""
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None

"""
Restaurant Ops — JWT helpers

The service trusts a shared-secret JWT for the caller's identity (``sub``).
Login and password handling live in the identity provider, not here.
"""
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import jwt

from restopos.core.config import get_settings

settings = get_settings()


def create_access_token(data: dict[str, Any]) -> str:
    payload = data.copy()
    expire = datetime.now(tz=timezone.utc) + timedelta(
        minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES
    )
    payload.update({"exp": expire, "type": "access", "jti": str(uuid.uuid4())})
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict[str, Any]:
    """Decode and validate a JWT. Raises JWTError on failure."""
    return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])

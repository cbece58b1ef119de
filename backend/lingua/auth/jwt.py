from datetime import datetime, timedelta, timezone
from uuid import UUID

from jose import jwt, JWTError

from lingua.core.config import settings


def create_user_token(user_id: UUID | str, expires_delta: timedelta | None = None) -> str:
    """Bearer token whose subject is the user id."""
    lifetime = expires_delta if expires_delta is not None else timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    claims = {"sub": str(user_id), "exp": datetime.now(timezone.utc) + lifetime}
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> dict | None:
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None

# threadly/utils/token_utils.py
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from threadly import config

# only used to mint tokens for local development and tests;
# in production the identity provider signs them
DEV_TOKEN_EXPIRE_MINUTES = 60


def _get_secret_key() -> str:
    secret = config.AUTH_SECRET_KEY
    if not secret:
        # Fail fast with a clear message instead of a generic 500
        raise RuntimeError("AUTH_SECRET_KEY is not configured in the backend environment")
    if len(secret) < 32:
        raise RuntimeError("AUTH_SECRET_KEY is too short; use at least 32 characters")
    return secret


def create_identity_token(external_id: str, expires_minutes: int = DEV_TOKEN_EXPIRE_MINUTES) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    to_encode = {"sub": external_id, "exp": expire}
    try:
        return jwt.encode(to_encode, _get_secret_key(), algorithm=config.AUTH_ALGORITHM)
    except JWTError as e:
        raise RuntimeError(f"JWT encode failed: {e}")


def decode_identity_token(token: str) -> Optional[str]:
    """The provider's subject id for a valid token, otherwise None."""
    try:
        payload = jwt.decode(token, _get_secret_key(), algorithms=[config.AUTH_ALGORITHM])
    except JWTError:
        return None
    subject = payload.get("sub")
    return str(subject) if subject else None

from datetime import datetime, timedelta, timezone

import jwt

from chatapi.core.config import get_jwt_secret, get_token_ttl_hours

ALGORITHM = "HS256"


def create_token(data: dict, ttl_hours: int | None = None) -> str:
    now = datetime.now(timezone.utc)
    hours = get_token_ttl_hours() if ttl_hours is None else ttl_hours
    payload = {**data, "iat": now, "exp": now + timedelta(hours=hours)}
    return jwt.encode(payload, get_jwt_secret(), algorithm=ALGORITHM)


def decode_token(token: str) -> dict | None:
    """Payload of a valid token, None if tampered, expired or malformed."""
    try:
        return jwt.decode(token, get_jwt_secret(), algorithms=[ALGORITHM])
    except jwt.PyJWTError:
        return None

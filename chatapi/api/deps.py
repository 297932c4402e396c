from dataclasses import dataclass
from functools import lru_cache

from fastapi import HTTPException, Request

from chatapi.core.config import get_auth_mode, get_data_dir, get_storage_backend
from chatapi.core.security import decode_token
from chatapi.db.session import SessionLocal
from chatapi.store import JsonStore, SqlStore


@dataclass
class AuthUser:
    user_id: str
    username: str | None = None


@lru_cache
def _json_store(data_dir: str) -> JsonStore:
    return JsonStore(data_dir)


def get_store():
    if get_storage_backend() == "json":
        yield _json_store(str(get_data_dir()))
        return
    store = SqlStore(SessionLocal())
    try:
        yield store
    finally:
        store.close()


def get_current_user(request: Request) -> AuthUser | None:
    """Bearer-token identity. No Authorization header is a 401; a header that
    does not carry a valid bearer token is a 403. In identity mode a missing
    header is not an error: the route falls back to the user id carried by the
    request itself."""
    header = request.headers.get("authorization")
    if header is None:
        if get_auth_mode() == "identity":
            return None
        raise HTTPException(status_code=401, detail="Missing token")
    scheme, _, token = header.strip().partition(" ")
    payload = decode_token(token.strip()) if scheme.lower() == "bearer" and token.strip() else None
    if not payload or not payload.get("userId"):
        raise HTTPException(status_code=403, detail="Invalid or expired token")
    return AuthUser(user_id=str(payload["userId"]), username=payload.get("username"))


def resolve_actor(user: AuthUser | None, fallback_id: str | None, field: str) -> str:
    if user:
        return user.user_id
    if not fallback_id:
        raise HTTPException(status_code=400, detail=f"{field} is required")
    return fallback_id

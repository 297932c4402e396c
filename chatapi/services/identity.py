"""Registration, login and the credential policies handed out at login."""
import logging
import uuid

from chatapi.core.clock import utcnow
from chatapi.core.config import get_auth_mode
from chatapi.core.exceptions import AuthenticationError, ValidationError
from chatapi.core.security import create_token
from chatapi.store.base import ChatStore

logger = logging.getLogger(__name__)


def public_user(user: dict) -> dict:
    return {k: v for k, v in user.items() if k != "password"}


class TokenCredentialPolicy:
    """Signed bearer token carrying userId/username, valid for the configured TTL."""

    mode = "token"

    def __init__(self, ttl_hours: int | None = None):
        self.ttl_hours = ttl_hours

    def issue(self, user: dict) -> dict:
        token = create_token({"userId": user["id"], "username": user["username"]}, ttl_hours=self.ttl_hours)
        return {"token": token}


class IdentityCredentialPolicy:
    """No credential at all: the caller gets its own identity back."""

    mode = "identity"

    def issue(self, user: dict) -> dict:
        return {"id": user["id"], "username": user["username"]}


def get_credential_policy(mode: str | None = None):
    mode = mode or get_auth_mode()
    if mode == "identity":
        return IdentityCredentialPolicy()
    return TokenCredentialPolicy()


def register(store: ChatStore, username: str | None, password: str | None) -> dict:
    if not username or not password:
        raise ValidationError("Username and password are required")
    user = store.add_user({
        "id": str(uuid.uuid4()),
        "username": username,
        "password": password,
        "createdAt": utcnow(),
    })
    logger.info("Registered user %s (%s)", user["username"], user["id"])
    return public_user(user)


def login(store: ChatStore, username: str | None, password: str | None, policy=None) -> dict:
    if not username or not password:
        raise ValidationError("Username and password are required")
    user = store.get_user_by_username(username)
    if not user or user["password"] != password:
        logger.info("Failed login for %s", username)
        raise AuthenticationError("Invalid credentials")
    policy = policy or get_credential_policy()
    return policy.issue(user)

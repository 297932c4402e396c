"""Central config: everything comes from the environment (.env supported)."""
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

ALLOWED_UPLOAD_TYPES = ("jpeg", "jpg", "png", "gif", "pdf")
AUTH_MODES = ("token", "identity")
STORAGE_BACKENDS = ("sql", "json")


def _flag(name: str, default: str = "false") -> bool:
    return (os.getenv(name) or default).strip().lower() in ("1", "true", "yes", "on")


def get_database_url() -> str:
    return (os.getenv("DATABASE_URL") or "").strip() or "sqlite:///./data/chat.db"


def _choice(name: str, default: str, allowed: tuple[str, ...]) -> str:
    value = (os.getenv(name) or default).strip().lower()
    if value not in allowed:
        raise ValueError(f"{name} must be one of {', '.join(allowed)}, got {value!r}")
    return value


def get_storage_backend() -> str:
    """sql | json"""
    return _choice("STORAGE_BACKEND", "sql", STORAGE_BACKENDS)


def get_data_dir() -> Path:
    return Path(os.getenv("DATA_DIR") or "./data")


def get_upload_dir() -> Path:
    return Path(os.getenv("UPLOAD_DIR") or "./uploads")


def get_max_upload_bytes() -> int:
    return int(os.getenv("MAX_UPLOAD_BYTES", str(5 * 1024 * 1024)))


def get_jwt_secret() -> str:
    return os.getenv("JWT_SECRET") or "your-secret-key"


def get_token_ttl_hours() -> int:
    return int(os.getenv("TOKEN_TTL_HOURS", "24"))


def get_auth_mode() -> str:
    """token (signed bearer token) | identity (login returns the bare user)."""
    return _choice("AUTH_MODE", "token", AUTH_MODES)


def enforce_chat_membership() -> bool:
    return _flag("ENFORCE_CHAT_MEMBERSHIP")


def get_log_level() -> str:
    return (os.getenv("LOG_LEVEL") or "INFO").upper()


def get_port() -> int:
    return int(os.getenv("PORT", "3000"))

"""Storage contract shared by the SQL and JSON backends.

Records go in and come out as plain dicts keyed the way the API returns them
(``createdBy``, ``chatId``...). Timestamps are accepted as aware datetimes and
returned as ISO-8601 strings.
"""
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager

COLLECTIONS = ("users", "chats", "chat_participants", "messages", "uploads")

_locks: dict[str, threading.RLock] = {name: threading.RLock() for name in COLLECTIONS}


@contextmanager
def collection_lock(name: str):
    """Process-wide lock serialising every writer of one collection."""
    lock = _locks[name]
    with lock:
        yield


class ChatStore(ABC):
    backend = "abstract"

    def locked(self, collection: str):
        return collection_lock(collection)

    @abstractmethod
    def add_user(self, record: dict) -> dict:
        """Persist a user; ConflictError if the username is taken."""

    @abstractmethod
    def get_user_by_username(self, username: str) -> dict | None: ...

    @abstractmethod
    def add_chat(self, record: dict, participant_ids: list[str]) -> dict: ...

    @abstractmethod
    def list_chats_for_user(self, user_id: str) -> list[dict]: ...

    @abstractmethod
    def find_individual_chat(self, participant_ids: list[str]) -> dict | None:
        """The individual chat whose participant set equals the given ids."""

    @abstractmethod
    def get_participants(self, chat_id: str) -> set[str]: ...

    @abstractmethod
    def add_message(self, record: dict) -> dict: ...

    @abstractmethod
    def list_messages(self, chat_id: str) -> list[dict]:
        """Messages of a chat in the order they were written."""

    @abstractmethod
    def add_upload(self, record: dict) -> dict: ...

    def close(self) -> None:
        pass

"""Flat-file backend: one JSON document per collection.

Every mutation reads the whole document, changes it in memory and writes it
back through a temp file + ``os.replace``, all while holding the collection
lock, so concurrent requests cannot lose each other's writes.
"""
import json
import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path

from chatapi.core.clock import isoformat
from chatapi.core.exceptions import ConflictError, ValidationError
from chatapi.store.base import ChatStore

logger = logging.getLogger(__name__)

FILES = {
    "users": "users.json",
    "chats": "chats.json",
    "messages": "messages.json",
    "uploads": "uploads.json",
}


def _serialise(record: dict) -> dict:
    return {k: isoformat(v) if isinstance(v, datetime) else v for k, v in record.items()}


class JsonStore(ChatStore):
    backend = "json"

    def __init__(self, data_dir):
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, collection: str) -> Path:
        return self.data_dir / FILES[collection]

    def _read(self, collection: str) -> list[dict]:
        path = self._path(collection)
        if not path.exists():
            return []
        raw = path.read_text(encoding="utf-8").strip()
        if not raw:
            return []
        return json.loads(raw)

    def _write(self, collection: str, records: list[dict]) -> None:
        path = self._path(collection)
        fd, tmp = tempfile.mkstemp(dir=self.data_dir, prefix=f".{path.stem}-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(records, fh, indent=2)
            os.replace(tmp, path)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise

    def _append(self, collection: str, record: dict) -> dict:
        with self.locked(collection):
            records = self._read(collection)
            records.append(record)
            self._write(collection, records)
        return record

    def _ids(self, collection: str) -> set[str]:
        return {r["id"] for r in self._read(collection)}

    # users

    def add_user(self, record: dict) -> dict:
        with self.locked("users"):
            users = self._read("users")
            if any(u["username"] == record["username"] for u in users):
                raise ConflictError("Username already exists")
            user = _serialise(record)
            users.append(user)
            self._write("users", users)
        return dict(user)

    def get_user_by_username(self, username: str) -> dict | None:
        for user in self._read("users"):
            if user["username"] == username:
                return user
        return None

    # chats

    @staticmethod
    def _public_chat(chat: dict) -> dict:
        return {k: v for k, v in chat.items() if k != "participants"}

    def add_chat(self, record: dict, participant_ids: list[str]) -> dict:
        chat = _serialise(record)
        chat["participants"] = list(dict.fromkeys(participant_ids))
        if not {chat["createdBy"], *chat["participants"]} <= self._ids("users"):
            logger.warning("Rejected chat %s: unknown creator or participant", chat["id"])
            raise ValidationError("Unknown participant")
        self._append("chats", chat)
        return self._public_chat(chat)

    def list_chats_for_user(self, user_id: str) -> list[dict]:
        return [self._public_chat(c) for c in self._read("chats") if user_id in c.get("participants", [])]

    def find_individual_chat(self, participant_ids: list[str]) -> dict | None:
        wanted = set(participant_ids)
        for chat in self._read("chats"):
            if chat.get("type") == "individual" and set(chat.get("participants", [])) == wanted:
                return self._public_chat(chat)
        return None

    def get_participants(self, chat_id: str) -> set[str]:
        for chat in self._read("chats"):
            if chat["id"] == chat_id:
                return set(chat.get("participants", []))
        return set()

    # messages

    def add_message(self, record: dict) -> dict:
        msg = _serialise(record)
        if msg["chatId"] not in self._ids("chats") or msg["senderId"] not in self._ids("users"):
            raise ValidationError("Unknown chat or sender")
        msg.setdefault("seenBy", [])
        return dict(self._append("messages", msg))

    def list_messages(self, chat_id: str) -> list[dict]:
        return [m for m in self._read("messages") if m.get("chatId") == chat_id]

    # uploads

    def add_upload(self, record: dict) -> dict:
        if record["uploadedBy"] not in self._ids("users"):
            raise ValidationError("Unknown uploader")
        return dict(self._append("uploads", _serialise(record)))

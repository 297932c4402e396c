import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from chatapi.core.exceptions import ConflictError, ValidationError
from chatapi.models import User, Chat, ChatParticipant, Message, Upload
from chatapi.store.base import ChatStore

logger = logging.getLogger(__name__)


class SqlStore(ChatStore):
    backend = "sql"

    def __init__(self, db: Session):
        self.db = db

    def close(self) -> None:
        self.db.close()

    def add_user(self, record: dict) -> dict:
        with self.locked("users"):
            if self.db.query(User).filter(User.username == record["username"]).first():
                raise ConflictError("Username already exists")
            user = User(
                id=record["id"],
                username=record["username"],
                password=record["password"],
                created_at=record["createdAt"],
            )
            self.db.add(user)
            try:
                self.db.commit()
            except IntegrityError:
                self.db.rollback()
                raise ConflictError("Username already exists")
            self.db.refresh(user)
            return user.to_dict()

    def get_user_by_username(self, username: str) -> dict | None:
        user = self.db.query(User).filter(User.username == username).first()
        return user.to_dict() if user else None

    def add_chat(self, record: dict, participant_ids: list[str]) -> dict:
        with self.locked("chats"):
            chat = Chat(
                id=record["id"],
                name=record.get("name"),
                type=record["type"],
                created_by=record["createdBy"],
                created_at=record["createdAt"],
            )
            self.db.add(chat)
            for user_id in participant_ids:
                self.db.add(ChatParticipant(chat_id=chat.id, user_id=user_id))
            try:
                self.db.commit()
            except IntegrityError:
                self.db.rollback()
                logger.warning("Rejected chat %s: unknown creator or participant", record["id"])
                raise ValidationError("Unknown participant")
            self.db.refresh(chat)
            return chat.to_dict()

    def list_chats_for_user(self, user_id: str) -> list[dict]:
        chats = (
            self.db.query(Chat)
            .join(ChatParticipant, ChatParticipant.chat_id == Chat.id)
            .filter(ChatParticipant.user_id == user_id)
            .all()
        )
        return [c.to_dict() for c in chats]

    def find_individual_chat(self, participant_ids: list[str]) -> dict | None:
        wanted = set(participant_ids)
        if not wanted:
            return None
        # Candidates: individual chats containing every wanted id and nothing else.
        matching = (
            self.db.query(ChatParticipant.chat_id)
            .join(Chat, Chat.id == ChatParticipant.chat_id)
            .filter(Chat.type == "individual")
            .group_by(ChatParticipant.chat_id)
            .having(func.count(ChatParticipant.user_id) == len(wanted))
        )
        for (chat_id,) in matching.all():
            if self.get_participants(chat_id) == wanted:
                chat = self.db.query(Chat).filter(Chat.id == chat_id).first()
                return chat.to_dict()
        return None

    def get_participants(self, chat_id: str) -> set[str]:
        rows = self.db.query(ChatParticipant.user_id).filter(ChatParticipant.chat_id == chat_id).all()
        return {r[0] for r in rows}

    def add_message(self, record: dict) -> dict:
        with self.locked("messages"):
            msg = Message(
                id=record["id"],
                chat_id=record["chatId"],
                sender_id=record["senderId"],
                content=record["content"],
                type=record.get("type") or "text",
                status=record.get("status") or "sent",
                created_at=record["createdAt"],
            )
            self.db.add(msg)
            try:
                self.db.commit()
            except IntegrityError:
                self.db.rollback()
                raise ValidationError("Unknown chat or sender")
            self.db.refresh(msg)
            return msg.to_dict()

    def list_messages(self, chat_id: str) -> list[dict]:
        msgs = self.db.query(Message).filter(Message.chat_id == chat_id).order_by(Message.seq).all()
        return [m.to_dict() for m in msgs]

    def add_upload(self, record: dict) -> dict:
        with self.locked("uploads"):
            upload = Upload(
                id=record["id"],
                filename=record["filename"],
                original_name=record["originalName"],
                path=record["path"],
                size=record["size"],
                mimetype=record["mimetype"],
                uploaded_by=record["uploadedBy"],
                uploaded_at=record["uploadedAt"],
            )
            self.db.add(upload)
            try:
                self.db.commit()
            except IntegrityError:
                self.db.rollback()
                raise ValidationError("Unknown uploader")
            self.db.refresh(upload)
            return upload.to_dict()

from sqlalchemy import Column, String, DateTime, ForeignKey
from chatapi.core.clock import isoformat
from chatapi.db.session import Base


class Chat(Base):
    __tablename__ = "chats"

    id = Column(String(36), primary_key=True, index=True)
    name = Column(String(255), nullable=True)
    type = Column(String(20), nullable=False, default="individual")  # individual | group
    created_by = Column(String(36), ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "createdBy": self.created_by,
            "createdAt": isoformat(self.created_at),
        }


class ChatParticipant(Base):
    __tablename__ = "chat_participants"

    chat_id = Column(String(36), ForeignKey("chats.id"), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id"), primary_key=True, index=True)

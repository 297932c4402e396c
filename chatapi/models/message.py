from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from chatapi.core.clock import isoformat
from chatapi.db.session import Base


class Message(Base):
    __tablename__ = "messages"

    # seq fixes write order; id is the public identifier
    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(36), unique=True, nullable=False, index=True)
    chat_id = Column(String(36), ForeignKey("chats.id"), nullable=False, index=True)
    sender_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    content = Column(Text, nullable=False)
    type = Column(String(30), nullable=False, default="text")
    status = Column(String(20), nullable=False, default="sent")
    created_at = Column(DateTime(timezone=True), nullable=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "chatId": self.chat_id,
            "senderId": self.sender_id,
            "content": self.content,
            "type": self.type,
            "status": self.status,
            "createdAt": isoformat(self.created_at),
            "seenBy": [],
        }

from chatapi.models.user import User
from chatapi.models.chat import Chat, ChatParticipant
from chatapi.models.message import Message
from chatapi.models.upload import Upload

__all__ = ["User", "Chat", "ChatParticipant", "Message", "Upload"]

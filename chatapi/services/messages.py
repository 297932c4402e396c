import logging
import uuid

from chatapi.core.clock import utcnow
from chatapi.core.config import enforce_chat_membership
from chatapi.core.exceptions import PermissionDeniedError, ValidationError
from chatapi.store.base import ChatStore

logger = logging.getLogger(__name__)


def post_message(
    store: ChatStore,
    sender_id: str,
    chat_id: str | None,
    content: str | None,
    type: str = "text",
    enforce_membership: bool | None = None,
) -> dict:
    if not chat_id or not content:
        raise ValidationError("Chat ID and content are required")
    if enforce_membership is None:
        enforce_membership = enforce_chat_membership()
    if enforce_membership and sender_id not in store.get_participants(chat_id):
        logger.warning("User %s tried to post to chat %s without being a participant", sender_id, chat_id)
        raise PermissionDeniedError("Not a participant of this chat")
    return store.add_message({
        "id": str(uuid.uuid4()),
        "chatId": chat_id,
        "senderId": sender_id,
        "content": content,
        "type": type or "text",
        "status": "sent",
        "createdAt": utcnow(),
    })


def list_messages(store: ChatStore, chat_id: str | None) -> list[dict]:
    if not chat_id:
        raise ValidationError("Chat ID is required")
    return store.list_messages(chat_id)

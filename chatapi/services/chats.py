import logging
import uuid

from chatapi.core.clock import utcnow
from chatapi.core.exceptions import ValidationError
from chatapi.store.base import ChatStore

logger = logging.getLogger(__name__)

CHAT_TYPES = ("individual", "group")


def list_chats(store: ChatStore, user_id: str) -> list[dict]:
    return store.list_chats_for_user(user_id)


def create_chat(
    store: ChatStore,
    creator_id: str,
    participant_ids,
    type: str = "individual",
    name: str | None = None,
) -> tuple[dict, bool]:
    """Find-or-create a chat. Returns (chat, created).

    A two-party individual chat is unique per participant pair regardless of
    the order the ids come in; group chats are always new.
    """
    if (
        not isinstance(participant_ids, list)
        or not participant_ids
        or not all(isinstance(p, str) and p for p in participant_ids)
    ):
        raise ValidationError("Participants array is required")
    type = type or "individual"
    if type not in CHAT_TYPES:
        raise ValidationError("Chat type must be 'individual' or 'group'")
    members = list(dict.fromkeys(participant_ids))

    with store.locked("chats"):
        if type == "individual" and len(participant_ids) == 2:
            existing = store.find_individual_chat(members)
            if existing:
                logger.info("Reusing individual chat %s for %s", existing["id"], members)
                return existing, False
        chat = store.add_chat(
            {
                "id": str(uuid.uuid4()),
                "name": name or None,
                "type": type,
                "createdBy": creator_id,
                "createdAt": utcnow(),
            },
            members,
        )
    logger.info("Created %s chat %s with %d participant(s)", type, chat["id"], len(members))
    return chat, True

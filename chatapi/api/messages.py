from fastapi import APIRouter, Depends, Query

from chatapi.api.deps import AuthUser, get_current_user, get_store, resolve_actor
from chatapi.schemas.message import MessageCreateRequest, MessageResponse
from chatapi.services import messages
from chatapi.store.base import ChatStore

router = APIRouter(prefix="/api/messages", tags=["Messages"])


@router.get("", response_model=list[MessageResponse])
def get_messages(
    store: ChatStore = Depends(get_store),
    user: AuthUser | None = Depends(get_current_user),
    chatId: str | None = Query(None),
):
    return messages.list_messages(store, chatId)


@router.post("", response_model=MessageResponse, status_code=201)
def send_message(
    data: MessageCreateRequest,
    store: ChatStore = Depends(get_store),
    user: AuthUser | None = Depends(get_current_user),
):
    sender_id = resolve_actor(user, data.senderId, "senderId")
    return messages.post_message(store, sender_id, data.chatId, data.content, data.type)

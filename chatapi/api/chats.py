from fastapi import APIRouter, Depends, Query, Response

from chatapi.api.deps import AuthUser, get_current_user, get_store, resolve_actor
from chatapi.schemas.chat import ChatCreateRequest, ChatResponse
from chatapi.services import chats
from chatapi.store.base import ChatStore

router = APIRouter(prefix="/api/chats", tags=["Chats"])


@router.get("", response_model=list[ChatResponse])
def get_chats(
    store: ChatStore = Depends(get_store),
    user: AuthUser | None = Depends(get_current_user),
    userId: str | None = Query(None),
):
    return chats.list_chats(store, resolve_actor(user, userId, "userId"))


@router.post("", response_model=ChatResponse, status_code=201)
def create_chat(
    data: ChatCreateRequest,
    response: Response,
    store: ChatStore = Depends(get_store),
    user: AuthUser | None = Depends(get_current_user),
):
    creator_id = resolve_actor(user, data.createdBy, "createdBy")
    chat, created = chats.create_chat(store, creator_id, data.participants, data.type, data.name)
    if not created:
        response.status_code = 200
    return chat

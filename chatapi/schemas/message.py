from typing import Optional

from pydantic import BaseModel, Field


class MessageCreateRequest(BaseModel):
    chatId: Optional[str] = None
    content: Optional[str] = None
    type: Optional[str] = "text"
    senderId: Optional[str] = None  # identity mode only


class MessageResponse(BaseModel):
    id: str
    chatId: str
    senderId: str
    content: str
    type: str
    status: str
    createdAt: str
    seenBy: list[str] = Field(default_factory=list)

from typing import Any, Optional

from pydantic import BaseModel


class ChatCreateRequest(BaseModel):
    name: Optional[str] = None
    # Left loose so a wrong shape gets the API's own 400 message
    participants: Any = None
    type: Optional[str] = "individual"
    createdBy: Optional[str] = None  # identity mode only


class ChatResponse(BaseModel):
    id: str
    name: Optional[str] = None
    type: str
    createdBy: str
    createdAt: str

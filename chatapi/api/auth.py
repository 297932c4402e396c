from fastapi import APIRouter, Depends

from chatapi.api.deps import get_store
from chatapi.schemas.auth import LoginRequest, RegisterRequest, UserResponse
from chatapi.services import identity
from chatapi.store.base import ChatStore

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/register", response_model=UserResponse, status_code=201)
def register(data: RegisterRequest, store: ChatStore = Depends(get_store)):
    return identity.register(store, data.username, data.password)


@router.post("/login")
def login(data: LoginRequest, store: ChatStore = Depends(get_store)):
    # {token} or {id, username}, depending on AUTH_MODE
    return identity.login(store, data.username, data.password)

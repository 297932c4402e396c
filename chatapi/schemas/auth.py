from pydantic import BaseModel


class RegisterRequest(BaseModel):
    username: str | None = None
    password: str | None = None


class LoginRequest(BaseModel):
    username: str | None = None
    password: str | None = None


class UserResponse(BaseModel):
    id: str
    username: str
    createdAt: str | None = None

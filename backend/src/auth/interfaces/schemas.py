from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from shared.config import settings


class RegisterRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(min_length=8)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int = settings.JWT_EXPIRATION_MINUTES * 60


class UserResponse(BaseModel):
    id: UUID
    name: str
    email: str
    created_at: datetime | None = None

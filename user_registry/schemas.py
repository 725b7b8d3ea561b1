from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime


# --- User ---

class UserBase(BaseModel):
    name: str = Field(min_length=1, max_length=150)
    cpf: str = Field(min_length=1, max_length=14)
    email: str = Field(min_length=1, max_length=255)
    phone: str | None = Field(None, max_length=30)


class UserCreate(UserBase):
    pass


class UserResponse(UserBase):
    id: int
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


# --- Messages ---

class MessageResponse(BaseModel):
    msg: str


# --- Token ---

class TokenResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    expires_in: int

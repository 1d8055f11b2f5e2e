import uuid
from enum import Enum
from typing import Optional

from pydantic import BaseModel, EmailStr
from sqlmodel import Field, SQLModel

from estoque.notifications import Notification


class Role(str, Enum):
    ADMIN = "admin"
    USER = "user"


# Shared properties
class UserBase(SQLModel):
    email: EmailStr = Field(unique=True, index=True, max_length=255)
    is_active: bool = True
    full_name: Optional[str] = Field(default=None, max_length=255)
    role: Role = Field(default=Role.USER)
    setor_id: Optional[uuid.UUID] = Field(default=None, foreign_key="setores.id", ondelete="SET NULL")


# Properties to receive via API on creation
class UserCreate(UserBase):
    password: Optional[str] = Field(default=None, min_length=8, max_length=40)


class UserRegister(SQLModel):
    email: EmailStr = Field(max_length=255)
    password: str = Field(min_length=8, max_length=40)
    full_name: str = Field(min_length=1, max_length=255)
    setor_id: Optional[uuid.UUID] = None


# Properties to receive via API on update, all are optional
class UserUpdate(SQLModel):
    email: Optional[EmailStr] = Field(default=None, max_length=255)
    full_name: Optional[str] = Field(default=None, max_length=255)
    password: Optional[str] = Field(default=None, min_length=8, max_length=40)
    is_active: Optional[bool] = None
    role: Optional[Role] = None
    setor_id: Optional[uuid.UUID] = None


# Properties to return via API, id is always required
class UserPublic(SQLModel):
    id: uuid.UUID
    email: EmailStr
    full_name: Optional[str] = None
    is_active: bool
    role: Role
    setor_id: Optional[uuid.UUID] = None


# JSON payload containing access token
class Token(SQLModel):
    access_token: str
    token_type: str = "bearer"


# Contents of JWT token
class TokenPayload(SQLModel):
    sub: Optional[str] = None


class SignupResult(BaseModel):
    notification: Notification
    data: Optional[UserPublic] = None

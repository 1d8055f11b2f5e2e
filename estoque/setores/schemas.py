import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel
from sqlmodel import Field, SQLModel

from estoque.notifications import Notification


# Shared properties
class SetorBase(SQLModel):
    nome: str = Field(min_length=1, max_length=255)
    descricao: Optional[str] = Field(default=None, max_length=1000)


class SetorCreate(SetorBase):
    pass


class SetorUpdate(SQLModel):
    nome: str = Field(max_length=255)
    descricao: Optional[str] = Field(default=None, max_length=1000)


class SetorPublic(SetorBase):
    id: uuid.UUID
    created_at: datetime
    updated_at: datetime


class SetoresPublic(SQLModel):
    data: List[SetorPublic]
    count: int


class SetorStats(SQLModel):
    tables: int = 0
    products: int = 0
    users: int = 0


class SetorResult(BaseModel):
    notification: Notification
    data: Optional[SetorPublic] = None

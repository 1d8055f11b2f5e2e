import uuid
from typing import Optional

from sqlmodel import Field

from estoque.auth.schemas import UserBase


class User(UserBase, table=True):
    """User database model"""

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    hashed_password: Optional[str] = None

"""
Explicit user/sector context.

Built once at sign-in and passed to whatever needs to know who is acting
and on which sector. Cleared at sign-out.
"""

import uuid
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from estoque.errors import NotSignedIn


class SessionContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: uuid.UUID
    name: Optional[str] = None
    email: str
    setor_id: Optional[uuid.UUID] = None
    role: str = "user"

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    @classmethod
    def from_user(cls, user: Any) -> "SessionContext":
        return cls(
            user_id=user.id,
            name=user.full_name,
            email=user.email,
            setor_id=user.setor_id,
            role=getattr(user.role, "value", user.role),
        )


class SessionStore:
    """Holds the current context between sign-in and sign-out."""

    def __init__(self) -> None:
        self._current: Optional[SessionContext] = None

    def sign_in(self, context: SessionContext) -> SessionContext:
        self._current = context
        return context

    def sign_out(self) -> None:
        self._current = None

    @property
    def is_signed_in(self) -> bool:
        return self._current is not None

    @property
    def current(self) -> SessionContext:
        if self._current is None:
            raise NotSignedIn("No user is signed in")
        return self._current

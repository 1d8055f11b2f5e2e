import uuid
from typing import Annotated, Generator

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from pydantic import ValidationError
from sqlmodel import Session

from estoque.auth.models import User
from estoque.auth.schemas import TokenPayload
from estoque.auth.utils import decode_access_token
from estoque.config import settings
from estoque.database import engine
from estoque.session import SessionContext

reusable_oauth2 = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_V1_STR}/login/access-token"
)


def get_db() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


SessionDep = Annotated[Session, Depends(get_db)]
TokenDep = Annotated[str, Depends(reusable_oauth2)]


def get_current_user(session: SessionDep, token: TokenDep) -> User:
    try:
        payload = decode_access_token(token)
        token_data = TokenPayload(**payload)
        user_id = uuid.UUID(token_data.sub or "")
    except (jwt.InvalidTokenError, ValidationError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Could not validate credentials",
        )
    user = session.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    if not user.is_active:
        raise HTTPException(status_code=400, detail="Inactive user")
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


def get_current_context(current_user: CurrentUser) -> SessionContext:
    """Session context of the caller. Every scoped endpoint needs a sector."""
    context = SessionContext.from_user(current_user)
    if context.setor_id is None:
        raise HTTPException(status_code=403, detail="User is not assigned to a sector")
    return context


CurrentContext = Annotated[SessionContext, Depends(get_current_context)]

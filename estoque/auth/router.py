import logging
import uuid
from datetime import timedelta
from typing import Annotated, Any, Optional
from urllib.parse import urlencode

import httpx
import jwt
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import RedirectResponse
from fastapi.security import OAuth2PasswordRequestForm
from pydantic import BaseModel

from estoque.auth.crud_user import user as user_crud
from estoque.auth.dependencies import CurrentUser, SessionDep
from estoque.auth.schemas import SignupResult, Token, UserCreate, UserPublic, UserRegister
from estoque.auth.utils import create_access_token, decode_access_token
from estoque.config import settings
from estoque.errors import CollaboratorError, ValidationError
from estoque.notifications import Notifier, rejection, reported
from estoque.setores.service import setor as setor_crud

logger = logging.getLogger(__name__)

router = APIRouter()

GOOGLE_STATE_SUBJECT = "google-login"
GOOGLE_SCOPES = "openid email profile"


class SetorChoice(BaseModel):
    setor_id: uuid.UUID


@router.post("/login/access-token")
def login_access_token(
    session: SessionDep, form_data: Annotated[OAuth2PasswordRequestForm, Depends()]
) -> Token:
    """
    OAuth2 compatible token login, get an access token for future requests
    """
    user = user_crud.authenticate(
        session=session, email=form_data.username, password=form_data.password
    )
    notifier = Notifier()
    if not user:
        raise rejection(notifier, ValidationError("Incorrect email or password"))
    if not user.is_active:
        raise rejection(notifier, ValidationError("Inactive user"))
    logger.info(f"login {user.email}")
    return Token(access_token=create_access_token(user.id))


@router.post("/signup", response_model=SignupResult)
def register_user(session: SessionDep, user_in: UserRegister) -> Any:
    """
    Create a new user in the chosen sector.
    """
    notifier = Notifier()
    if user_in.setor_id is None:
        raise rejection(notifier, ValidationError("Por favor, selecione um setor"))
    if not setor_crud.get(session=session, id=user_in.setor_id):
        raise rejection(notifier, ValidationError("Setor não encontrado"))
    if user_crud.get_by_email(session=session, email=user_in.email):
        raise rejection(
            notifier, ValidationError("The user with this email already exists in the system")
        )

    with reported(notifier, session):
        db_user = user_crud.create(
            session=session, obj_in=UserCreate.model_validate(user_in.model_dump())
        )
    logger.info(f"signup {db_user.email} in setor {db_user.setor_id}")
    return SignupResult(
        notification=notifier.success("Cadastro realizado!", "Bem-vindo ao sistema de estoque CCB"),
        data=UserPublic.model_validate(db_user),
    )


@router.get("/users/me", response_model=UserPublic)
def read_user_me(current_user: CurrentUser) -> Any:
    return current_user


@router.put("/users/me/setor", response_model=UserPublic)
def choose_setor(session: SessionDep, current_user: CurrentUser, obj_in: SetorChoice) -> Any:
    """Assign a sector to an account that has none yet (provider sign-ups)."""
    if current_user.setor_id is not None:
        raise HTTPException(status_code=400, detail="User already belongs to a sector")
    if not setor_crud.get(session=session, id=obj_in.setor_id):
        raise HTTPException(status_code=404, detail="Setor not found")
    with reported(Notifier(), session):
        db_user = user_crud.update(
            session=session, db_obj=current_user, obj_in={"setor_id": obj_in.setor_id}
        )
    logger.info(f"{db_user.email} joined setor {db_user.setor_id}")
    return db_user


# =============================================================================
# Google sign-in
# =============================================================================

def google_redirect_uri() -> str:
    return f"{settings.server_host}{settings.API_V1_STR}/login/google/callback"


@router.get("/login/google")
def google_authorize() -> Any:
    """URL of Google's consent screen. The frontend redirects the browser there."""
    if not settings.google_enabled:
        raise HTTPException(
            status_code=400,
            detail=(
                "Google sign-in is not configured on the server. "
                "Please set GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET in your .env file."
            ),
        )
    state = create_access_token(GOOGLE_STATE_SUBJECT, expires_delta=timedelta(minutes=10))
    params = {
        "client_id": settings.GOOGLE_CLIENT_ID,
        "redirect_uri": google_redirect_uri(),
        "response_type": "code",
        "scope": GOOGLE_SCOPES,
        "prompt": "select_account",
        "state": state,
    }
    return {"url": f"{settings.GOOGLE_AUTH_URL}?{urlencode(params)}"}


async def fetch_google_profile(
    code: str, transport: Optional[httpx.AsyncBaseTransport] = None
) -> dict:
    """Exchange the authorization code and read the user's profile."""
    try:
        async with httpx.AsyncClient(timeout=10.0, transport=transport) as client:
            response = await client.post(
                settings.GOOGLE_TOKEN_URL,
                data={
                    "client_id": settings.GOOGLE_CLIENT_ID,
                    "client_secret": settings.GOOGLE_CLIENT_SECRET,
                    "code": code,
                    "redirect_uri": google_redirect_uri(),
                    "grant_type": "authorization_code",
                },
                headers={"Accept": "application/json"},
            )
            if response.status_code != 200:
                raise CollaboratorError(f"Failed to exchange code: {response.text}")
            access_token = response.json().get("access_token")

            response = await client.get(
                settings.GOOGLE_USERINFO_URL,
                headers={"Authorization": f"Bearer {access_token}"},
            )
            if response.status_code != 200:
                raise CollaboratorError(f"Failed to read profile: {response.text}")
            return response.json()
    except httpx.HTTPError as e:
        raise CollaboratorError(str(e)) from e


@router.get("/login/google/callback")
async def google_callback(session: SessionDep, code: str, state: Optional[str] = None) -> Any:
    """Sign in (or sign up) with the Google account, then hand the token to the frontend."""
    notifier = Notifier()
    try:
        payload = decode_access_token(state or "")
    except jwt.InvalidTokenError:
        payload = {}
    if payload.get("sub") != GOOGLE_STATE_SUBJECT:
        raise HTTPException(status_code=400, detail="Invalid state parameter. Login flow interrupted.")

    try:
        profile = await fetch_google_profile(code)
    except CollaboratorError as e:
        logger.error(f"Google sign-in failed: {e}")
        raise rejection(notifier, e, status_code=502)

    email = profile.get("email")
    if not email or not profile.get("email_verified", True):
        raise rejection(notifier, ValidationError("Google account has no verified email"))

    db_user = user_crud.get_by_email(session=session, email=email)
    if not db_user:
        with reported(notifier, session):
            db_user = user_crud.create(
                session=session, obj_in=UserCreate(email=email, full_name=profile.get("name"))
            )
        logger.info(f"signup {email} via Google")
    elif not db_user.is_active:
        raise rejection(notifier, ValidationError("Inactive user"))

    token = create_access_token(db_user.id)
    return RedirectResponse(url=f"{settings.FRONTEND_URL}/auth/callback#access_token={token}")

import logging
from datetime import timedelta
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import OAuth2PasswordRequestForm

from app import crud
from app.api.deps import CurrentSession, CurrentUser, SessionDep
from app.core import security
from app.core.config import settings
from app.models import Message, Token, UserPublic

router = APIRouter(tags=["login"])
logger = logging.getLogger(__name__)


@router.post("/login/access-token")
def login_access_token(
    session: SessionDep, form_data: Annotated[OAuth2PasswordRequestForm, Depends()]
) -> Token:
    """
    OAuth2 compatible token login, get an access token for future requests
    """
    user = crud.authenticate(
        session=session, email=form_data.username, password=form_data.password
    )
    if not user:
        raise HTTPException(status_code=400, detail="Incorrect email or password")
    elif not user.is_active:
        raise HTTPException(status_code=400, detail="Inactive user")

    purged = crud.purge_expired_sessions(session=session, user_id=user.id)
    if purged:
        logger.info("Purged %s expired sessions for user %s", purged, user.id)

    access_token_expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    login_session = crud.create_login_session(
        session=session, user_id=user.id, expires_delta=access_token_expires
    )
    return Token(
        access_token=security.create_access_token(
            user.id, expires_delta=access_token_expires, session_id=login_session.id
        )
    )


@router.post("/login/test-token", response_model=UserPublic)
def test_token(current_user: CurrentUser) -> Any:
    """
    Test access token
    """
    return current_user


@router.post("/logout", response_model=Message)
def logout(session: SessionDep, login_session: CurrentSession) -> Any:
    """
    End the session behind the current access token.
    """
    crud.delete_login_session(session=session, session_id=login_session.id)
    return Message(message="Logged out successfully")


@router.get("/auth/user", response_model=UserPublic)
def read_auth_user(current_user: CurrentUser) -> Any:
    """
    Get the signed-in user.
    """
    return current_user

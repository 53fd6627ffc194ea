import uuid
from collections.abc import Generator
from typing import Annotated

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jwt.exceptions import InvalidTokenError
from pydantic import ValidationError
from sqlmodel import Session

from app import crud
from app.core import security
from app.core.config import settings
from app.core.db import engine
from app.models import ApiEndpoint, LoginSession, Project, TokenPayload, User

reusable_oauth2 = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_V1_STR}/login/access-token"
)


def get_db() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


SessionDep = Annotated[Session, Depends(get_db)]
TokenDep = Annotated[str, Depends(reusable_oauth2)]


def _credentials_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="Could not validate credentials",
    )


def get_current_session(session: SessionDep, token: TokenDep) -> LoginSession:
    try:
        payload = jwt.decode(
            token, settings.SECRET_KEY, algorithms=[security.ALGORITHM]
        )
        token_data = TokenPayload(**payload)
        session_id = uuid.UUID(token_data.sid or "")
    except (InvalidTokenError, ValidationError, ValueError):
        raise _credentials_error()
    login_session = crud.get_login_session(session=session, session_id=session_id)
    if not login_session or login_session.is_expired():
        raise _credentials_error()
    if str(login_session.user_id) != token_data.sub:
        raise _credentials_error()
    return login_session


CurrentSession = Annotated[LoginSession, Depends(get_current_session)]


def get_current_user(session: SessionDep, login_session: CurrentSession) -> User:
    user = crud.get_user(session=session, user_id=login_session.user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    if not user.is_active:
        raise HTTPException(status_code=400, detail="Inactive user")
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


def get_owned_project(project_id: uuid.UUID, session: SessionDep, current_user: CurrentUser) -> Project:
    project = crud.get_project(session=session, project_id=project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    if project.owner_id != current_user.id:
        raise HTTPException(status_code=403, detail="Access denied")
    return project


OwnedProject = Annotated[Project, Depends(get_owned_project)]


def get_project_endpoint(endpoint_id: uuid.UUID, session: SessionDep, project: OwnedProject) -> ApiEndpoint:
    endpoint = crud.get_api_endpoint(session=session, endpoint_id=endpoint_id)
    if not endpoint or endpoint.project_id != project.id:
        raise HTTPException(status_code=404, detail="Endpoint not found")
    return endpoint


ProjectEndpoint = Annotated[ApiEndpoint, Depends(get_project_endpoint)]

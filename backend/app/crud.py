import secrets
import uuid
from datetime import timedelta
from typing import Any

from sqlmodel import Session, col, select

from app.canvas import empty_canvas
from app.core.security import get_password_hash, verify_password
from app.models import (
    ApiEndpoint,
    ApiEndpointCreate,
    ApiEndpointUpdate,
    LoginSession,
    Project,
    ProjectCreate,
    ProjectUpdate,
    User,
    UserCreate,
    UserUpdateMe,
    UserUpsert,
    get_datetime_utc,
)


def create_user(*, session: Session, user_create: UserCreate) -> User:
    db_obj = User.model_validate(
        user_create, update={"hashed_password": get_password_hash(user_create.password)}
    )
    session.add(db_obj)
    session.commit()
    session.refresh(db_obj)
    return db_obj


def update_user(*, session: Session, db_user: User, user_in: UserUpdateMe) -> Any:
    user_data = user_in.model_dump(exclude_unset=True)
    # email is a required column; an explicit null leaves it alone
    if user_data.get("email") is None:
        user_data.pop("email", None)
    db_user.sqlmodel_update(user_data, update={"updated_at": get_datetime_utc()})
    session.add(db_user)
    session.commit()
    session.refresh(db_user)
    return db_user


def upsert_user(*, session: Session, user_in: UserUpsert) -> User:
    """Insert a user, or update the provided profile fields when the email exists."""
    db_user = get_user_by_email(session=session, email=user_in.email)
    user_data = user_in.model_dump(exclude_unset=True, exclude={"email", "password"})
    if db_user is None:
        # Externally provisioned users get an unusable random password.
        password = user_in.password or secrets.token_urlsafe(32)
        db_user = User.model_validate(
            user_in, update={"hashed_password": get_password_hash(password)}
        )
    else:
        extra_data: dict[str, Any] = {"updated_at": get_datetime_utc()}
        if user_in.password:
            extra_data["hashed_password"] = get_password_hash(user_in.password)
        db_user.sqlmodel_update(user_data, update=extra_data)
    session.add(db_user)
    session.commit()
    session.refresh(db_user)
    return db_user


def get_user(*, session: Session, user_id: uuid.UUID) -> User | None:
    return session.get(User, user_id)


def get_user_by_email(*, session: Session, email: str) -> User | None:
    statement = select(User).where(User.email == email)
    session_user = session.exec(statement).first()
    return session_user


# Dummy hash to use for timing attack prevention when user is not found
# This is an Argon2 hash of a random password, used to ensure constant-time comparison
DUMMY_HASH = "$argon2id$v=19$m=65536,t=3,p=4$MjQyZWE1MzBjYjJlZTI0Yw$YTU4NGM5ZTZmYjE2NzZlZjY0ZWY3ZGRkY2U2OWFjNjk"


def authenticate(*, session: Session, email: str, password: str) -> User | None:
    db_user = get_user_by_email(session=session, email=email)
    if not db_user:
        # Keep response time similar whether or not the email exists
        verify_password(password, DUMMY_HASH)
        return None
    verified, updated_password_hash = verify_password(password, db_user.hashed_password)
    if not verified:
        return None
    if updated_password_hash:
        db_user.hashed_password = updated_password_hash
        session.add(db_user)
        session.commit()
        session.refresh(db_user)
    return db_user


# Sessions

def create_login_session(
    *, session: Session, user_id: uuid.UUID, expires_delta: timedelta
) -> LoginSession:
    db_session = LoginSession(
        user_id=user_id, expires_at=get_datetime_utc() + expires_delta
    )
    session.add(db_session)
    session.commit()
    session.refresh(db_session)
    return db_session


def get_login_session(*, session: Session, session_id: uuid.UUID) -> LoginSession | None:
    return session.get(LoginSession, session_id)


def delete_login_session(*, session: Session, session_id: uuid.UUID) -> None:
    db_session = session.get(LoginSession, session_id)
    if db_session:
        session.delete(db_session)
        session.commit()


def purge_expired_sessions(*, session: Session, user_id: uuid.UUID) -> int:
    statement = select(LoginSession).where(LoginSession.user_id == user_id)
    expired = [s for s in session.exec(statement).all() if s.is_expired()]
    for login_session in expired:
        session.delete(login_session)
    session.commit()
    return len(expired)


# Projects

def get_user_projects(*, session: Session, owner_id: uuid.UUID) -> list[Project]:
    statement = (
        select(Project)
        .where(Project.owner_id == owner_id)
        .order_by(col(Project.updated_at).desc())
    )
    return list(session.exec(statement).all())


def get_project(*, session: Session, project_id: uuid.UUID) -> Project | None:
    return session.get(Project, project_id)


def create_project(*, session: Session, project_in: ProjectCreate, owner_id: uuid.UUID) -> Project:
    db_project = Project.model_validate(
        project_in,
        update={
            "owner_id": owner_id,
            "canvas_data": project_in.canvas_data or empty_canvas(),
        },
    )
    session.add(db_project)
    session.commit()
    session.refresh(db_project)
    return db_project


def update_project(*, session: Session, db_project: Project, project_in: ProjectUpdate) -> Project:
    project_data = project_in.model_dump(exclude_unset=True)
    for key in ("title", "canvas_data"):
        if project_data.get(key) is None:
            project_data.pop(key, None)
    db_project.sqlmodel_update(project_data, update={"updated_at": get_datetime_utc()})
    session.add(db_project)
    session.commit()
    session.refresh(db_project)
    return db_project


def delete_project(*, session: Session, project_id: uuid.UUID) -> None:
    db_project = session.get(Project, project_id)
    if db_project:
        session.delete(db_project)
        session.commit()


# API endpoints

def get_project_endpoints(*, session: Session, project_id: uuid.UUID) -> list[ApiEndpoint]:
    statement = (
        select(ApiEndpoint)
        .where(ApiEndpoint.project_id == project_id)
        .order_by(col(ApiEndpoint.created_at).desc())
    )
    return list(session.exec(statement).all())


def get_api_endpoint(*, session: Session, endpoint_id: uuid.UUID) -> ApiEndpoint | None:
    return session.get(ApiEndpoint, endpoint_id)


def create_api_endpoint(
    *, session: Session, endpoint_in: ApiEndpointCreate, project_id: uuid.UUID
) -> ApiEndpoint:
    db_endpoint = ApiEndpoint.model_validate(endpoint_in, update={"project_id": project_id})
    session.add(db_endpoint)
    session.commit()
    session.refresh(db_endpoint)
    return db_endpoint


def update_api_endpoint(
    *, session: Session, db_endpoint: ApiEndpoint, endpoint_in: ApiEndpointUpdate
) -> ApiEndpoint:
    endpoint_data = endpoint_in.model_dump(exclude_unset=True)
    # method and path are required columns; an explicit null leaves them alone
    for key in ("method", "path"):
        if endpoint_data.get(key) is None:
            endpoint_data.pop(key, None)
    db_endpoint.sqlmodel_update(endpoint_data, update={"updated_at": get_datetime_utc()})
    session.add(db_endpoint)
    session.commit()
    session.refresh(db_endpoint)
    return db_endpoint


def delete_api_endpoint(*, session: Session, endpoint_id: uuid.UUID) -> None:
    db_endpoint = session.get(ApiEndpoint, endpoint_id)
    if db_endpoint:
        session.delete(db_endpoint)
        session.commit()

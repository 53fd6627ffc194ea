import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import EmailStr, field_validator
from sqlalchemy import DateTime, JSON
from sqlmodel import Field, Relationship, SQLModel

from app.canvas import Canvas, empty_canvas

HTTP_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")


def get_datetime_utc() -> datetime:
    return datetime.now(timezone.utc)


def _validate_canvas(value: dict[str, Any] | None) -> dict[str, Any] | None:
    if value is None:
        return None
    return Canvas.model_validate(value).model_dump(mode="json")


def _validate_method(value: str | None) -> str | None:
    if value is None:
        return None
    method = value.strip().upper()
    if method not in HTTP_METHODS:
        raise ValueError(f"method must be one of {', '.join(HTTP_METHODS)}")
    return method


def _validate_path(value: str | None) -> str | None:
    if value is None:
        return None
    path = value.strip()
    if not path.startswith("/"):
        raise ValueError("path must start with '/'")
    return path


# Shared properties
class UserBase(SQLModel):
    email: EmailStr = Field(unique=True, index=True, max_length=255)
    is_active: bool = True
    is_superuser: bool = False
    full_name: str | None = Field(default=None, max_length=255)
    first_name: str | None = Field(default=None, max_length=255)
    last_name: str | None = Field(default=None, max_length=255)
    profile_image_url: str | None = Field(default=None, max_length=2048)


# Properties to receive via API on creation
class UserCreate(UserBase):
    password: str = Field(min_length=8, max_length=128)


class UserRegister(SQLModel):
    email: EmailStr = Field(max_length=255)
    password: str = Field(min_length=8, max_length=128)
    full_name: str | None = Field(default=None, max_length=255)


# Insert-or-update by email; profile fields left unset keep their stored value
class UserUpsert(SQLModel):
    email: EmailStr = Field(max_length=255)
    full_name: str | None = Field(default=None, max_length=255)
    first_name: str | None = Field(default=None, max_length=255)
    last_name: str | None = Field(default=None, max_length=255)
    profile_image_url: str | None = Field(default=None, max_length=2048)
    password: str | None = Field(default=None, min_length=8, max_length=128)


class UserUpdateMe(SQLModel):
    full_name: str | None = Field(default=None, max_length=255)
    first_name: str | None = Field(default=None, max_length=255)
    last_name: str | None = Field(default=None, max_length=255)
    profile_image_url: str | None = Field(default=None, max_length=2048)
    email: EmailStr | None = Field(default=None, max_length=255)


class UpdatePassword(SQLModel):
    current_password: str = Field(min_length=8, max_length=128)
    new_password: str = Field(min_length=8, max_length=128)


# Database model, database table inferred from class name
class User(UserBase, table=True):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    hashed_password: str
    created_at: datetime | None = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
    )
    updated_at: datetime | None = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
    )
    projects: list["Project"] = Relationship(back_populates="owner", cascade_delete=True)
    sessions: list["LoginSession"] = Relationship(back_populates="user", cascade_delete=True)


# Properties to return via API, id is always required
class UserPublic(UserBase):
    id: uuid.UUID
    created_at: datetime | None = None
    updated_at: datetime | None = None


# Generic message
class Message(SQLModel):
    message: str


# JSON payload containing access token
class Token(SQLModel):
    access_token: str
    token_type: str = "bearer"


# Contents of JWT token
class TokenPayload(SQLModel):
    sub: str | None = None
    sid: str | None = None


# Server-side session; the access token carries its id as "sid"
class LoginSession(SQLModel, table=True):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: uuid.UUID = Field(
        foreign_key="user.id", nullable=False, ondelete="CASCADE", index=True
    )
    created_at: datetime | None = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
    )
    expires_at: datetime = Field(sa_type=DateTime(timezone=True))  # type: ignore
    user: User | None = Relationship(back_populates="sessions")

    def is_expired(self, now: datetime | None = None) -> bool:
        expires_at = self.expires_at
        # SQLite hands timestamps back naive; they were written as UTC.
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return expires_at <= (now or get_datetime_utc())


# Projects

class ProjectBase(SQLModel):
    title: str = Field(min_length=1, max_length=255)
    description: str | None = Field(default=None)


class ProjectCreate(ProjectBase):
    canvas_data: dict[str, Any] | None = None
    generated_code: dict[str, Any] | None = None

    @field_validator("canvas_data")
    @classmethod
    def check_canvas(cls, v: dict[str, Any] | None) -> dict[str, Any] | None:
        return _validate_canvas(v)


class ProjectUpdate(SQLModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    canvas_data: dict[str, Any] | None = None
    generated_code: dict[str, Any] | None = None

    @field_validator("canvas_data")
    @classmethod
    def check_canvas(cls, v: dict[str, Any] | None) -> dict[str, Any] | None:
        return _validate_canvas(v)


class Project(ProjectBase, table=True):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    canvas_data: dict = Field(default_factory=empty_canvas, sa_type=JSON)
    generated_code: dict | None = Field(default=None, sa_type=JSON)
    created_at: datetime | None = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
    )
    updated_at: datetime | None = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
    )
    owner_id: uuid.UUID = Field(
        foreign_key="user.id", nullable=False, ondelete="CASCADE"
    )
    owner: User | None = Relationship(back_populates="projects")
    endpoints: list["ApiEndpoint"] = Relationship(back_populates="project", cascade_delete=True)


class ProjectPublic(ProjectBase):
    id: uuid.UUID
    owner_id: uuid.UUID
    canvas_data: dict[str, Any]
    generated_code: dict[str, Any] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


# API endpoints described on a project, kept for later code generation

class ApiEndpointBase(SQLModel):
    method: str = Field(max_length=10)
    path: str = Field(min_length=1, max_length=255)
    description: str | None = Field(default=None)
    request_schema: dict | None = Field(default=None, sa_type=JSON)
    response_schema: dict | None = Field(default=None, sa_type=JSON)

    @field_validator("method")
    @classmethod
    def check_method(cls, v: str) -> str:
        return _validate_method(v)

    @field_validator("path")
    @classmethod
    def check_path(cls, v: str) -> str:
        return _validate_path(v)


class ApiEndpointCreate(ApiEndpointBase):
    pass


class ApiEndpointUpdate(SQLModel):
    method: str | None = Field(default=None, max_length=10)
    path: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    request_schema: dict[str, Any] | None = None
    response_schema: dict[str, Any] | None = None

    @field_validator("method")
    @classmethod
    def check_method(cls, v: str | None) -> str | None:
        return _validate_method(v)

    @field_validator("path")
    @classmethod
    def check_path(cls, v: str | None) -> str | None:
        return _validate_path(v)


class ApiEndpoint(ApiEndpointBase, table=True):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    created_at: datetime | None = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
    )
    updated_at: datetime | None = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
    )
    project_id: uuid.UUID = Field(
        foreign_key="project.id", nullable=False, ondelete="CASCADE"
    )
    project: Project | None = Relationship(back_populates="endpoints")


class ApiEndpointPublic(ApiEndpointBase):
    id: uuid.UUID
    project_id: uuid.UUID
    created_at: datetime | None = None
    updated_at: datetime | None = None

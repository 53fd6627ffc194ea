import uuid

from fastapi.testclient import TestClient
from sqlmodel import Session

from app import crud
from app.core.config import settings
from app.core.security import verify_password
from app.tests.utils.user import user_authentication_headers
from app.tests.utils.utils import random_email, random_lower_string


def _signup(client: TestClient) -> tuple[str, str, dict[str, str]]:
    email = random_email()
    password = random_lower_string()
    r = client.post(
        f"{settings.API_V1_STR}/users/signup",
        json={"email": email, "password": password, "full_name": "Site Owner"},
    )
    assert r.status_code == 200
    headers = user_authentication_headers(client=client, email=email, password=password)
    return email, password, headers


def test_register_user(client: TestClient, db: Session) -> None:
    email, _, _ = _signup(client)
    user_db = crud.get_user_by_email(session=db, email=email)
    assert user_db
    assert user_db.full_name == "Site Owner"


def test_register_user_already_exists_error(client: TestClient) -> None:
    r = client.post(
        f"{settings.API_V1_STR}/users/signup",
        json={"email": settings.FIRST_SUPERUSER, "password": random_lower_string()},
    )
    assert r.status_code == 400
    assert r.json()["detail"] == "The user with this email already exists in the system"


def test_update_user_me(client: TestClient) -> None:
    _, _, headers = _signup(client)
    r = client.patch(
        f"{settings.API_V1_STR}/users/me",
        headers=headers,
        json={"first_name": "Grace", "last_name": "Hopper"},
    )
    assert r.status_code == 200
    updated = r.json()
    assert updated["first_name"] == "Grace"
    assert updated["last_name"] == "Hopper"


def test_update_user_me_email_exists(client: TestClient) -> None:
    _, _, headers = _signup(client)
    r = client.patch(
        f"{settings.API_V1_STR}/users/me",
        headers=headers,
        json={"email": settings.FIRST_SUPERUSER},
    )
    assert r.status_code == 409


def test_update_user_me_null_email_keeps_current(client: TestClient) -> None:
    email, _, headers = _signup(client)
    r = client.patch(
        f"{settings.API_V1_STR}/users/me",
        headers=headers,
        json={"email": None, "first_name": "Ada"},
    )
    assert r.status_code == 200
    updated = r.json()
    assert updated["email"] == email
    assert updated["first_name"] == "Ada"


def test_update_password_me(client: TestClient, db: Session) -> None:
    email, password, headers = _signup(client)
    new_password = random_lower_string()
    r = client.patch(
        f"{settings.API_V1_STR}/users/me/password",
        headers=headers,
        json={"current_password": password, "new_password": new_password},
    )
    assert r.status_code == 200

    user_db = crud.get_user_by_email(session=db, email=email)
    assert user_db
    db.refresh(user_db)
    verified, _ = verify_password(new_password, user_db.hashed_password)
    assert verified


def test_update_password_me_incorrect_password(client: TestClient) -> None:
    _, _, headers = _signup(client)
    r = client.patch(
        f"{settings.API_V1_STR}/users/me/password",
        headers=headers,
        json={"current_password": random_lower_string(), "new_password": random_lower_string()},
    )
    assert r.status_code == 400
    assert r.json()["detail"] == "Incorrect password"


def test_delete_user_me(client: TestClient, db: Session) -> None:
    email, _, headers = _signup(client)
    r = client.post(f"{settings.API_V1_STR}/projects/", headers=headers, json={"title": "Mine"})
    assert r.status_code == 201
    project_id = r.json()["id"]

    r = client.delete(f"{settings.API_V1_STR}/users/me", headers=headers)
    assert r.status_code == 200
    assert r.json()["message"] == "User deleted successfully"

    db.expire_all()
    assert crud.get_user_by_email(session=db, email=email) is None
    assert crud.get_project(session=db, project_id=uuid.UUID(project_id)) is None


def test_delete_user_me_as_superuser(
    client: TestClient, superuser_token_headers: dict[str, str]
) -> None:
    r = client.delete(f"{settings.API_V1_STR}/users/me", headers=superuser_token_headers)
    assert r.status_code == 403

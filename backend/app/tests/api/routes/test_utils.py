from fastapi.testclient import TestClient

from app.core.config import settings


def test_health_check(client: TestClient) -> None:
    r = client.get(f"{settings.API_V1_STR}/utils/health-check/")
    assert r.status_code == 200
    assert r.json() is True


def test_db_check(client: TestClient) -> None:
    r = client.get(f"{settings.API_V1_STR}/utils/db-check/")
    assert r.status_code == 200
    assert r.json() is True


def test_private_upsert_user(client: TestClient) -> None:
    url = f"{settings.API_V1_STR}/private/users/"
    r = client.post(url, json={"email": "oidc-user@example.com", "first_name": "Lin"})
    assert r.status_code == 200
    created = r.json()

    r = client.post(url, json={"email": "oidc-user@example.com", "profile_image_url": "https://img.example.com/lin.png"})
    assert r.status_code == 200
    updated = r.json()
    assert updated["id"] == created["id"]
    assert updated["first_name"] == "Lin"
    assert updated["profile_image_url"] == "https://img.example.com/lin.png"

from typing import Any

from fastapi import APIRouter

from app import crud
from app.api.deps import SessionDep
from app.models import UserPublic, UserUpsert

router = APIRouter(tags=["private"], prefix="/private")


@router.post("/users/", response_model=UserPublic)
def upsert_user(user_in: UserUpsert, session: SessionDep) -> Any:
    """
    Create a user or refresh an existing one's profile, keyed by email.
    """
    return crud.upsert_user(session=session, user_in=user_in)

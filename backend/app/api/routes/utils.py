import logging

from fastapi import APIRouter, HTTPException
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from app.api.deps import SessionDep

router = APIRouter(prefix="/utils", tags=["utils"])
logger = logging.getLogger(__name__)


@router.get("/health-check/")
async def health_check() -> bool:
    return True


@router.get("/db-check/")
def db_check(session: SessionDep) -> bool:
    try:
        session.exec(text("SELECT 1"))  # type: ignore[call-overload]
    except OperationalError as exc:
        logger.error("Database health check failed: %s", exc)
        raise HTTPException(
            status_code=503,
            detail="Database connection unavailable. Please retry in a moment.",
        ) from exc
    return True

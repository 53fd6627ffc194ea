from fastapi import APIRouter

from app.api.routes import ai, components, endpoints, login, private, projects, users, utils
from app.core.config import settings

api_router = APIRouter()
api_router.include_router(login.router)
api_router.include_router(users.router)
api_router.include_router(utils.router)
api_router.include_router(projects.router)
api_router.include_router(endpoints.router)
api_router.include_router(components.router)
api_router.include_router(ai.router)

if settings.ENVIRONMENT == "local":
    api_router.include_router(private.router)

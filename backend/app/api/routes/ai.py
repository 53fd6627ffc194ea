import logging
from typing import Any

from fastapi import APIRouter, HTTPException
from openai import OpenAIError
from pydantic import BaseModel, Field

from app.agent.artifacts import (
    BackendRequest,
    ComponentRequest,
    GeneratedBackend,
    GeneratedComponent,
    GeneratedSite,
    OptimizedCode,
    OptimizeRequest,
)
from app.agent.backend_agent import BackendAgent
from app.agent.component_agent import ComponentAgent
from app.agent.optimizer_agent import OptimizerAgent
from app.agent.site_agent import SiteAgent
from app.api.deps import CurrentUser, SessionDep
from app.canvas import layout_sections
from app.crud import create_project
from app.models import ProjectCreate, ProjectPublic

router = APIRouter(prefix="/ai", tags=["ai"])
logger = logging.getLogger(__name__)


class BuildFromPromptRequest(BaseModel):
    prompt: str = Field(max_length=5000)


class BuildFromPromptResult(BaseModel):
    project: ProjectPublic
    site: GeneratedSite


def _missing_fields(payload: BaseModel, required: list[str]) -> list[str]:
    missing = []
    for name in required:
        value = getattr(payload, name)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(type(payload).model_fields[name].alias or name)
    return missing


@router.post("/generate-component", response_model=GeneratedComponent)
async def generate_component(payload: ComponentRequest, current_user: CurrentUser) -> Any:
    missing = _missing_fields(payload, ["component_type", "framework", "style_preferences"])
    if missing:
        raise HTTPException(
            status_code=400,
            detail=f"Missing required fields: {', '.join(missing)}",
        )
    try:
        return await ComponentAgent().run(payload)
    except OpenAIError as exc:
        logger.error("Error generating component: %s", exc)
        raise HTTPException(
            status_code=500,
            detail="Failed to generate component. Please check your API key and try again.",
        ) from exc


@router.post("/generate-backend", response_model=GeneratedBackend)
async def generate_backend(payload: BackendRequest, current_user: CurrentUser) -> Any:
    missing = _missing_fields(payload, ["database", "framework", "features"])
    if missing:
        raise HTTPException(
            status_code=400,
            detail=f"Missing required fields: {', '.join(missing)}",
        )
    try:
        return await BackendAgent().run(payload)
    except OpenAIError as exc:
        logger.error("Error generating backend: %s", exc)
        raise HTTPException(
            status_code=500,
            detail="Failed to generate backend code. Please check your API key and try again.",
        ) from exc


@router.post("/optimize-code", response_model=OptimizedCode)
async def optimize_code(payload: OptimizeRequest, current_user: CurrentUser) -> Any:
    try:
        agent = OptimizerAgent()
    except OpenAIError as exc:
        logger.warning("Optimizer unavailable, returning original code: %s", exc)
        return OptimizedCode(code=payload.code, optimized=False)
    return await agent.run(payload)


@router.post("/build-from-prompt", response_model=BuildFromPromptResult, status_code=201)
async def build_from_prompt(
    payload: BuildFromPromptRequest, session: SessionDep, current_user: CurrentUser
) -> Any:
    """
    Generate a whole site from a description and store it as a new project,
    with its sections placed on the canvas.
    """
    prompt = payload.prompt.strip()
    if not prompt:
        raise HTTPException(status_code=400, detail="Please describe what you want to build")

    try:
        site = await SiteAgent().run(prompt)
    except OpenAIError as exc:
        logger.error("Error building site from prompt: %s", exc)
        raise HTTPException(
            status_code=500,
            detail="Failed to build from prompt. Please check your API key and try again.",
        ) from exc

    canvas = layout_sections([section.to_canvas_section() for section in site.sections])
    project = create_project(
        session=session,
        project_in=ProjectCreate(
            title=site.title,
            description=site.description or None,
            canvas_data=canvas.model_dump(mode="json"),
            generated_code={"html": site.html} if site.html else None,
        ),
        owner_id=current_user.id,
    )
    logger.info(
        "Built project %s from prompt with %s sections", project.id, len(canvas.nodes)
    )
    return BuildFromPromptResult(project=ProjectPublic.model_validate(project), site=site)

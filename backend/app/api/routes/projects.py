from typing import Any

from fastapi import APIRouter, Response

from app.api.deps import CurrentUser, OwnedProject, SessionDep
from app.canvas import Canvas
from app.crud import create_project, delete_project, get_user_projects, update_project
from app.models import ProjectCreate, ProjectPublic, ProjectUpdate

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("/", response_model=list[ProjectPublic])
def read_projects(session: SessionDep, current_user: CurrentUser) -> Any:
    """
    Projects owned by the current user, most recently updated first.
    """
    return get_user_projects(session=session, owner_id=current_user.id)


@router.post("/", response_model=ProjectPublic, status_code=201)
def create_new_project(
    *,
    session: SessionDep,
    current_user: CurrentUser,
    project_in: ProjectCreate
) -> Any:
    project = create_project(session=session, project_in=project_in, owner_id=current_user.id)
    return project


@router.get("/{project_id}", response_model=ProjectPublic)
def read_project(project: OwnedProject) -> Any:
    return project


@router.put("/{project_id}", response_model=ProjectPublic)
def update_existing_project(
    *,
    session: SessionDep,
    project: OwnedProject,
    project_in: ProjectUpdate
) -> Any:
    return update_project(session=session, db_project=project, project_in=project_in)


@router.delete("/{project_id}", status_code=204)
def delete_existing_project(session: SessionDep, project: OwnedProject) -> Response:
    delete_project(session=session, project_id=project.id)
    return Response(status_code=204)


@router.get("/{project_id}/canvas", response_model=Canvas)
def read_project_canvas(project: OwnedProject) -> Any:
    return Canvas.model_validate(project.canvas_data or {})


@router.put("/{project_id}/canvas", response_model=Canvas)
def replace_project_canvas(
    *,
    session: SessionDep,
    project: OwnedProject,
    canvas: Canvas
) -> Any:
    project = update_project(
        session=session,
        db_project=project,
        project_in=ProjectUpdate(canvas_data=canvas.model_dump(mode="json")),
    )
    return Canvas.model_validate(project.canvas_data)

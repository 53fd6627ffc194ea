from typing import Any

from fastapi import APIRouter, Response

from app import crud
from app.api.deps import OwnedProject, ProjectEndpoint, SessionDep
from app.models import ApiEndpointCreate, ApiEndpointPublic, ApiEndpointUpdate

router = APIRouter(prefix="/projects/{project_id}/endpoints", tags=["endpoints"])


@router.get("", response_model=list[ApiEndpointPublic])
def read_project_endpoints(session: SessionDep, project: OwnedProject) -> Any:
    """
    Endpoints described on a project, newest first.
    """
    return crud.get_project_endpoints(session=session, project_id=project.id)


@router.post("", response_model=ApiEndpointPublic, status_code=201)
def create_project_endpoint(
    *,
    session: SessionDep,
    project: OwnedProject,
    endpoint_in: ApiEndpointCreate
) -> Any:
    return crud.create_api_endpoint(
        session=session, endpoint_in=endpoint_in, project_id=project.id
    )


@router.put("/{endpoint_id}", response_model=ApiEndpointPublic)
def update_project_endpoint(
    *,
    session: SessionDep,
    endpoint: ProjectEndpoint,
    endpoint_in: ApiEndpointUpdate
) -> Any:
    return crud.update_api_endpoint(
        session=session, db_endpoint=endpoint, endpoint_in=endpoint_in
    )


@router.delete("/{endpoint_id}", status_code=204)
def delete_project_endpoint(session: SessionDep, endpoint: ProjectEndpoint) -> Response:
    crud.delete_api_endpoint(session=session, endpoint_id=endpoint.id)
    return Response(status_code=204)

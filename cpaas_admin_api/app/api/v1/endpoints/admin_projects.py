"""Project endpoints for administrators (read-only)."""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from cpaas_admin_api.app.api.deps import list_params, provide
from cpaas_admin_api.app.core.security import require_permissions
from cpaas_admin_api.app.schemas.common import PageRead
from cpaas_admin_api.app.schemas.project import ProjectRead
from cpaas_admin_api.app.services.project_service import ProjectService


router = APIRouter()


@router.get("", response_model=PageRead[ProjectRead])
async def list_projects(
    current_user: dict = Depends(require_permissions("admin")),
    params: Dict[str, Any] = Depends(list_params),
    service: ProjectService = Depends(provide(ProjectService)),
) -> Dict[str, Any]:
    """List projects, filterable by **user_id** and **status**."""
    page = await service.list_projects(params)
    return page.to_dict()


@router.get("/{project_id}", response_model=ProjectRead)
async def get_project(
    project_id: str,
    current_user: dict = Depends(require_permissions("admin")),
    service: ProjectService = Depends(provide(ProjectService)),
) -> Dict[str, Any]:
    return await service.get_project(project_id)

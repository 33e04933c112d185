"""Third-party integration endpoints."""

from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from fastapi.responses import Response

from cpaas_admin_api.app.api.deps import list_params, provide
from cpaas_admin_api.app.core.security import get_current_user
from cpaas_admin_api.app.schemas.common import PageRead
from cpaas_admin_api.app.schemas.integration import IntegrationCreate, IntegrationRead, IntegrationUpdate
from cpaas_admin_api.app.services.integration_service import IntegrationService


router = APIRouter()


@router.get("", response_model=PageRead[IntegrationRead])
async def list_integrations(
    current_user: dict = Depends(get_current_user),
    params: Dict[str, Any] = Depends(list_params),
    service: IntegrationService = Depends(provide(IntegrationService)),
) -> Dict[str, Any]:
    """List integrations, filterable by **type** and **connected**."""
    page = await service.list_integrations(params)
    return page.to_dict()


@router.post("", response_model=IntegrationRead, status_code=status.HTTP_201_CREATED)
async def create_integration(
    integration: IntegrationCreate,
    current_user: dict = Depends(get_current_user),
    service: IntegrationService = Depends(provide(IntegrationService)),
) -> Dict[str, Any]:
    return await service.create_integration(integration)


@router.get("/{integration_id}", response_model=IntegrationRead)
async def get_integration(
    integration_id: str,
    current_user: dict = Depends(get_current_user),
    service: IntegrationService = Depends(provide(IntegrationService)),
) -> Dict[str, Any]:
    return await service.get_integration(integration_id)


@router.put("/{integration_id}", response_model=IntegrationRead)
async def update_integration(
    integration_id: str,
    updates: IntegrationUpdate,
    current_user: dict = Depends(get_current_user),
    service: IntegrationService = Depends(provide(IntegrationService)),
) -> Dict[str, Any]:
    return await service.update_integration(integration_id, updates)


@router.delete("/{integration_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_integration(
    integration_id: str,
    current_user: dict = Depends(get_current_user),
    service: IntegrationService = Depends(provide(IntegrationService)),
) -> Response:
    await service.delete_integration(integration_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

"""Webhook subscription endpoints."""

from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from fastapi.responses import Response

from cpaas_admin_api.app.api.deps import list_params, provide
from cpaas_admin_api.app.core.security import get_current_user
from cpaas_admin_api.app.schemas.common import PageRead
from cpaas_admin_api.app.schemas.webhook import WebhookCreate, WebhookRead, WebhookUpdate
from cpaas_admin_api.app.services.webhook_service import WebhookService


router = APIRouter()


@router.get("", response_model=PageRead[WebhookRead])
async def list_webhooks(
    current_user: dict = Depends(get_current_user),
    params: Dict[str, Any] = Depends(list_params),
    service: WebhookService = Depends(provide(WebhookService)),
) -> Dict[str, Any]:
    """List webhooks, filterable by **isActive** (``true``/``false``)."""
    page = await service.list_webhooks(params)
    return page.to_dict()


@router.post("", response_model=WebhookRead, status_code=status.HTTP_201_CREATED)
async def create_webhook(
    webhook: WebhookCreate,
    current_user: dict = Depends(get_current_user),
    service: WebhookService = Depends(provide(WebhookService)),
) -> Dict[str, Any]:
    """Register a webhook.  The url must be http(s) and at least one event is required."""
    return await service.create_webhook(webhook)


@router.get("/{webhook_id}", response_model=WebhookRead)
async def get_webhook(
    webhook_id: str,
    current_user: dict = Depends(get_current_user),
    service: WebhookService = Depends(provide(WebhookService)),
) -> Dict[str, Any]:
    return await service.get_webhook(webhook_id)


@router.put("/{webhook_id}", response_model=WebhookRead)
async def update_webhook(
    webhook_id: str,
    updates: WebhookUpdate,
    current_user: dict = Depends(get_current_user),
    service: WebhookService = Depends(provide(WebhookService)),
) -> Dict[str, Any]:
    return await service.update_webhook(webhook_id, updates)


@router.delete("/{webhook_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_webhook(
    webhook_id: str,
    current_user: dict = Depends(get_current_user),
    service: WebhookService = Depends(provide(WebhookService)),
) -> Response:
    await service.delete_webhook(webhook_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

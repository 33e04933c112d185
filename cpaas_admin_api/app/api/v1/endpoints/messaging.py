"""Message delivery log endpoints."""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from cpaas_admin_api.app.api.deps import list_params, provide
from cpaas_admin_api.app.core.security import get_current_user
from cpaas_admin_api.app.schemas.message_log import MessageLogDetail, MessageLogPage
from cpaas_admin_api.app.services.message_log_service import MessageLogService


router = APIRouter()


@router.get("/logs", response_model=MessageLogPage)
async def list_message_logs(
    current_user: dict = Depends(get_current_user),
    params: Dict[str, Any] = Depends(list_params),
    service: MessageLogService = Depends(provide(MessageLogService)),
) -> Dict[str, Any]:
    """List message logs, newest first, with a summary of the filtered set.

    - **channel**, **direction**, **status**, **campaign_id**, **template_id**: exact filters.
    - **sender**, **recipient**: case-insensitive substring filters.
    - **search**: matches content, sender, recipient, campaign and template names and message id.
    """
    page, summary = await service.list_message_logs(params)
    return {**page.to_dict(), "summary": summary}


@router.get("/logs/{log_id}", response_model=MessageLogDetail)
async def get_message_log(
    log_id: str,
    current_user: dict = Depends(get_current_user),
    service: MessageLogService = Depends(provide(MessageLogService)),
) -> Dict[str, Any]:
    """Return one message log with its delivery history."""
    return await service.get_message_log(log_id)

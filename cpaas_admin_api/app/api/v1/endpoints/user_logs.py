"""Activity logs of the authenticated user."""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from cpaas_admin_api.app.api.deps import list_params, provide
from cpaas_admin_api.app.api.v1.endpoints.admin_logs import attachment
from cpaas_admin_api.app.core.security import get_current_user
from cpaas_admin_api.app.schemas.common import PageRead
from cpaas_admin_api.app.schemas.log import LogRead
from cpaas_admin_api.app.services.log_service import LogService


router = APIRouter()


@router.get("", response_model=PageRead[LogRead])
async def list_my_logs(
    current_user: dict = Depends(get_current_user),
    params: Dict[str, Any] = Depends(list_params),
    service: LogService = Depends(provide(LogService)),
) -> Dict[str, Any]:
    """List the caller's own logs, filterable by **level** and searchable by message and source."""
    page = await service.list_user_logs(current_user["user_id"], params)
    return page.to_dict()


@router.get("/download")
async def download_my_logs(
    fmt: Optional[str] = Query("json", alias="format", description="json, csv or txt"),
    current_user: dict = Depends(get_current_user),
    params: Dict[str, Any] = Depends(list_params),
    service: LogService = Depends(provide(LogService)),
) -> Response:
    export = await service.export_user_logs(current_user["user_id"], params, fmt)
    return attachment(export)

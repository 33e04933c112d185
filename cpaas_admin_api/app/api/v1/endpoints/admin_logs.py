"""
System log endpoints for administrators.

Besides the paginated listing, ``/download`` streams every matching log
as a JSON, CSV or plain-text attachment.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from cpaas_admin_api.app.api.deps import list_params, provide
from cpaas_admin_api.app.core.security import require_permissions
from cpaas_admin_api.app.schemas.common import PageRead
from cpaas_admin_api.app.schemas.log import LogRead
from cpaas_admin_api.app.services.log_service import LogExport, LogService


router = APIRouter()


def attachment(export: LogExport) -> Response:
    return Response(
        content=export.content,
        media_type=export.media_type,
        headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
    )


@router.get("", response_model=PageRead[LogRead])
async def list_logs(
    current_user: dict = Depends(require_permissions("admin")),
    params: Dict[str, Any] = Depends(list_params),
    service: LogService = Depends(provide(LogService)),
) -> Dict[str, Any]:
    """List system logs, newest first.

    - **level**: ``debug``, ``info``, ``warn``, ``error`` or ``fatal``.
    - **userId**, **source**: exact filters.
    - **search**: matches message, source, user id and request id.
    """
    page = await service.list_logs(params)
    return page.to_dict()


@router.get("/download")
async def download_logs(
    fmt: Optional[str] = Query("json", alias="format", description="json, csv or txt"),
    current_user: dict = Depends(require_permissions("admin")),
    params: Dict[str, Any] = Depends(list_params),
    service: LogService = Depends(provide(LogService)),
) -> Response:
    """Download the system logs matching the filters as a file."""
    export = await service.export_logs(params, fmt)
    return attachment(export)

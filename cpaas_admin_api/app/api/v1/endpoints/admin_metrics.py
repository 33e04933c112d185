"""Dashboard metrics endpoint for administrators."""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from cpaas_admin_api.app.api.deps import provide
from cpaas_admin_api.app.core.security import require_permissions
from cpaas_admin_api.app.services.metrics_service import MetricsService


router = APIRouter()


@router.get("")
async def get_metrics(
    metric_type: Optional[str] = Query("overview", alias="type", description="overview, timeseries or alerts"),
    timeframe: Optional[str] = Query("24h", description="1h, 6h, 12h or 24h (timeseries only)"),
    current_user: dict = Depends(require_permissions("admin")),
    service: MetricsService = Depends(provide(MetricsService)),
) -> Dict[str, Any]:
    """Return aggregated platform metrics.

    An unknown ``type`` results in a 400 response.
    """
    return await service.get_metrics(metric_type, timeframe)

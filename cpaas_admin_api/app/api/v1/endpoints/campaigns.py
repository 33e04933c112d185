"""
Campaign endpoints.

CRUD over messaging campaigns.  Any authenticated user may manage
campaigns; new campaigns always start as drafts.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from cpaas_admin_api.app.api.deps import list_params, provide
from cpaas_admin_api.app.core.security import get_current_user
from cpaas_admin_api.app.schemas.campaign import CampaignCreate, CampaignRead, CampaignUpdate
from cpaas_admin_api.app.schemas.common import MessageRead, PageRead
from cpaas_admin_api.app.services.campaign_service import CampaignService


router = APIRouter()


@router.get("", response_model=PageRead[CampaignRead])
async def list_campaigns(
    current_user: dict = Depends(get_current_user),
    params: Dict[str, Any] = Depends(list_params),
    service: CampaignService = Depends(provide(CampaignService)),
) -> Dict[str, Any]:
    """List campaigns.

    - **status**, **channel**: exact filters; ``all`` disables the filter.
    - **search**: matches name, description and content.
    """
    page = await service.list_campaigns(params)
    return page.to_dict()


@router.post("", response_model=CampaignRead, status_code=status.HTTP_201_CREATED)
async def create_campaign(
    campaign: CampaignCreate,
    current_user: dict = Depends(get_current_user),
    service: CampaignService = Depends(provide(CampaignService)),
) -> Dict[str, Any]:
    return await service.create_campaign(campaign)


@router.get("/{campaign_id}", response_model=CampaignRead)
async def get_campaign(
    campaign_id: str,
    current_user: dict = Depends(get_current_user),
    service: CampaignService = Depends(provide(CampaignService)),
) -> Dict[str, Any]:
    return await service.get_campaign(campaign_id)


@router.put("/{campaign_id}", response_model=CampaignRead)
async def update_campaign(
    campaign_id: str,
    updates: CampaignUpdate,
    current_user: dict = Depends(get_current_user),
    service: CampaignService = Depends(provide(CampaignService)),
) -> Dict[str, Any]:
    """Update a campaign.  ``updated_at`` is refreshed on every change."""
    return await service.update_campaign(campaign_id, updates)


@router.delete("/{campaign_id}", response_model=MessageRead)
async def delete_campaign(
    campaign_id: str,
    current_user: dict = Depends(get_current_user),
    service: CampaignService = Depends(provide(CampaignService)),
) -> Dict[str, str]:
    await service.delete_campaign(campaign_id)
    return {"message": "Campaign deleted successfully"}

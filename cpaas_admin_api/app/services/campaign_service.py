"""
Business logic for messaging campaigns.

New campaigns always start as drafts with an empty audience; the
audience counters are owned by the delivery pipeline and cannot be
changed through updates.
"""

import logging
from typing import Any, Dict, Mapping

from ..core.query import Page, ResourceQuerySpec, run_list_query
from ..repositories import generate_id
from ..schemas.campaign import Audience, CampaignCreate, CampaignUpdate, Schedule
from ..utils.time import utc_now_z
from .base import BaseService


logger = logging.getLogger(__name__)

CAMPAIGN_QUERY = ResourceQuerySpec(
    name="campaigns",
    timestamp_field="created_at",
    search_fields=("name", "description", "content"),
    filters={"status": "status", "channel": "channel"},
    default_limit=10,
    sort_fields=("name", "created_at", "updated_at", "status", "channel"),
    wildcard_values=frozenset({"all"}),
)


class CampaignService(BaseService):

    async def list_campaigns(self, params: Mapping[str, Any]) -> Page:
        query = self.parse_query(CAMPAIGN_QUERY, params)
        return run_list_query(self.repositories.campaigns.list(), CAMPAIGN_QUERY, query)

    async def get_campaign(self, campaign_id: str) -> Dict[str, Any]:
        return self.repositories.campaigns.get(campaign_id)

    async def create_campaign(self, data: CampaignCreate) -> Dict[str, Any]:
        now = utc_now_z()
        campaign = self.repositories.campaigns.create({
            "id": generate_id("camp"),
            "name": data.name,
            "description": data.description,
            "channel": data.channel,
            "status": "draft",
            "created_at": now,
            "updated_at": now,
            "content": data.content,
            "audience": Audience().model_dump(),
            "schedule": (data.schedule or Schedule()).model_dump(),
        })
        logger.info("Created campaign %s (%s)", campaign["id"], campaign["name"])
        return campaign

    async def update_campaign(self, campaign_id: str, data: CampaignUpdate) -> Dict[str, Any]:
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        changes["updated_at"] = utc_now_z()
        campaign = self.repositories.campaigns.update(campaign_id, changes)
        logger.info("Updated campaign %s", campaign_id)
        return campaign

    async def delete_campaign(self, campaign_id: str) -> None:
        self.repositories.campaigns.delete(campaign_id)
        logger.info("Deleted campaign %s", campaign_id)

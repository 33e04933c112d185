"""Business logic for third-party integrations."""

import logging
from typing import Any, Dict, Mapping

from ..core.query import Page, ResourceQuerySpec, run_list_query
from ..repositories import generate_id
from ..schemas.integration import IntegrationCreate, IntegrationUpdate
from ..utils.time import utc_now_z
from .base import BaseService


logger = logging.getLogger(__name__)

INTEGRATION_QUERY = ResourceQuerySpec(
    name="integrations",
    timestamp_field="createdAt",
    search_fields=("name", "type"),
    filters={"type": "type", "connected": "connected"},
    default_limit=10,
    sort_fields=("createdAt", "name", "type"),
)


class IntegrationService(BaseService):

    async def list_integrations(self, params: Mapping[str, Any]) -> Page:
        query = self.parse_query(INTEGRATION_QUERY, params)
        return run_list_query(self.repositories.integrations.list(), INTEGRATION_QUERY, query)

    async def get_integration(self, integration_id: str) -> Dict[str, Any]:
        return self.repositories.integrations.get(integration_id)

    async def create_integration(self, data: IntegrationCreate) -> Dict[str, Any]:
        integration = self.repositories.integrations.create({
            "id": generate_id("int"),
            "type": data.type,
            "name": data.name,
            "connected": True,
            "createdAt": utc_now_z(),
        })
        logger.info("Connected %s integration %s", integration["type"], integration["id"])
        return integration

    async def update_integration(self, integration_id: str, data: IntegrationUpdate) -> Dict[str, Any]:
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        integration = self.repositories.integrations.update(integration_id, changes)
        logger.info("Updated integration %s", integration_id)
        return integration

    async def delete_integration(self, integration_id: str) -> None:
        self.repositories.integrations.delete(integration_id)
        logger.info("Removed integration %s", integration_id)

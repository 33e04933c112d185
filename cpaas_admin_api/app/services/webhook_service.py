"""Business logic for webhook subscriptions.

Subscriptions are only stored; no events are ever delivered.
"""

import logging
from typing import Any, Dict, Mapping

from ..core.query import Page, ResourceQuerySpec, run_list_query
from ..repositories import generate_id
from ..schemas.webhook import WebhookCreate, WebhookUpdate
from ..utils.time import utc_now_z
from .base import BaseService


logger = logging.getLogger(__name__)

WEBHOOK_QUERY = ResourceQuerySpec(
    name="webhooks",
    timestamp_field="createdAt",
    search_fields=("url", "description"),
    filters={"isActive": "isActive"},
    default_limit=10,
    sort_fields=("createdAt", "url"),
)


class WebhookService(BaseService):

    async def list_webhooks(self, params: Mapping[str, Any]) -> Page:
        query = self.parse_query(WEBHOOK_QUERY, params)
        return run_list_query(self.repositories.webhooks.list(), WEBHOOK_QUERY, query)

    async def get_webhook(self, webhook_id: str) -> Dict[str, Any]:
        return self.repositories.webhooks.get(webhook_id)

    async def create_webhook(self, data: WebhookCreate) -> Dict[str, Any]:
        webhook = self.repositories.webhooks.create({
            "id": generate_id("wh"),
            "url": data.url,
            "description": data.description,
            "events": data.events,
            "isActive": data.isActive,
            "createdAt": utc_now_z(),
        })
        logger.info("Created webhook %s for %s", webhook["id"], webhook["url"])
        return webhook

    async def update_webhook(self, webhook_id: str, data: WebhookUpdate) -> Dict[str, Any]:
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        webhook = self.repositories.webhooks.update(webhook_id, changes)
        logger.info("Updated webhook %s", webhook_id)
        return webhook

    async def delete_webhook(self, webhook_id: str) -> None:
        self.repositories.webhooks.delete(webhook_id)
        logger.info("Deleted webhook %s", webhook_id)

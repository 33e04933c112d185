"""Business logic for customer projects (read-only)."""

from typing import Any, Dict, Mapping

from ..core.query import Page, ResourceQuerySpec, run_list_query
from .base import BaseService


PROJECT_QUERY = ResourceQuerySpec(
    name="projects",
    timestamp_field="created",
    search_fields=("name", "description"),
    filters={"user_id": "user_id", "status": "status"},
    default_limit=10,
    sort_fields=("name", "created", "updated", "messages", "engagement", "balance"),
)


class ProjectService(BaseService):

    async def list_projects(self, params: Mapping[str, Any]) -> Page:
        query = self.parse_query(PROJECT_QUERY, params)
        return run_list_query(self.repositories.projects.list(), PROJECT_QUERY, query)

    async def get_project(self, project_id: str) -> Dict[str, Any]:
        return self.repositories.projects.get(project_id)

"""Common plumbing shared by the resource services."""

from typing import Any, Mapping, Optional

from ..core.config import Settings, settings as default_settings
from ..core.query import ListQuery, ResourceQuerySpec
from ..repositories import Repositories


class BaseService:
    """Holds the repositories and settings a service works against."""

    def __init__(self, repositories: Repositories, settings: Optional[Settings] = None) -> None:
        self.repositories = repositories
        self.settings = settings or default_settings

    def parse_query(self, spec: ResourceQuerySpec, params: Mapping[str, Any]) -> ListQuery:
        return ListQuery.from_params(spec, params, self.settings.max_page_size)

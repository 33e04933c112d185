"""
FastAPI dependencies shared by the endpoint modules.

Repositories, settings and the token revocation set live on
``app.state``; handlers reach them only through these providers, so a
test or another deployment can swap the backing store by replacing
``app.state.repositories``.
"""

from typing import Any, Callable, Dict, Optional, Type, TypeVar

from fastapi import Query, Request

from cpaas_admin_api.app.core.config import Settings
from cpaas_admin_api.app.repositories import Repositories
from cpaas_admin_api.app.services.auth_service import AuthService
from cpaas_admin_api.app.services.base import BaseService


S = TypeVar("S", bound=BaseService)


def get_repositories(request: Request) -> Repositories:
    return request.app.state.repositories


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def provide(service_cls: Type[S]) -> Callable[[Request], S]:
    """Dependency factory building ``service_cls`` for the current app."""

    def _provider(request: Request) -> S:
        return service_cls(request.app.state.repositories, request.app.state.settings)

    _provider.__name__ = f"get_{service_cls.__name__}"
    return _provider


def get_auth_service(request: Request) -> AuthService:
    return AuthService(
        request.app.state.repositories,
        request.app.state.settings,
        request.app.state.revoked_tokens,
    )


def list_params(
    request: Request,
    page: Optional[str] = Query(None, description="Page number, starting at 1"),
    limit: Optional[str] = Query(None, description="Page size"),
    search: Optional[str] = Query(None, description="Case-insensitive free-text search"),
    startDate: Optional[str] = Query(None, description="ISO 8601 lower bound (inclusive)"),
    endDate: Optional[str] = Query(None, description="ISO 8601 upper bound; a bare date covers the whole day"),
    sortBy: Optional[str] = Query(None, description="Field to sort by"),
    order: Optional[str] = Query(None, description="Sort direction: asc or desc"),
) -> Dict[str, Any]:
    """Raw query parameters of a list request.

    The documented parameters are common to every list endpoint; the
    resource specific filters are read from the same mapping.  Values
    are kept as strings and interpreted by the list query engine, which
    is lenient with malformed page numbers.
    """
    return dict(request.query_params)

"""
Authentication endpoints.

Login issues a signed bearer token; logout revokes it.  Administrators
holding the ``impersonate`` permission can act as another user and
later return to their own session.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Request

from cpaas_admin_api.app.api.deps import get_auth_service
from cpaas_admin_api.app.core.errors import NotFoundError
from cpaas_admin_api.app.core.security import get_current_user
from cpaas_admin_api.app.schemas.auth import (
    DemoCredentialsResponse,
    ImpersonateRequest,
    LoginRequest,
    LoginResponse,
    SessionResponse,
    SessionUserRead,
)
from cpaas_admin_api.app.schemas.common import MessageRead
from cpaas_admin_api.app.seed import DEMO_CREDENTIALS
from cpaas_admin_api.app.services.auth_service import AuthService


router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> Dict[str, Any]:
    """Exchange e-mail and password for a bearer token."""
    return await service.login(credentials.email, credentials.password)


@router.get("/login", response_model=DemoCredentialsResponse)
async def demo_credentials(request: Request) -> Dict[str, Any]:
    """List the demo accounts.  Only available when ``DEBUG`` is on."""
    if not request.app.state.settings.debug:
        raise NotFoundError()
    return {"message": "Demo login credentials", "credentials": DEMO_CREDENTIALS}


@router.post("/logout", response_model=MessageRead)
async def logout(
    current_user: dict = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
) -> Dict[str, str]:
    """Revoke the token used for this request."""
    return await service.logout(current_user)


@router.get("/me", response_model=SessionUserRead)
async def me(
    current_user: dict = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
) -> Dict[str, Any]:
    return await service.me(current_user)


@router.post("/impersonate", response_model=SessionResponse)
async def impersonate(
    payload: ImpersonateRequest,
    current_user: dict = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
) -> Dict[str, Any]:
    """Start an impersonation session for ``userId``.

    Requires the ``impersonate`` permission.  Inactive users and other
    administrators cannot be impersonated.
    """
    return await service.impersonate(current_user, payload.userId)


@router.post("/stop-impersonation", response_model=SessionResponse)
async def stop_impersonation(
    current_user: dict = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
) -> Dict[str, Any]:
    """End the impersonation session and return a token for the original admin."""
    return await service.stop_impersonation(current_user)

"""
User administration endpoints.

All routes require the ``admin`` permission.  Besides CRUD on user
accounts they expose balance top-ups and the per-user transaction
history.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from fastapi.responses import Response

from cpaas_admin_api.app.api.deps import list_params, provide
from cpaas_admin_api.app.core.security import require_permissions
from cpaas_admin_api.app.schemas.common import PageRead
from cpaas_admin_api.app.schemas.transaction import TransactionPage
from cpaas_admin_api.app.schemas.user import TopupRead, TopupRequest, UserCreate, UserRead, UserUpdate
from cpaas_admin_api.app.services.transaction_service import TransactionService
from cpaas_admin_api.app.services.user_service import UserService


router = APIRouter()


@router.get("", response_model=PageRead[UserRead])
async def list_users(
    current_user: dict = Depends(require_permissions("admin")),
    params: Dict[str, Any] = Depends(list_params),
    service: UserService = Depends(provide(UserService)),
) -> Dict[str, Any]:
    """List users.

    - **role**, **status**: exact filters.
    - **search**: matches name, e-mail and company.
    - **startDate**, **endDate**: bounds on the creation date.
    """
    page = await service.list_users(params)
    return page.to_dict()


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def create_user(
    user: UserCreate,
    current_user: dict = Depends(require_permissions("admin")),
    service: UserService = Depends(provide(UserService)),
) -> Dict[str, Any]:
    """Create an active user; permissions follow from the role."""
    return await service.create_user(user)


@router.get("/{user_id}", response_model=UserRead)
async def get_user(
    user_id: str,
    current_user: dict = Depends(require_permissions("admin")),
    service: UserService = Depends(provide(UserService)),
) -> Dict[str, Any]:
    return await service.get_user(user_id)


@router.put("/{user_id}", response_model=UserRead)
async def update_user(
    user_id: str,
    updates: UserUpdate,
    current_user: dict = Depends(require_permissions("admin")),
    service: UserService = Depends(provide(UserService)),
) -> Dict[str, Any]:
    """Update a user.  Partial updates are supported; the id never changes."""
    return await service.update_user(user_id, updates)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str,
    current_user: dict = Depends(require_permissions("admin")),
    service: UserService = Depends(provide(UserService)),
) -> Response:
    """Delete a user.  The last remaining admin cannot be deleted."""
    await service.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{user_id}/topup", response_model=TopupRead)
async def topup_user(
    user_id: str,
    payload: TopupRequest,
    current_user: dict = Depends(require_permissions("admin")),
    service: UserService = Depends(provide(UserService)),
) -> Dict[str, Any]:
    """Credit a user's balance and record a ``topup`` transaction."""
    return await service.topup(user_id, payload.amount)


@router.get("/{user_id}/transactions", response_model=TransactionPage)
async def list_user_transactions(
    user_id: str,
    current_user: dict = Depends(require_permissions("admin")),
    params: Dict[str, Any] = Depends(list_params),
    service: TransactionService = Depends(provide(TransactionService)),
) -> Dict[str, Any]:
    """List a user's transactions, newest first, with totals.

    - **type**: ``topup``, ``sms_send``, ``whatsapp_send``, ``voice_call`` or ``refund``.
    - **status**: ``completed``, ``pending`` or ``failed``.

    The summary covers every transaction matching the filters, not only
    the returned page.
    """
    page, summary = await service.list_for_user(user_id, params)
    return {**page.to_dict(), "summary": summary}

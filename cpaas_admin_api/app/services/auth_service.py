"""
Business logic for sessions and impersonation.

Sessions are stateless signed tokens (see :mod:`..core.security`).
Logging out adds the token id to the revocation set shared by the
application.  An impersonation token is issued for the target user and
carries the administrator's id in its ``imp`` claim, so the original
session can be restored later.
"""

import logging
from typing import Any, Dict, MutableSet, Optional

from ..core.config import Settings
from ..core.errors import ForbiddenError, InvalidInputError, NotFoundError, UnauthorizedError
from ..core.security import create_access_token
from ..repositories import Repositories
from .base import BaseService
from .user_service import UserService, public_user


logger = logging.getLogger(__name__)


def session_user(
    user: Dict[str, Any],
    original: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """The user record as the dashboard expects it, with impersonation fields."""
    user = public_user(user)
    user["isImpersonating"] = original is not None
    user["originalUserId"] = original["id"] if original else None
    user["originalUserName"] = original.get("name") if original else None
    return user


class AuthService(BaseService):

    def __init__(
        self,
        repositories: Repositories,
        settings: Optional[Settings] = None,
        revoked_tokens: Optional[MutableSet[str]] = None,
    ) -> None:
        super().__init__(repositories, settings)
        self.revoked_tokens = revoked_tokens if revoked_tokens is not None else set()

    def _issue(self, claims: Dict[str, Any], minutes: Optional[int] = None) -> str:
        minutes = minutes or self.settings.access_token_expire_minutes
        return create_access_token(claims, expires_delta=minutes * 60, secret_key=self.settings.secret_key)

    async def login(self, email: Optional[str], password: Optional[str]) -> Dict[str, Any]:
        if not email or not password:
            raise InvalidInputError("Email and password are required")
        user = await UserService(self.repositories, self.settings).authenticate(email, password)
        if user is None:
            logger.info("Failed login for %s", email)
            raise UnauthorizedError("Invalid credentials")
        logger.info("User %s logged in", user["id"])
        return {
            "user": session_user(user),
            "token": self._issue({"sub": user["id"]}),
            "message": "Login successful",
        }

    async def me(self, current_user: Dict[str, Any]) -> Dict[str, Any]:
        original = None
        if current_user.get("imp"):
            try:
                original = self.repositories.users.get(current_user["imp"])
            except NotFoundError:
                original = {"id": current_user["imp"]}
        return session_user(current_user["user"], original)

    async def logout(self, current_user: Dict[str, Any]) -> Dict[str, str]:
        jti = current_user.get("jti")
        if jti:
            self.revoked_tokens.add(jti)
        logger.info("User %s logged out", current_user.get("user_id"))
        return {"message": "Logout successful"}

    async def impersonate(self, current_user: Dict[str, Any], target_id: Optional[str]) -> Dict[str, Any]:
        """Start acting as ``target_id`` on behalf of the calling admin."""
        if "impersonate" not in (current_user.get("permissions") or ()):
            raise ForbiddenError("Insufficient permissions to impersonate users")
        if not target_id:
            raise InvalidInputError("Missing required field: userId")
        try:
            target = self.repositories.users.get(target_id)
        except NotFoundError:
            raise NotFoundError("Target user not found") from None
        if target.get("status") != "active":
            raise InvalidInputError("Cannot impersonate inactive user")
        if target.get("role") == "admin":
            raise ForbiddenError("Cannot impersonate another admin user")

        admin = current_user["user"]
        token = self._issue(
            {"sub": target["id"], "imp": admin["id"]},
            minutes=self.settings.impersonation_token_expire_minutes,
        )
        logger.info("Admin %s started impersonating %s", admin["id"], target["id"])
        return {"user": session_user(target, admin), "token": token}

    async def stop_impersonation(self, current_user: Dict[str, Any]) -> Dict[str, Any]:
        """Revoke the impersonation token and restore the admin's session."""
        original_id = current_user.get("imp")
        if not original_id:
            raise InvalidInputError("Not currently impersonating any user")
        try:
            original = self.repositories.users.get(original_id)
        except NotFoundError:
            raise NotFoundError("Original user not found") from None
        if current_user.get("jti"):
            self.revoked_tokens.add(current_user["jti"])
        logger.info("Admin %s stopped impersonating %s", original_id, current_user.get("user_id"))
        return {"user": session_user(original), "token": self._issue({"sub": original["id"]})}

"""
Business logic for platform users.

The ``UserService`` lists, creates, updates and deletes user accounts
and credits their balance.  Password hashes are kept in the stored
records but stripped from everything this service returns.
"""

import logging
import math
from typing import Any, Dict, Mapping, Optional

from ..core.errors import InvalidInputError, NotFoundError
from ..core.query import Page, ResourceQuerySpec, run_list_query
from ..core.security import hash_password, permissions_for_role, verify_password
from ..repositories import generate_id
from ..schemas.user import UserCreate, UserUpdate
from ..seed import transaction_description
from ..utils.time import utc_now_z
from .base import BaseService


logger = logging.getLogger(__name__)

USER_QUERY = ResourceQuerySpec(
    name="users",
    timestamp_field="created_at",
    search_fields=("name", "email", "company"),
    filters={"role": "role", "status": "status"},
    default_limit=10,
    sort_fields=("name", "email", "role", "status", "created_at", "last_login", "balance"),
)


def public_user(user: Dict[str, Any]) -> Dict[str, Any]:
    """Return ``user`` without its password hash."""
    user = dict(user)
    user.pop("password", None)
    return user


class UserService(BaseService):
    """Administration of user accounts."""

    def _find_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        wanted = email.strip().lower()
        for user in self.repositories.users.list():
            if str(user.get("email", "")).lower() == wanted:
                return user
        return None

    async def list_users(self, params: Mapping[str, Any]) -> Page:
        """Return one page of users matching the query parameters."""
        query = self.parse_query(USER_QUERY, params)
        page = run_list_query(self.repositories.users.list(), USER_QUERY, query)
        page.items = [public_user(user) for user in page.items]
        return page

    async def get_user(self, user_id: str) -> Dict[str, Any]:
        return public_user(self.repositories.users.get(user_id))

    async def create_user(self, data: UserCreate) -> Dict[str, Any]:
        """Create a new active user.

        Permissions are derived from the role.  Non-admin users get a
        project of their own.  E-mail addresses are unique,
        case-insensitively.
        """
        if self._find_by_email(data.email):
            raise InvalidInputError("A user with this email already exists")
        record = {
            "id": generate_id("user"),
            "name": data.name,
            "email": data.email,
            "password": hash_password(data.password) if data.password else None,
            "role": data.role,
            "status": "active",
            "created_at": utc_now_z(),
            "last_login": None,
            "company": data.company,
            "permissions": permissions_for_role(data.role),
            "balance": 0,
            "currency": "USD",
            "project_id": None if data.role == "admin" else generate_id("proj"),
        }
        user = self.repositories.users.create(record)
        logger.info("Created user %s (%s)", user["id"], user["email"])
        return public_user(user)

    async def update_user(self, user_id: str, data: UserUpdate) -> Dict[str, Any]:
        """Merge the provided fields into the stored user."""
        current = self.repositories.users.get(user_id)
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if "email" in changes:
            other = self._find_by_email(changes["email"])
            if other and other["id"] != user_id:
                raise InvalidInputError("A user with this email already exists")
        if "password" in changes:
            changes["password"] = hash_password(changes["password"])
        if "role" in changes and changes["role"] != current.get("role"):
            changes["permissions"] = permissions_for_role(changes["role"])
        user = self.repositories.users.update(user_id, changes)
        logger.info("Updated user %s: %s", user_id, sorted(k for k in changes if k != "password"))
        return public_user(user)

    async def delete_user(self, user_id: str) -> None:
        """Delete a user.  The last remaining admin can never be deleted."""
        user = self.repositories.users.get(user_id)
        if user.get("role") == "admin":
            admins = [u for u in self.repositories.users.list() if u.get("role") == "admin"]
            if len(admins) <= 1:
                raise InvalidInputError("Cannot delete the last admin user")
        self.repositories.users.delete(user_id)
        logger.info("Deleted user %s", user_id)

    async def topup(self, user_id: str, amount: float) -> Dict[str, Any]:
        """Credit ``amount`` to the user's balance and record the transaction."""
        if amount is None or not math.isfinite(amount) or amount <= 0:
            raise InvalidInputError("Invalid amount. Must be greater than 0")
        user = self.repositories.users.get(user_id)
        balance = round(float(user.get("balance") or 0) + amount, 2)
        self.repositories.users.update(user_id, {"balance": balance})
        timestamp = utc_now_z()
        transaction = self.repositories.transactions.create({
            "id": generate_id("txn"),
            "user_id": user_id,
            "type": "topup",
            "amount": amount,
            "status": "completed",
            "description": transaction_description("topup", amount),
            "timestamp": timestamp,
            "reference_id": generate_id("top"),
            "metadata": {"channel": None, "recipient": None},
        })
        logger.info("Topped up user %s by %.2f, balance now %.2f", user_id, amount, balance)
        return {
            "balance": balance,
            "transaction_id": transaction["id"],
            "amount": amount,
            "user_id": user_id,
            "timestamp": timestamp,
        }

    async def authenticate(self, email: str, password: str) -> Optional[Dict[str, Any]]:
        """Return the active user matching the credentials, or ``None``.

        A successful login stamps ``last_login``.
        """
        user = self._find_by_email(email)
        if not user or not verify_password(password, user.get("password")):
            return None
        if user.get("status") != "active":
            return None
        try:
            user = self.repositories.users.update(user["id"], {"last_login": utc_now_z()})
        except NotFoundError:
            return None
        return public_user(user)

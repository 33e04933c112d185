"""
Security helpers for password hashing and token authentication.

This module implements a compact JSON Web Token (JWT) mechanism using
HMAC-SHA256 signatures and base64url encoding.  Tokens embed the
subject user id (``sub``), a unique token id (``jti``), an expiration
timestamp (``exp``) and, for impersonation sessions, the id of the
administrator acting on behalf of the subject (``imp``).  The signing
key comes from the application settings.

Route handlers consume the result only as an authorization decision:
:func:`get_current_user` either returns the caller's context or raises
:class:`~.errors.UnauthorizedError` before any collection is touched,
and :func:`require_permissions` adds a permission check on top.

Passwords are hashed with PBKDF2-HMAC-SHA256 and a random salt.
"""

import base64
import hashlib
import hmac
import json
import logging
import os
import secrets
import time
from typing import Any, Callable, Dict, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import settings
from .errors import ForbiddenError, NotFoundError, UnauthorizedError


logger = logging.getLogger(__name__)

ROLE_PERMISSIONS: Dict[str, list] = {
    "admin": ["read", "write", "admin", "impersonate"],
    "supervisor": ["read", "write", "manage_agents"],
}
DEFAULT_PERMISSIONS = ["read", "write"]


def permissions_for_role(role: str) -> list:
    """Return the permission list granted to ``role``."""
    return list(ROLE_PERMISSIONS.get(role, DEFAULT_PERMISSIONS))


def _b64_url_encode(data: bytes) -> str:
    """Base64-url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64-url encoded string, adding padding if necessary."""
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    """Compute HMAC-SHA256 signature of a message using the given secret."""
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(
    data: Dict[str, Any],
    expires_delta: Optional[int] = None,
    secret_key: Optional[str] = None,
) -> str:
    """Create a signed token with the given payload.

    The payload is extended with ``exp`` (UNIX timestamp) and a random
    ``jti`` used for revocation.  The token has the form
    ``header.payload.signature``, each part base64url encoded.

    Parameters
    ----------
    data : dict
        Claims to embed in the token (e.g. ``{"sub": "user_1"}``).
    expires_delta : Optional[int]
        Lifetime of the token in seconds.  Defaults to
        ``settings.access_token_expire_minutes * 60``.
    secret_key : Optional[str]
        Signing key; defaults to ``settings.secret_key``.
    """
    to_encode = data.copy()
    exp_seconds = expires_delta or settings.access_token_expire_minutes * 60
    to_encode["exp"] = int(time.time()) + exp_seconds
    to_encode.setdefault("jti", secrets.token_hex(8))
    header = {"alg": "HS256", "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(to_encode, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature = _sign(signing_input, secret_key or settings.secret_key)
    return f"{header_b64}.{payload_b64}.{_b64_url_encode(signature)}"


def decode_access_token(token: str, secret_key: Optional[str] = None) -> Optional[Dict[str, Any]]:
    """Verify and decode a token.

    Checks the HMAC signature in constant time and the ``exp`` claim.
    Returns the payload dictionary on success, otherwise ``None``.
    """
    parts = token.split(".")
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    expected_sig = _sign(signing_input, secret_key or settings.secret_key)
    try:
        actual_sig = _b64_url_decode(signature_b64)
        if not hmac.compare_digest(expected_sig, actual_sig):
            return None
        data = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
    except (ValueError, UnicodeDecodeError):
        return None
    if not isinstance(data, dict):
        return None
    if data.get("exp") is None or int(data["exp"]) < int(time.time()):
        return None
    return data


security = HTTPBearer(auto_error=False)


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Dict[str, Any]:
    """Dependency that resolves the authenticated caller.

    Verifies the bearer token, rejects revoked tokens and maps the
    subject onto the users collection.  Missing, malformed, expired or
    revoked tokens, unknown subjects and non-active accounts all raise
    a 401.  The returned context carries the token claims plus
    ``user_id``, ``role``, ``permissions`` and the stored ``user``
    record (password hash removed).
    """
    if credentials is None:
        raise UnauthorizedError()
    app_settings = request.app.state.settings
    payload = decode_access_token(credentials.credentials, app_settings.secret_key)
    if not payload:
        logger.debug("Rejected invalid or expired token")
        raise UnauthorizedError()
    if payload.get("jti") in request.app.state.revoked_tokens:
        logger.debug("Rejected revoked token %s", payload.get("jti"))
        raise UnauthorizedError()

    user_id = payload.get("sub")
    if not isinstance(user_id, str):
        raise UnauthorizedError()
    try:
        user = request.app.state.repositories.users.get(user_id)
    except NotFoundError:
        raise UnauthorizedError() from None
    if user.get("status") != "active":
        raise UnauthorizedError()
    user.pop("password", None)

    payload["user_id"] = user_id
    payload["role"] = user.get("role")
    payload["permissions"] = user.get("permissions") or permissions_for_role(user.get("role", ""))
    payload["user"] = user
    return payload


# ---------------------------------------------------------------------------
# Permission-based access control
# ---------------------------------------------------------------------------

def require_permissions(*permissions: str) -> Callable[..., Dict[str, Any]]:
    """Dependency factory enforcing that the caller holds every permission.

    Use as ``Depends(require_permissions("admin"))``.  Authentication
    failures still surface as 401; a valid caller lacking a permission
    gets a 403.
    """

    def _permission_dependency(current_user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
        granted = set(current_user.get("permissions") or ())
        if not set(permissions) <= granted:
            raise ForbiddenError()
        return current_user

    return _permission_dependency


def hash_password(password: str) -> str:
    """Hash a password using PBKDF2-HMAC with SHA-256.

    A 16-byte random salt is generated for each password.  The result
    contains the salt and hash in hex separated by ``$``.
    """
    salt = os.urandom(16)
    iterations = 100_000
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Verify a plain password against a stored ``salt$hash`` string."""
    if not hashed_password or "$" not in hashed_password:
        return False
    salt_hex, hash_hex = hashed_password.split("$", 1)
    try:
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except ValueError:
        return False
    dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, 100_000)
    return hmac.compare_digest(dk, stored_hash)

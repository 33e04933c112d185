"""Mint a long-lived bearer token for scripts and manual testing.

Usage:
    python create_token.py [user_id] [days]

The token is signed with ``SECRET_KEY``, so it is accepted by any
server started with the same key.  The user must exist and be active
when the token is used; the seeded admin is ``user_1``.
"""
import sys

from cpaas_admin_api.app.core.security import create_access_token


user_id = sys.argv[1] if len(sys.argv) > 1 else "user_1"
days = int(sys.argv[2]) if len(sys.argv) > 2 else 365
token = create_access_token({"sub": user_id}, expires_delta=days * 24 * 60 * 60)
print(token)

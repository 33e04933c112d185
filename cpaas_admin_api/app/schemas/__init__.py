"""
Pydantic schema definitions for API payloads.

Each resource (users, campaigns, webhooks, etc.) defines its own
Pydantic models for request and response bodies.  Schemas are
separated from the stored records to decouple the API representation
from storage.
"""

"""Pydantic models for customer projects."""

from pydantic import BaseModel


class ProjectRead(BaseModel):
    id: str
    name: str
    description: str
    campaigns: int = 0
    messages: int = 0
    engagement: float = 0
    created: str
    updated: str
    user_id: str
    status: str
    balance: float = 0
    currency: str = "USD"

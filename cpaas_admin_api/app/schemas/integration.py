"""Pydantic schemas for third-party integrations."""

from typing import Literal, Optional

from pydantic import BaseModel, Field


IntegrationType = Literal["zapier", "salesforce", "hubspot", "custom"]


class IntegrationCreate(BaseModel):
    type: IntegrationType = Field(..., examples=["zapier"])
    name: str = Field(..., min_length=1, examples=["My Zapier Connection"])


class IntegrationUpdate(BaseModel):
    name: Optional[str] = None
    connected: Optional[bool] = None


class IntegrationRead(BaseModel):
    id: str
    type: IntegrationType
    name: str
    connected: bool
    createdAt: str

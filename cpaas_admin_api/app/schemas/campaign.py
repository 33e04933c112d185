"""
Pydantic schemas for messaging campaigns.

A campaign is a piece of content sent to an audience over one channel,
either immediately, at a scheduled time or on a recurring basis.
Audience counters are maintained by the delivery pipeline and are
read-only through the API.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field


Channel = Literal["sms", "whatsapp", "email", "voice", "viber", "rcs"]
CampaignStatus = Literal["draft", "active", "paused", "completed"]


class Audience(BaseModel):
    total: int = 0
    delivered: int = 0
    failed: int = 0
    opened: int = 0
    clicked: int = 0


class Schedule(BaseModel):
    type: Literal["immediate", "scheduled", "recurring"] = "immediate"
    sentAt: Optional[str] = None
    scheduledFor: Optional[str] = None


class CampaignCreate(BaseModel):
    name: str = Field(..., min_length=1, examples=["Welcome Message"])
    description: str = Field(..., min_length=1)
    channel: Channel = Field(..., examples=["sms"])
    content: str = Field(..., min_length=1)
    schedule: Optional[Schedule] = None


class CampaignUpdate(BaseModel):
    """Partial update; ``id`` and the audience counters cannot be changed."""

    name: Optional[str] = None
    description: Optional[str] = None
    channel: Optional[Channel] = None
    content: Optional[str] = None
    status: Optional[CampaignStatus] = None
    schedule: Optional[Schedule] = None


class CampaignRead(BaseModel):
    id: str
    name: str
    description: str
    channel: str
    status: CampaignStatus
    created_at: str
    updated_at: str
    content: str
    audience: Audience = Audience()
    schedule: Schedule = Schedule()

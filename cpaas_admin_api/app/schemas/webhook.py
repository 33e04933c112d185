"""Pydantic schemas for webhook subscriptions."""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


def _check_url(value: str) -> str:
    value = value.strip()
    if not value.startswith(("http://", "https://")):
        raise ValueError("url must start with http:// or https://")
    return value


def _check_events(value: List[str]) -> List[str]:
    events = [event.strip() for event in value if event and event.strip()]
    if not events:
        raise ValueError("at least one event is required")
    # Preserve order, drop duplicates.
    return list(dict.fromkeys(events))


class WebhookCreate(BaseModel):
    url: str = Field(..., examples=["https://example.com/hook"])
    description: Optional[str] = None
    events: List[str] = Field(..., examples=[["message.sent", "message.delivered"]])
    isActive: bool = True

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        return _check_url(v)

    @field_validator("events")
    @classmethod
    def validate_events(cls, v: List[str]) -> List[str]:
        return _check_events(v)


class WebhookUpdate(BaseModel):
    url: Optional[str] = None
    description: Optional[str] = None
    events: Optional[List[str]] = None
    isActive: Optional[bool] = None

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else _check_url(v)

    @field_validator("events")
    @classmethod
    def validate_events(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return None if v is None else _check_events(v)


class WebhookRead(BaseModel):
    id: str
    url: str
    description: Optional[str] = None
    events: List[str]
    isActive: bool
    createdAt: str

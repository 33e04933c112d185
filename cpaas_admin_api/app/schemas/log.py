"""Pydantic models for system and per-user activity logs."""

from typing import Literal, Optional

from pydantic import BaseModel


Level = Literal["debug", "info", "warn", "error", "fatal"]


class LogContext(BaseModel):
    ip: Optional[str] = None
    userAgent: Optional[str] = None
    endpoint: Optional[str] = None
    duration: Optional[str] = None


class LogRead(BaseModel):
    id: str
    timestamp: str
    level: Level
    message: str
    source: Optional[str] = None
    userId: Optional[str] = None
    requestId: Optional[str] = None
    context: Optional[LogContext] = None

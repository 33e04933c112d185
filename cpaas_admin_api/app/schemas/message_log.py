"""
Pydantic models for message delivery logs.

A message log describes one inbound or outbound message on any of the
supported channels, with its cost and delivery outcome.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel

from .common import PageRead


class MessageMetadata(BaseModel):
    user_agent: Optional[str] = None
    device_type: Optional[str] = None
    ip_address: Optional[str] = None
    country_code: Optional[str] = None


class MessageLogRead(BaseModel):
    id: str
    message_id: str
    channel: str
    direction: str
    sender: str
    recipient: str
    content: str
    status: str
    timestamp: str
    cost: Optional[float] = None
    currency: Optional[str] = None
    campaign_id: Optional[str] = None
    campaign_name: Optional[str] = None
    template_id: Optional[str] = None
    template_name: Optional[str] = None
    user_id: Optional[str] = None
    project_id: Optional[str] = None
    error_code: Optional[str] = None
    error_message: Optional[str] = None
    delivery_attempts: int = 1
    metadata: MessageMetadata = MessageMetadata()


class DeliveryEvent(BaseModel):
    status: str
    timestamp: str
    description: str
    error_code: Optional[str] = None
    error_message: Optional[str] = None


class MessageLogDetail(MessageLogRead):
    delivery_history: List[DeliveryEvent] = []


class MessageLogSummary(BaseModel):
    total_messages: int
    sent: int
    delivered: int
    failed: int
    pending: int
    total_cost: float
    channels: Dict[str, int]
    directions: Dict[str, int]


class MessageLogPage(PageRead[MessageLogRead]):
    summary: MessageLogSummary

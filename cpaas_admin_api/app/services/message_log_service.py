"""
Business logic for message delivery logs.

Listing returns a page of logs together with a summary of the whole
filtered set.  The detail view adds a delivery history derived from
the message status.
"""

from datetime import timedelta
from typing import Any, Dict, List, Mapping, Tuple

from ..core.query import Page, ResourceQuerySpec, paginate, parse_timestamp, select_records
from ..seed import MESSAGE_CHANNELS
from ..utils.time import to_utc_z
from .base import BaseService


MESSAGE_LOG_QUERY = ResourceQuerySpec(
    name="message logs",
    timestamp_field="timestamp",
    search_fields=("content", "sender", "recipient", "campaign_name", "template_name", "message_id"),
    filters={
        "channel": "channel",
        "direction": "direction",
        "status": "status",
        "campaign_id": "campaign_id",
        "template_id": "template_id",
    },
    contains_filters={"sender": "sender", "recipient": "recipient"},
    default_limit=25,
    sort_fields=("timestamp", "cost", "channel", "status"),
    default_sort="timestamp",
    default_order="desc",
)


def summarize_messages(logs: List[Dict[str, Any]]) -> Dict[str, Any]:
    def count(key: str, value: str) -> int:
        return sum(1 for log in logs if log.get(key) == value)

    return {
        "total_messages": len(logs),
        "sent": count("status", "sent"),
        "delivered": count("status", "delivered"),
        "failed": count("status", "failed"),
        "pending": count("status", "pending"),
        "total_cost": round(sum(float(log.get("cost") or 0) for log in logs), 4),
        "channels": {channel: count("channel", channel) for channel in MESSAGE_CHANNELS},
        "directions": {direction: count("direction", direction) for direction in ("inbound", "outbound")},
    }


def delivery_history(log: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Reconstruct the delivery events a message went through.

    Events are placed relative to the message timestamp: sent at the
    timestamp itself, failures after two minutes, delivery after three
    and reads after four.
    """
    status = log.get("status")
    sent_at = parse_timestamp(log.get("timestamp"))
    if status == "pending" or sent_at is None:
        return []

    def at(minutes: int) -> str:
        return to_utc_z(sent_at + timedelta(minutes=minutes))

    history = [{"status": "sent", "timestamp": at(0), "description": "Message sent to carrier"}]
    if status == "failed":
        history.append({
            "status": "failed",
            "timestamp": at(2),
            "description": "Message delivery failed",
            "error_code": log.get("error_code"),
            "error_message": log.get("error_message"),
        })
    if status in {"delivered", "read"}:
        history.append({"status": "delivered", "timestamp": at(3), "description": "Message delivered to recipient"})
    if status == "read":
        history.append({"status": "read", "timestamp": at(4), "description": "Message read by recipient"})
    return history


class MessageLogService(BaseService):

    async def list_message_logs(self, params: Mapping[str, Any]) -> Tuple[Page, Dict[str, Any]]:
        query = self.parse_query(MESSAGE_LOG_QUERY, params)
        matched = select_records(self.repositories.message_logs.list(), MESSAGE_LOG_QUERY, query)
        return paginate(matched, query), summarize_messages(matched)

    async def get_message_log(self, log_id: str) -> Dict[str, Any]:
        log = self.repositories.message_logs.get(log_id)
        log["delivery_history"] = delivery_history(log)
        return log

"""
Service layer for dashboard metrics.

All figures are aggregated from the in-memory collections on every
request: an overview of counts and sums, hourly time series over the
message logs and transactions, and threshold alerts.
"""

from __future__ import annotations

from collections import Counter
from datetime import timedelta
from typing import Any, Dict, List, Optional

from ..core.errors import InvalidQueryError
from ..core.query import parse_timestamp
from ..seed import MESSAGE_CHANNELS
from ..utils.time import to_utc_z, utc_now
from .base import BaseService


METRIC_TYPES = ("overview", "timeseries", "alerts")
TIMEFRAME_HOURS = {"1h": 1, "6h": 6, "12h": 12, "24h": 24}

# A channel whose failure rate exceeds this share of its messages raises a warning.
FAILURE_RATE_THRESHOLD = 0.05
ERROR_LOGS_PER_HOUR_THRESHOLD = 10


def _percent(part: int, whole: int) -> float:
    return round(part / whole * 100, 2) if whole else 0.0


def _delivered(log: Dict[str, Any]) -> bool:
    return log.get("status") in {"delivered", "read"}


class MetricsService(BaseService):
    """Aggregated metrics for the admin dashboard."""

    async def get_metrics(self, metric_type: Optional[str] = None, timeframe: Optional[str] = None) -> Dict[str, Any]:
        """Dispatch on ``metric_type``; unknown types raise a 400."""
        metric_type = metric_type or "overview"
        if metric_type == "overview":
            return {"metrics": await self.overview(), "last_updated": to_utc_z(utc_now())}
        if metric_type == "timeseries":
            timeframe = timeframe if timeframe in TIMEFRAME_HOURS else "24h"
            return {
                "data": await self.timeseries(TIMEFRAME_HOURS[timeframe]),
                "timeframe": timeframe,
                "last_updated": to_utc_z(utc_now()),
            }
        if metric_type == "alerts":
            return {"alerts": await self.alerts()}
        raise InvalidQueryError("Invalid metrics type")

    async def overview(self) -> Dict[str, Any]:
        """Return a dictionary with high-level platform metrics.

        Covers users by status and their balances, projects, campaigns,
        per-channel message delivery and transaction totals.
        """
        users = self.repositories.users.list()
        projects = self.repositories.projects.list()
        campaigns = self.repositories.campaigns.list()
        messages = self.repositories.message_logs.list()
        transactions = self.repositories.transactions.list()
        webhooks = self.repositories.webhooks.list()

        user_status = Counter(u.get("status") for u in users)
        total_balance = round(sum(float(u.get("balance") or 0) for u in users), 2)

        messaging = {}
        for channel in MESSAGE_CHANNELS:
            outbound = [m for m in messages if m.get("channel") == channel and m.get("direction") == "outbound"]
            delivered = sum(1 for m in outbound if _delivered(m))
            failed = sum(1 for m in outbound if m.get("status") == "failed")
            messaging[channel] = {
                "sent": len(outbound),
                "delivered": delivered,
                "failed": failed,
                "delivery_rate": _percent(delivered, len(outbound)),
                "error_rate": _percent(failed, len(outbound)),
                "cost": round(sum(float(m.get("cost") or 0) for m in outbound), 4),
            }

        topups = [t for t in transactions if t.get("type") == "topup" and t.get("status") == "completed"]
        engagement = [float(p.get("engagement") or 0) for p in projects]
        return {
            "timestamp": to_utc_z(utc_now()),
            "users": {
                "total": len(users),
                "active": user_status.get("active", 0),
                "inactive": user_status.get("inactive", 0),
                "suspended": user_status.get("suspended", 0),
                "total_balance": total_balance,
                "avg_balance_per_user": round(total_balance / len(users), 2) if users else 0.0,
            },
            "projects": {
                "total": len(projects),
                "active": sum(1 for p in projects if p.get("status") == "active"),
                "avg_engagement_rate": round(sum(engagement) / len(engagement), 2) if engagement else 0.0,
            },
            "campaigns": {
                "total": len(campaigns),
                "running": sum(1 for c in campaigns if c.get("status") == "active"),
                "by_status": dict(Counter(c.get("status") for c in campaigns)),
            },
            "messaging": messaging,
            "financial": {
                "total_transactions": len(transactions),
                "revenue": round(sum(float(t.get("amount") or 0) for t in topups), 2),
                "avg_transaction_value": round(
                    sum(abs(float(t.get("amount") or 0)) for t in transactions) / len(transactions), 2
                ) if transactions else 0.0,
                "pending_payments": round(
                    sum(abs(float(t.get("amount") or 0)) for t in transactions if t.get("status") == "pending"), 2
                ),
            },
            "webhooks": {
                "total": len(webhooks),
                "active": sum(1 for w in webhooks if w.get("isActive")),
            },
        }

    async def timeseries(self, hours: int = 24) -> List[Dict[str, Any]]:
        """Return ``hours + 1`` hourly buckets ending with the current hour."""
        current = utc_now().replace(minute=0, second=0, microsecond=0)
        start = current - timedelta(hours=hours)
        buckets: Dict[Any, Dict[str, Any]] = {}
        for i in range(hours, -1, -1):
            bucket_start = current - timedelta(hours=i)
            row: Dict[str, Any] = {"timestamp": to_utc_z(bucket_start), "hour": bucket_start.hour}
            for channel in MESSAGE_CHANNELS:
                row[f"{channel}_sent"] = 0
                row[f"{channel}_delivered"] = 0
            row.update({"failed": 0, "transactions": 0, "revenue": 0.0, "errors": 0})
            buckets[bucket_start] = row

        def bucket_for(record: Dict[str, Any], field_name: str) -> Optional[Dict[str, Any]]:
            stamp = parse_timestamp(record.get(field_name))
            if stamp is None or stamp < start:
                return None
            return buckets.get(stamp.replace(minute=0, second=0, microsecond=0))

        for message in self.repositories.message_logs.list():
            row = bucket_for(message, "timestamp")
            if row is None or message.get("channel") not in MESSAGE_CHANNELS:
                continue
            row[f"{message['channel']}_sent"] += 1
            if _delivered(message):
                row[f"{message['channel']}_delivered"] += 1
            elif message.get("status") == "failed":
                row["failed"] += 1
        for transaction in self.repositories.transactions.list():
            row = bucket_for(transaction, "timestamp")
            if row is None:
                continue
            row["transactions"] += 1
            if transaction.get("type") == "topup" and transaction.get("status") == "completed":
                row["revenue"] = round(row["revenue"] + float(transaction.get("amount") or 0), 2)
        for log in self.repositories.logs.list():
            row = bucket_for(log, "timestamp")
            if row is not None and log.get("level") in {"error", "fatal"}:
                row["errors"] += 1
        return list(buckets.values())

    async def alerts(self) -> List[Dict[str, Any]]:
        """Threshold checks over the last 24 hours of activity."""
        now = utc_now()
        since = now - timedelta(hours=24)
        alerts: List[Dict[str, Any]] = []

        def add(kind: str, severity: str, message: str) -> None:
            alerts.append({
                "id": f"alert_{len(alerts) + 1}",
                "type": kind,
                "message": message,
                "timestamp": to_utc_z(now),
                "severity": severity,
            })

        recent = [
            m for m in self.repositories.message_logs.list()
            if (parse_timestamp(m.get("timestamp")) or since) > since
        ]
        for channel in MESSAGE_CHANNELS:
            sent = [m for m in recent if m.get("channel") == channel]
            if not sent:
                continue
            failed = sum(1 for m in sent if m.get("status") == "failed")
            rate = failed / len(sent)
            if rate > FAILURE_RATE_THRESHOLD:
                severity = "high" if rate > FAILURE_RATE_THRESHOLD * 3 else "medium"
                add("warning", severity, f"{channel.upper()} failure rate at {rate * 100:.1f}%")

        last_hour = now - timedelta(hours=1)
        errors = sum(
            1 for log in self.repositories.logs.list()
            if log.get("level") in {"error", "fatal"}
            and (parse_timestamp(log.get("timestamp")) or last_hour) > last_hour
        )
        if errors > ERROR_LOGS_PER_HOUR_THRESHOLD:
            add("error", "high", f"{errors} error logs in the last hour")

        inactive = [w for w in self.repositories.webhooks.list() if not w.get("isActive")]
        if inactive:
            add("info", "low", f"{len(inactive)} webhook(s) inactive")
        return alerts

"""
Business logic for system and per-user activity logs.

Logs are read-only.  Besides paginated listing the service renders the
matching logs as a downloadable file in JSON, CSV or plain text.
"""

import csv
import io
import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from ..core.query import Page, ResourceQuerySpec, parse_timestamp, run_list_query, select_records
from ..utils.time import today_stamp
from .base import BaseService


logger = logging.getLogger(__name__)

SYSTEM_LOG_QUERY = ResourceQuerySpec(
    name="logs",
    timestamp_field="timestamp",
    search_fields=("message", "source", "userId", "requestId"),
    filters={"level": "level", "userId": "userId", "source": "source"},
    default_limit=50,
    sort_fields=("timestamp", "level", "source"),
    default_sort="timestamp",
    default_order="desc",
)

# The caller's own logs; ``userId`` is fixed by the service.
USER_LOG_QUERY = ResourceQuerySpec(
    name="user logs",
    timestamp_field="timestamp",
    search_fields=("message", "source"),
    filters={"level": "level"},
    default_limit=50,
    sort_fields=("timestamp", "level", "source"),
    default_sort="timestamp",
    default_order="desc",
)

CSV_HEADERS = ["ID", "Timestamp", "Level", "Message", "Source", "User ID", "Request ID", "IP", "Endpoint", "Duration"]

EXPORT_FORMATS = {
    "json": "application/json",
    "csv": "text/csv",
    "txt": "text/plain",
}


@dataclass
class LogExport:
    """A rendered log file ready to be sent as an attachment."""

    content: str
    media_type: str
    filename: str
    count: int


def logs_to_csv(logs: List[Dict[str, Any]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for log in logs:
        context = log.get("context") or {}
        writer.writerow([
            log.get("id"),
            log.get("timestamp"),
            log.get("level"),
            log.get("message"),
            log.get("source") or "",
            log.get("userId") or "",
            log.get("requestId") or "",
            context.get("ip") or "",
            context.get("endpoint") or "",
            context.get("duration") or "",
        ])
    return buffer.getvalue()


def logs_to_text(logs: List[Dict[str, Any]]) -> str:
    """One line per log: ``[time] LEVEL: message [ip] endpoint (duration)``."""
    lines = []
    for log in logs:
        stamp = parse_timestamp(log.get("timestamp"))
        when = stamp.strftime("%Y-%m-%d %H:%M:%S UTC") if stamp else str(log.get("timestamp"))
        context = log.get("context")
        suffix = ""
        if context:
            suffix = f" [{context.get('ip')}] {context.get('endpoint')} ({context.get('duration')})"
        lines.append(f"[{when}] {str(log.get('level', '')).upper()}: {log.get('message')}{suffix}")
    return "\n".join(lines)


def newest_first(logs: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Order logs by time, newest first; unparseable timestamps go last."""
    oldest = datetime.min.replace(tzinfo=timezone.utc)
    return sorted(logs, key=lambda log: parse_timestamp(log.get("timestamp")) or oldest, reverse=True)


def render_logs(logs: List[Dict[str, Any]], fmt: Optional[str], basename: str = "logs") -> LogExport:
    """Render ``logs`` as ``fmt``; unknown formats fall back to JSON."""
    fmt = (fmt or "json").lower()
    if fmt not in EXPORT_FORMATS:
        fmt = "json"
    if fmt == "csv":
        content = logs_to_csv(logs)
    elif fmt == "txt":
        content = logs_to_text(logs)
    else:
        content = json.dumps(logs, indent=2)
    return LogExport(
        content=content,
        media_type=EXPORT_FORMATS[fmt],
        filename=f"{basename}_{today_stamp()}.{fmt}",
        count=len(logs),
    )


class LogService(BaseService):
    """Read access to the system log collection."""

    def _user_logs(self, user_id: str) -> List[Dict[str, Any]]:
        return [log for log in self.repositories.logs.list() if log.get("userId") == user_id]

    async def list_logs(self, params: Mapping[str, Any]) -> Page:
        query = self.parse_query(SYSTEM_LOG_QUERY, params)
        return run_list_query(self.repositories.logs.list(), SYSTEM_LOG_QUERY, query)

    async def list_user_logs(self, user_id: str, params: Mapping[str, Any]) -> Page:
        query = self.parse_query(USER_LOG_QUERY, params)
        return run_list_query(self._user_logs(user_id), USER_LOG_QUERY, query)

    async def export_logs(self, params: Mapping[str, Any], fmt: Optional[str] = None) -> LogExport:
        """Render every system log matching the filters, newest first.

        Pagination parameters are ignored; the export covers the whole
        filtered set.
        """
        query = self.parse_query(SYSTEM_LOG_QUERY, params)
        matched = select_records(self.repositories.logs.list(), SYSTEM_LOG_QUERY, query)
        matched = newest_first(matched)
        export = render_logs(matched, fmt)
        logger.info("Exported %d system logs as %s", export.count, export.filename)
        return export

    async def export_user_logs(self, user_id: str, params: Mapping[str, Any], fmt: Optional[str] = None) -> LogExport:
        query = self.parse_query(USER_LOG_QUERY, params)
        matched = select_records(self._user_logs(user_id), USER_LOG_QUERY, query)
        matched = newest_first(matched)
        export = render_logs(matched, fmt, basename=f"user_{user_id}_logs")
        logger.info("Exported %d logs of user %s", export.count, user_id)
        return export

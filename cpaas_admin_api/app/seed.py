"""
Mock data for the in-memory collections.

The dashboard has no database: on startup every collection is filled
from the fixtures and generators below.  Generators draw from a
``random.Random`` seeded with ``settings.mock_seed``, so the same seed
produces the same records.  Only the timestamps move, since they are
spread back from the current time.
"""

import random
import string
from datetime import datetime, timedelta
from functools import lru_cache
from typing import Any, Dict, List

from .core.config import Settings
from .core.security import hash_password, permissions_for_role
from .repositories import InMemoryRepository, Repositories
from .utils.time import to_utc_z, utc_now


_BASE36 = string.digits + string.ascii_lowercase

# (id, name, email, password, role, status, created_at, last_login, company, balance, project_id)
_USERS = [
    ("user_1", "John Doe", "john.doe@example.com", "admin123", "admin", "active",
     "2024-01-15T10:30:00Z", "2024-01-20T14:22:00Z", "Acme Corporation", 0, None),
    ("user_2", "Jane Smith", "jane.smith@example.com", "user123", "user", "active",
     "2024-01-16T09:15:00Z", "2024-01-20T13:45:00Z", "Tech Solutions Inc", 250.75, "proj_1"),
    ("user_3", "Bob Johnson", "bob.johnson@example.com", None, "user", "active",
     "2024-01-17T11:20:00Z", "2024-01-20T12:30:00Z", "Marketing Agency", 89.50, "proj_2"),
    ("user_4", "Alice Brown", "alice.brown@example.com", None, "user", "inactive",
     "2024-01-18T16:45:00Z", "2024-01-19T10:15:00Z", "E-commerce Store", 0, "proj_3"),
    ("user_5", "Charlie Wilson", "charlie.wilson@example.com", None, "user", "suspended",
     "2024-01-19T08:30:00Z", "2024-01-19T15:20:00Z", "Startup Inc", 15.25, "proj_4"),
    ("user_6", "Demo Admin", "demo@admin.com", "demo123", "admin", "active",
     "2024-01-17T11:20:00Z", "2024-01-20T12:30:00Z", "SOZURI", 0, None),
]

DEMO_CREDENTIALS = [
    {"email": "john.doe@example.com", "password": "admin123", "role": "admin",
     "description": "Admin user with full access"},
    {"email": "demo@admin.com", "password": "demo123", "role": "admin",
     "description": "Demo admin user"},
    {"email": "jane.smith@example.com", "password": "user123", "role": "user",
     "description": "Regular user"},
]

_PROJECTS = [
    ("proj_1", "Customer Onboarding", "Welcome messages and setup guides for new customers",
     3, 2451, 76, "2024-01-16T09:15:00Z", "2024-01-20T13:45:00Z", "user_2", "active", 250.75),
    ("proj_2", "Marketing Campaigns", "Promotional messages and marketing automation",
     5, 8920, 68, "2024-01-17T11:20:00Z", "2024-01-20T12:30:00Z", "user_3", "active", 89.50),
    ("proj_3", "Order Notifications", "Transactional messages for order updates",
     2, 1205, 95, "2024-01-18T16:45:00Z", "2024-01-19T10:15:00Z", "user_4", "inactive", 0),
    ("proj_4", "Support Alerts", "Customer support and service notifications",
     1, 456, 82, "2024-01-19T08:30:00Z", "2024-01-19T15:20:00Z", "user_5", "suspended", 15.25),
]

_CAMPAIGNS: List[Dict[str, Any]] = [
    {
        "id": "camp_001", "name": "Welcome Message",
        "description": "Initial welcome message sent to new customers",
        "channel": "sms", "status": "active",
        "created_at": "2023-05-15T10:30:00Z", "updated_at": "2023-05-15T10:30:00Z",
        "content": "Welcome to our service! We're excited to have you on board. "
                   "Reply HELP for assistance or STOP to unsubscribe.",
        "audience": {"total": 1245, "delivered": 1200, "failed": 45, "opened": 980, "clicked": 650},
        "schedule": {"type": "immediate", "sentAt": "2023-05-15T10:30:00Z"},
    },
    {
        "id": "camp_002", "name": "Product Launch",
        "description": "Announcing our new product features",
        "channel": "sms", "status": "completed",
        "created_at": "2023-05-10T14:20:00Z", "updated_at": "2023-05-10T14:20:00Z",
        "content": "Exciting news! Check out our new features. Visit our website to learn more.",
        "audience": {"total": 2500, "delivered": 2450, "failed": 50, "opened": 1800, "clicked": 1200},
        "schedule": {"type": "scheduled", "sentAt": "2023-05-10T14:20:00Z",
                     "scheduledFor": "2023-05-10T14:00:00Z"},
    },
    {
        "id": "camp_003", "name": "Monthly Newsletter",
        "description": "Monthly updates and tips for customers",
        "channel": "email", "status": "draft",
        "created_at": "2023-05-20T09:15:00Z", "updated_at": "2023-05-20T09:15:00Z",
        "content": "Here are this month's highlights and tips to get the most out of our service.",
        "audience": {"total": 0, "delivered": 0, "failed": 0, "opened": 0, "clicked": 0},
        "schedule": {"type": "scheduled", "scheduledFor": "2023-06-01T10:00:00Z"},
    },
    {
        "id": "camp_004", "name": "Flash Sale Alert",
        "description": "Limited time offer notification",
        "channel": "whatsapp", "status": "paused",
        "created_at": "2023-05-18T16:45:00Z", "updated_at": "2023-05-18T16:45:00Z",
        "content": "Flash Sale! 50% off all premium features. Limited time only!",
        "audience": {"total": 800, "delivered": 750, "failed": 50, "opened": 600, "clicked": 400},
        "schedule": {"type": "immediate"},
    },
    {
        "id": "camp_005", "name": "Customer Feedback",
        "description": "Survey request for customer satisfaction",
        "channel": "sms", "status": "active",
        "created_at": "2023-05-22T11:30:00Z", "updated_at": "2023-05-22T11:30:00Z",
        "content": "We value your feedback! Please take 2 minutes to complete our survey: [link]",
        "audience": {"total": 1500, "delivered": 1480, "failed": 20, "opened": 1100, "clicked": 850},
        "schedule": {"type": "recurring"},
    },
]

LOG_LEVELS = ["debug", "info", "warn", "error", "fatal"]
LOG_SOURCES = ["api", "auth", "messaging", "webhooks", "chat", "analytics"]
LOG_MESSAGES = [
    "User login successful",
    "SMS message sent successfully",
    "API rate limit exceeded",
    "Database connection timeout",
    "Webhook delivery failed",
    "Chat session started",
    "Campaign created",
    "User registration completed",
    "Payment processed",
    "File upload completed",
]

MESSAGE_CHANNELS = ["sms", "whatsapp", "viber", "rcs", "voice"]
MESSAGE_STATUSES = ["pending", "sent", "delivered", "failed", "read"]
_SENDERS = ["SOZURI", "COMPANY", "SUPPORT", "ALERTS", "PROMO"]
_CAMPAIGN_NAMES = ["Welcome Campaign", "Promo Blast", "Reminder Series", "Support Follow-up", "Newsletter"]
_TEMPLATE_NAMES = ["Welcome Template", "Promo Template", "Reminder Template", "Support Template"]
_SAMPLE_MESSAGES = [
    "Welcome to our service! Your account has been created successfully.",
    "Your order #12345 has been confirmed and will be shipped within 2 business days.",
    "Reminder: Your appointment is scheduled for tomorrow at 2:00 PM.",
    "Thank you for your purchase! Use code SAVE10 for 10% off your next order.",
    "Your verification code is: 123456. Do not share this code with anyone.",
    "Your payment of $29.99 has been processed successfully.",
    "Limited time offer: 50% off all items. Shop now!",
    "Your subscription will expire in 3 days. Renew now to continue service.",
    "Thank you for contacting support. We will respond within 24 hours.",
    "Your delivery is on its way! Track your package with code ABC123.",
]

TRANSACTION_TYPES = ["topup", "sms_send", "whatsapp_send", "voice_call", "refund"]
TRANSACTION_STATUSES = ["completed", "pending", "failed"]
_TRANSACTION_LABELS = {
    "topup": "Credit top-up",
    "sms_send": "SMS message sent",
    "whatsapp_send": "WhatsApp message sent",
    "voice_call": "Voice call",
    "refund": "Refund processed",
}


def transaction_description(kind: str, amount: float) -> str:
    label = _TRANSACTION_LABELS.get(kind, "Transaction")
    return f"{label}: ${abs(amount):.2f}"


def _token(rng: random.Random, length: int) -> str:
    return "".join(rng.choice(_BASE36) for _ in range(length))


def _phone(rng: random.Random) -> str:
    return f"+1{rng.randint(1_000_000_000, 9_999_999_999)}"


@lru_cache(maxsize=None)
def _demo_password_hash(password: str) -> str:
    # PBKDF2 is slow on purpose; hash each demo password once per process.
    return hash_password(password)


def build_users() -> List[Dict[str, Any]]:
    users = []
    for (user_id, name, email, password, role, status, created_at, last_login,
         company, balance, project_id) in _USERS:
        users.append({
            "id": user_id,
            "name": name,
            "email": email,
            "password": _demo_password_hash(password) if password else None,
            "role": role,
            "status": status,
            "created_at": created_at,
            "last_login": last_login,
            "company": company,
            "permissions": permissions_for_role(role),
            "balance": balance,
            "currency": "USD",
            "project_id": project_id,
        })
    return users


def build_projects() -> List[Dict[str, Any]]:
    return [
        {
            "id": project_id, "name": name, "description": description,
            "campaigns": campaigns, "messages": messages, "engagement": engagement,
            "created": created, "updated": updated, "user_id": user_id,
            "status": status, "balance": balance, "currency": "USD",
        }
        for (project_id, name, description, campaigns, messages, engagement,
             created, updated, user_id, status, balance) in _PROJECTS
    ]


def build_campaigns() -> List[Dict[str, Any]]:
    return [dict(campaign) for campaign in _CAMPAIGNS]


def build_webhooks(now: datetime) -> List[Dict[str, Any]]:
    return [
        {"id": "wh_1", "url": "https://example.com/hook1", "description": "Production Hook",
         "events": ["message.sent", "message.delivered"], "isActive": True,
         "createdAt": to_utc_z(now - timedelta(days=1))},
        {"id": "wh_2", "url": "https://example.com/hook2", "description": "Staging Notifications",
         "events": ["message.failed"], "isActive": True,
         "createdAt": to_utc_z(now - timedelta(days=2))},
        {"id": "wh_3", "url": "https://example.com/hook3", "description": "Testing Endpoint",
         "events": ["message.sent"], "isActive": False, "createdAt": to_utc_z(now)},
    ]


def build_integrations(now: datetime) -> List[Dict[str, Any]]:
    return [
        {"id": "int_1", "type": "zapier", "name": "My Zapier Connection", "connected": True,
         "createdAt": to_utc_z(now)},
        {"id": "int_2", "type": "hubspot", "name": "Marketing HubSpot", "connected": True,
         "createdAt": to_utc_z(now)},
    ]


def generate_logs(rng: random.Random, count: int, now: datetime) -> List[Dict[str, Any]]:
    """System logs, one roughly every minute going back from ``now``."""
    logs = []
    for i in range(count):
        timestamp = now - timedelta(milliseconds=i * 60_000 + rng.random() * 60_000)
        source = rng.choice(LOG_SOURCES)
        logs.append({
            "id": f"log_{i + 1}",
            "timestamp": to_utc_z(timestamp),
            "level": rng.choice(LOG_LEVELS),
            "message": rng.choice(LOG_MESSAGES),
            "source": source,
            "userId": f"user_{rng.randint(1, 10)}" if rng.random() > 0.3 else None,
            "requestId": f"req_{_token(rng, 9)}",
            "context": {
                "ip": f"192.168.1.{rng.randint(0, 254)}",
                "userAgent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
                "endpoint": f"/{source}/{_token(rng, 5)}",
                "duration": f"{rng.randint(0, 999)}ms",
            },
        })
    return logs


def generate_message_logs(rng: random.Random, count: int, now: datetime) -> List[Dict[str, Any]]:
    """Message logs, one roughly every five minutes going back from ``now``."""
    logs = []
    for i in range(count):
        timestamp = now - timedelta(milliseconds=i * 300_000 + rng.random() * 300_000)
        channel = rng.choice(MESSAGE_CHANNELS)
        direction = rng.choice(["inbound", "outbound"])
        status = rng.choice(MESSAGE_STATUSES)
        outbound = direction == "outbound"
        campaign = rng.choice(_CAMPAIGN_NAMES) if rng.random() > 0.3 else None
        template = rng.choice(_TEMPLATE_NAMES) if rng.random() > 0.4 else None
        logs.append({
            "id": f"msglog_{i + 1}",
            "message_id": f"msg_{_token(rng, 9)}",
            "channel": channel,
            "direction": direction,
            "sender": rng.choice(_SENDERS) if outbound else _phone(rng),
            "recipient": _phone(rng) if outbound else rng.choice(_SENDERS),
            "content": rng.choice(_SAMPLE_MESSAGES),
            "status": status,
            "timestamp": to_utc_z(timestamp),
            "cost": round(rng.random() * 0.1 + 0.01, 4) if outbound else None,
            "currency": "USD" if outbound else None,
            "campaign_id": f"camp_{_token(rng, 7)}" if campaign else None,
            "campaign_name": campaign,
            "template_id": f"tmpl_{_token(rng, 7)}" if template else None,
            "template_name": template,
            "user_id": f"user_{rng.randint(1, 100)}",
            "project_id": f"proj_{rng.randint(1, 20)}",
            "error_code": f"ERR_{rng.randint(100, 998)}" if status == "failed" else None,
            "error_message": "Message delivery failed due to invalid number" if status == "failed" else None,
            "delivery_attempts": rng.randint(1, 3),
            "metadata": {
                "user_agent": "WhatsApp/2.21.0" if channel == "whatsapp" else None,
                "device_type": "mobile" if rng.random() > 0.5 else "desktop",
                "ip_address": f"192.168.{rng.randint(0, 254)}.{rng.randint(0, 254)}",
                "country_code": rng.choice(["US", "CA", "GB", "AU", "DE"]),
            },
        })
    return logs


def generate_transactions(rng: random.Random, user_id: str, count: int, now: datetime) -> List[Dict[str, Any]]:
    """Transactions for one user, one roughly every hour going back from ``now``."""
    transactions = []
    for i in range(count):
        timestamp = now - timedelta(milliseconds=i * 3_600_000 + rng.random() * 3_600_000)
        kind = rng.choice(TRANSACTION_TYPES)
        if kind == "topup":
            amount = round(rng.random() * 500 + 10, 2)
            reference = f"top_{_token(rng, 9)}"
        else:
            amount = -round(rng.random() * 5 + 0.1, 2)
            reference = f"msg_{_token(rng, 9)}" if kind.endswith("_send") else f"ref_{_token(rng, 9)}"
        channel = {"sms_send": "sms", "whatsapp_send": "whatsapp", "voice_call": "voice"}.get(kind)
        transactions.append({
            "id": f"txn_{user_id}_{i + 1}",
            "user_id": user_id,
            "type": kind,
            "amount": amount,
            "status": rng.choice(TRANSACTION_STATUSES),
            "description": transaction_description(kind, amount),
            "timestamp": to_utc_z(timestamp),
            "reference_id": reference,
            "metadata": {
                "channel": channel,
                "recipient": _phone(rng) if channel else None,
            },
        })
    return transactions


def build_repositories(settings: Settings) -> Repositories:
    """Create and fill one in-memory repository per resource."""
    rng = random.Random(settings.mock_seed)
    now = utc_now()
    users = build_users()
    transactions: List[Dict[str, Any]] = []
    for user in users:
        transactions.extend(
            generate_transactions(rng, user["id"], settings.mock_transactions_per_user, now)
        )
    return Repositories(
        users=InMemoryRepository("user", "user", users),
        projects=InMemoryRepository("project", "proj", build_projects()),
        transactions=InMemoryRepository("transaction", "txn", transactions),
        logs=InMemoryRepository("log", "log", generate_logs(rng, settings.mock_log_count, now)),
        message_logs=InMemoryRepository(
            "message log", "msglog", generate_message_logs(rng, settings.mock_message_log_count, now)
        ),
        campaigns=InMemoryRepository("campaign", "camp", build_campaigns()),
        webhooks=InMemoryRepository("webhook", "wh", build_webhooks(now)),
        integrations=InMemoryRepository("integration", "int", build_integrations(now)),
    )

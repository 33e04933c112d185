"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API starts with a usable mock dataset out of the box.  In a production
deployment you should at least override ``SECRET_KEY``.
"""

import os
from dataclasses import dataclass, field
from typing import Optional


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = field(default_factory=lambda: os.getenv("PROJECT_NAME", "CPaaS Admin API"))
    api_version: str = field(default_factory=lambda: os.getenv("API_VERSION", "1.0.0"))
    debug: bool = field(default_factory=lambda: _env_flag("DEBUG"))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_file: Optional[str] = field(default_factory=lambda: os.getenv("LOG_FILE") or None)

    secret_key: str = field(default_factory=lambda: os.getenv("SECRET_KEY", "change_me"))
    access_token_expire_minutes: int = field(
        default_factory=lambda: int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))
    )
    # Impersonation sessions are deliberately short lived.
    impersonation_token_expire_minutes: int = field(
        default_factory=lambda: int(os.getenv("IMPERSONATION_TOKEN_EXPIRE_MINUTES", "60"))
    )

    # Mock dataset.  The same seed always produces the same collections,
    # apart from timestamps which are spread back from the current time.
    mock_seed: int = field(default_factory=lambda: int(os.getenv("MOCK_SEED", "42")))
    mock_log_count: int = field(default_factory=lambda: int(os.getenv("MOCK_LOG_COUNT", "2000")))
    mock_message_log_count: int = field(
        default_factory=lambda: int(os.getenv("MOCK_MESSAGE_LOG_COUNT", "1000"))
    )
    mock_transactions_per_user: int = field(
        default_factory=lambda: int(os.getenv("MOCK_TRANSACTIONS_PER_USER", "200"))
    )

    # Upper bound applied to any ``limit`` query parameter.
    max_page_size: int = field(default_factory=lambda: int(os.getenv("MAX_PAGE_SIZE", "500")))

    api_host: str = field(default_factory=lambda: os.getenv("API_HOST", "0.0.0.0"))
    api_port: int = field(default_factory=lambda: int(os.getenv("API_PORT", "8000")))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()

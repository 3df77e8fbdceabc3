"""
Sentry Setup

Optional error tracking for the CLI entry point.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, Optional

import sentry_sdk
from sentry_sdk.integrations.logging import LoggingIntegration

from . import __version__
from .config import AWS_ACCOUNT_ENV_NAME, SSM_READ_ROLE_ENV_NAME

logger = logging.getLogger(__name__)

# Track initialization state
_sentry_initialized = False


@dataclass
class MonitoringConfig:
    """Error tracking settings for the CLI."""

    sentry_dsn: Optional[str] = None
    sentry_environment: str = "production"
    tags: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_env(cls) -> "MonitoringConfig":
        """Create config from environment variables.

        The AWS account and SSM role are attached as tags so failures can be
        traced to the deployment that raised them.
        """
        tags = {
            "aws_account": os.getenv(AWS_ACCOUNT_ENV_NAME, ""),
            "ssm_role": os.getenv(SSM_READ_ROLE_ENV_NAME, ""),
        }
        return cls(
            sentry_dsn=os.getenv("SENTRY_DSN"),
            sentry_environment=os.getenv("SENTRY_ENVIRONMENT", "production"),
            tags={k: v for k, v in tags.items() if v},
        )


def init_sentry(config: Optional[MonitoringConfig] = None) -> bool:
    """Initialize Sentry once per process; returns True when tracking is on."""
    global _sentry_initialized

    config = config or MonitoringConfig.from_env()
    if _sentry_initialized or not config.sentry_dsn:
        return _sentry_initialized

    # Events come from capture_exception; logging only records breadcrumbs.
    sentry_sdk.init(
        dsn=config.sentry_dsn,
        environment=config.sentry_environment,
        release=f"platsec-slack@{__version__}",
        integrations=[LoggingIntegration(level=logging.INFO, event_level=None)],
    )
    for key, value in config.tags.items():
        sentry_sdk.set_tag(key, value)

    _sentry_initialized = True
    logger.debug("Sentry initialized for %s", config.sentry_environment)
    return True


def capture_exception(
    exception: BaseException,
    tags: Optional[Dict[str, str]] = None,
) -> Optional[str]:
    """
    Capture an exception and send to Sentry.

    Returns:
        Sentry event ID if captured, None otherwise
    """
    if not _sentry_initialized:
        return None

    with sentry_sdk.new_scope() as scope:
        for key, value in (tags or {}).items():
            scope.set_tag(key, value)
        return sentry_sdk.capture_exception(exception)

"""
Notification Pipeline

Top-level drivers: environment -> config -> messages -> relay. Each step
fails fast and the failure is returned as a SendResult instead of ending
the process.
"""

import logging
from typing import Any, Optional, Sequence

import requests
from botocore.exceptions import BotoCoreError, ClientError

from .client import SlackNotifier
from .config import (
    REQUIRED_ENV_KEYS,
    NotifierConfig,
    build_config,
    http_timeout_from_env,
    read_env,
    validate_keys_present,
)
from .messages import create_messages
from .ssm import CredentialResolver, create_ssm_client
from .types import (
    ConfigurationError,
    CredentialResolutionError,
    NotifierError,
    SendResult,
)

logger = logging.getLogger(__name__)


def load_config(ssm_client: Optional[Any] = None) -> NotifierConfig:
    """
    Validate the environment and build the notifier config.

    Args:
        ssm_client: Optional SSM client (created from the environment if omitted)

    Raises:
        ConfigurationError: if keys are missing or the build yields the sentinel
        CredentialResolutionError: if the parameter store call fails
    """
    if not validate_keys_present(REQUIRED_ENV_KEYS):
        raise ConfigurationError(
            f"Missing environment variables; required: {', '.join(REQUIRED_ENV_KEYS)}"
        )

    try:
        timeout = http_timeout_from_env()
        resolver = CredentialResolver(ssm_client or create_ssm_client())
        config = build_config(read_env(REQUIRED_ENV_KEYS), resolver, timeout=timeout)
    except (ClientError, BotoCoreError) as e:
        raise CredentialResolutionError(f"Parameter store lookup failed: {e}") from e
    except ValueError as e:
        raise ConfigurationError(f"Invalid configuration value: {e}") from e

    if config.is_empty:
        raise ConfigurationError("Failed to build notifier configuration")
    return config


def send_message_with_params(
    config: NotifierConfig,
    channels: Sequence[str],
    header: str,
    title: str,
    text: str,
    color: str,
    per_channel: bool = False,
    session: Optional[requests.Session] = None,
) -> SendResult:
    """
    Send a notification using an already built config.

    Stops at the first message the relay does not accept; later messages
    are not sent.

    Returns:
        SendResult with the number of messages delivered
    """
    if not config.is_complete:
        return SendResult.failure(ConfigurationError("Notifier configuration is incomplete"))

    messages, count = create_messages(channels, header, title, text, color, per_channel=per_channel)
    if count == 0:
        logger.error("No channels specified, nothing to send")
        return SendResult.failure(ConfigurationError("no channels specified"))

    notifier = SlackNotifier(config, session=session)
    sent = 0
    for message in messages:
        try:
            notifier.send_message(message)
        except NotifierError as e:
            logger.error("Stopping after %d of %d messages: %s", sent, count, e)
            return SendResult.failure(e, sent=sent)
        sent += 1

    return SendResult.success(sent, messages)


def send_message_with_env_vars(
    channels: Sequence[str],
    header: str,
    title: str,
    text: str,
    color: str,
    per_channel: bool = False,
    ssm_client: Optional[Any] = None,
    session: Optional[requests.Session] = None,
) -> SendResult:
    """
    Send a notification configured entirely from environment variables.

    Usage:
        result = send_message_with_env_vars(["alerts"], "Header", "Title", "Body", "red")
        if not result.is_success:
            ...

    Args:
        channels: Target Slack channels
        header: Top-level message text
        title: Attachment title
        text: Attachment body
        color: Attachment color
        per_channel: Send one message per channel
        ssm_client: Optional SSM client for credential lookup
        session: Optional requests session for the relay call

    Returns:
        SendResult; never raises for pipeline failures
    """
    try:
        config = load_config(ssm_client)
    except NotifierError as e:
        logger.error("Configuration failed: %s", e)
        return SendResult.failure(e)

    return send_message_with_params(
        config,
        channels,
        header,
        title,
        text,
        color,
        per_channel=per_channel,
        session=session,
    )

"""
Slack Relay Client

Posts serialized payloads to the Slack notification relay.
"""

import base64
import logging
from typing import Dict, Optional

import requests

from .config import NotifierConfig
from .payload import encode_message
from .types import DeliveryError, Message

logger = logging.getLogger(__name__)


def build_auth_header(config: NotifierConfig) -> Dict[str, str]:
    """
    Build request headers with basic auth for the relay.

    The credential pair is the resolved Slack username and token.
    """
    credentials = f"{config.username}:{config.token}".encode("utf-8")
    encoded = base64.b64encode(credentials).decode("ascii")
    return {
        "Content-Type": "application/json",
        "Authorization": f"Basic {encoded}",
    }


class SlackNotifier:
    """
    Sends messages to Slack through the notification relay.

    Usage:
        notifier = SlackNotifier(config)
        notifier.send_message(message)
    """

    def __init__(self, config: NotifierConfig, session: Optional[requests.Session] = None):
        """
        Initialize relay client.

        Args:
            config: Built NotifierConfig with endpoint and credentials
            session: Optional requests session (one is created if omitted)
        """
        self.config = config
        self._session = session or requests.Session()

    def send(self, body: bytes) -> int:
        """
        POST a serialized payload to the relay.

        Args:
            body: JSON payload bytes

        Returns:
            HTTP status code of the response

        Raises:
            DeliveryError: if the request fails before a response arrives
        """
        try:
            response = self._session.post(
                self.config.endpoint_url,
                data=body,
                headers=build_auth_header(self.config),
                timeout=self.config.timeout,
            )
        except requests.RequestException as e:
            logger.error("Failed to reach Slack relay: %s", e)
            raise DeliveryError(f"Slack relay request failed: {e}") from e

        logger.debug("Slack relay responded with %d", response.status_code)
        return response.status_code

    def send_message(self, message: Message) -> None:
        """
        Encode and deliver one message.

        Raises:
            PayloadError: if the message cannot be encoded
            DeliveryError: unless the relay answers exactly 200
        """
        status_code = self.send(encode_message(message))
        if status_code != 200:
            logger.error(
                "Slack relay rejected message for %s with status %d",
                ", ".join(message.channels),
                status_code,
            )
            raise DeliveryError(
                f"Slack relay returned status {status_code}", status_code=status_code
            )
        logger.info("Notification sent to %s", ", ".join(message.channels))

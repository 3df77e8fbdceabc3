"""
Notification Types

Value objects for messages, the relay payload, and send results, plus the
error hierarchy shared by every stage of the pipeline.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


CHANNEL_LOOKUP_BY = "slack-channel"


class ErrorKind(Enum):
    """Category of a pipeline failure."""
    CONFIGURATION = "configuration"
    CREDENTIAL_RESOLUTION = "credential_resolution"
    PAYLOAD = "payload"
    DELIVERY = "delivery"


class NotifierError(Exception):
    """Base class for all notification pipeline failures."""

    kind: ErrorKind = ErrorKind.CONFIGURATION


class ConfigurationError(NotifierError):
    """Missing or invalid environment configuration."""

    kind = ErrorKind.CONFIGURATION


class EmptyChannelListError(ConfigurationError, ValueError):
    """Raised when a message is built without any target channel."""

    def __init__(self, message: str = "no channels specified"):
        super().__init__(message)


class CredentialResolutionError(NotifierError):
    """Parameter store call failed or returned mismatched parameters."""

    kind = ErrorKind.CREDENTIAL_RESOLUTION


class PayloadError(NotifierError):
    """Payload could not be serialized."""

    kind = ErrorKind.PAYLOAD


class DeliveryError(NotifierError):
    """Relay returned a non-200 status or the request never completed."""

    kind = ErrorKind.DELIVERY

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class Message:
    """A single notification addressed to one or more Slack channels."""

    channels: Tuple[str, ...]
    header: str
    title: str
    text: str
    color: str


@dataclass(frozen=True)
class ChannelLookup:
    channels: Tuple[str, ...]
    by: str = CHANNEL_LOOKUP_BY

    def to_dict(self) -> Dict[str, Any]:
        return {"by": self.by, "slackChannels": list(self.channels)}


@dataclass(frozen=True)
class Attachment:
    color: str
    title: str
    text: str

    def to_dict(self) -> Dict[str, str]:
        return {"color": self.color, "title": self.title, "text": self.text}


@dataclass(frozen=True)
class MessageDetails:
    text: str
    attachments: Tuple[Attachment, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "attachments": [a.to_dict() for a in self.attachments],
        }


@dataclass(frozen=True)
class MessagePayload:
    """Wire representation of a message as expected by the relay."""

    channel_lookup: ChannelLookup
    message_details: MessageDetails

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the relay's JSON structure."""
        return {
            "channelLookup": self.channel_lookup.to_dict(),
            "messageDetails": self.message_details.to_dict(),
        }


class SendStatus(Enum):
    """Overall outcome of a send invocation."""
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class SendResult:
    """Result of a notification send, returned to the entry point."""

    status: SendStatus
    sent: int = 0
    error: Optional[NotifierError] = None
    messages: List[Message] = field(default_factory=list)

    @staticmethod
    def success(sent: int, messages: Optional[List[Message]] = None) -> 'SendResult':
        """Create a success result."""
        return SendResult(SendStatus.SUCCESS, sent, None, list(messages or []))

    @staticmethod
    def failure(error: NotifierError, sent: int = 0) -> 'SendResult':
        """Create a failed result."""
        return SendResult(SendStatus.FAILED, sent, error)

    @property
    def is_success(self) -> bool:
        """Check if every message was delivered."""
        return self.status == SendStatus.SUCCESS

    @property
    def error_kind(self) -> Optional[ErrorKind]:
        """Kind of the failure, if any."""
        return self.error.kind if self.error else None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "status": self.status.value,
            "sent": self.sent,
            "error": str(self.error) if self.error else None,
            "error_kind": self.error_kind.value if self.error_kind else None,
        }

"""
Relay Payload Builders

Turns messages into the JSON structure the Slack relay expects:

    {"channelLookup": {"by": "slack-channel", "slackChannels": [...]},
     "messageDetails": {"text": <header>,
                        "attachments": [{"color", "title", "text"}]}}
"""

import json

from .types import (
    Attachment,
    ChannelLookup,
    Message,
    MessageDetails,
    MessagePayload,
    PayloadError,
)


def to_payload(msg: Message) -> MessagePayload:
    """Build the relay payload for a message.

    The header becomes the top-level text; the body goes into the single
    attachment.
    """
    return MessagePayload(
        channel_lookup=ChannelLookup(channels=tuple(msg.channels)),
        message_details=MessageDetails(
            text=msg.header,
            attachments=(Attachment(color=msg.color, title=msg.title, text=msg.text),),
        ),
    )


def serialize(payload: MessagePayload) -> bytes:
    """
    Render a payload as compact UTF-8 JSON.

    Raises:
        PayloadError: if the payload holds non-serializable content
    """
    try:
        return json.dumps(
            payload.to_dict(),
            separators=(",", ":"),
            ensure_ascii=False,
        ).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise PayloadError(f"Failed to serialize payload: {e}") from e


def encode_message(msg: Message) -> bytes:
    """Shortcut for serialize(to_payload(msg))."""
    return serialize(to_payload(msg))

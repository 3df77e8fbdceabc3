"""Message construction from caller-supplied channel lists and content."""

from typing import List, Sequence, Tuple

from .types import EmptyChannelListError, Message


def new_message(
    channels: Sequence[str],
    header: str,
    title: str,
    text: str,
    color: str,
) -> Message:
    """
    Build a single message addressed to all given channels.

    Raises:
        EmptyChannelListError: if no channels are given
    """
    if not channels:
        raise EmptyChannelListError()
    return Message(
        channels=tuple(channels),
        header=header,
        title=title,
        text=text,
        color=color,
    )


def create_messages(
    channels: Sequence[str],
    header: str,
    title: str,
    text: str,
    color: str,
    per_channel: bool = False,
) -> Tuple[List[Message], int]:
    """
    Build the messages for a bulk send.

    Unlike new_message, an empty channel list is not an error here: it
    yields no messages and a count of 0, which the caller must check.

    Args:
        channels: Target channels, in order
        per_channel: Build one message per channel instead of one for all

    Returns:
        (messages, count) where count == len(messages)
    """
    if not channels:
        return [], 0

    if per_channel:
        messages = [new_message([c], header, title, text, color) for c in channels]
    else:
        messages = [new_message(channels, header, title, text, color)]

    return messages, len(messages)

from __future__ import annotations

from enum import Enum


class EventKind(str, Enum):
    """Classification of a single inbound webhook event.

    Exactly one kind is assigned to every event record. The order of the
    members below (excluding UNKNOWN) is the classification precedence:
    when a malformed record carries more than one populated slot, the
    first one listed wins.

    Example:
        >>> from pagehook.types import EventKind
        >>> EventKind("postback") is EventKind.POSTBACK
        True
    """

    TEXT = "text"
    DELIVERY = "delivery"
    READ = "read"
    POSTBACK = "postback"
    OPTIN = "optin"
    REFERRAL = "referral"
    ACCOUNT_LINKING = "account_linking"
    UNKNOWN = "unknown"


class AccountLinkStatus(str, Enum):
    """New state reported by an account-linking event."""

    LINKED = "linked"
    UNLINKED = "unlinked"


class AttachmentType(str, Enum):
    """Attachment kinds the send API accepts for URL based attachments."""

    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"
    FILE = "file"


class MessagingType(str, Enum):
    """Purpose of an outbound message.

    - RESPONSE: reply to a message the user sent
    - UPDATE: proactive update inside the standard messaging window
    - MESSAGE_TAG: outside the window; requires a `tag`
    """

    RESPONSE = "RESPONSE"
    UPDATE = "UPDATE"
    MESSAGE_TAG = "MESSAGE_TAG"
    NON_PROMOTIONAL_SUBSCRIPTION = "NON_PROMOTIONAL_SUBSCRIPTION"


class NotificationType(str, Enum):
    """Push notification behaviour on the user's device."""

    REGULAR = "REGULAR"
    SILENT_PUSH = "SILENT_PUSH"
    NO_PUSH = "NO_PUSH"


class SenderAction(str, Enum):
    """Typing indicators and read markers."""

    MARK_SEEN = "mark_seen"
    TYPING_ON = "typing_on"
    TYPING_OFF = "typing_off"

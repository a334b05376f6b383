"""Core types for pagehook.

This package centralizes the enums, inbound event models, outbound message
models, results and protocols in one place. Most modules should import
types from here rather than directly from submodules.

Usage:
    from pagehook.types import Envelope, EventKind, TextMessage, TextReply
"""

from .enums import (
    AccountLinkStatus,
    AttachmentType,
    EventKind,
    MessagingType,
    NotificationType,
    SenderAction,
)
from .events import (
    PAGE_OBJECT,
    AccountLinking,
    Attachment,
    AttachmentPayload,
    Batch,
    Delivery,
    Envelope,
    EventPayload,
    MessagingEvent,
    OptIn,
    Participant,
    PostBack,
    QuickReplySelection,
    Read,
    Referral,
    ReferralInfo,
    TextMessage,
    to_seconds,
)
from .messages import (
    AttachmentReply,
    OutboundMessage,
    QuickReply,
    SenderActionReply,
    TextReply,
)
from .protocols import EventHandler, SendClient
from .results import SendResult

__all__ = [
    "AccountLinkStatus",
    "AttachmentType",
    "EventKind",
    "MessagingType",
    "NotificationType",
    "SenderAction",
    "PAGE_OBJECT",
    "AccountLinking",
    "Attachment",
    "AttachmentPayload",
    "Batch",
    "Delivery",
    "Envelope",
    "EventPayload",
    "MessagingEvent",
    "OptIn",
    "Participant",
    "PostBack",
    "QuickReplySelection",
    "Read",
    "Referral",
    "ReferralInfo",
    "TextMessage",
    "to_seconds",
    "AttachmentReply",
    "OutboundMessage",
    "QuickReply",
    "SenderActionReply",
    "TextReply",
    "EventHandler",
    "SendClient",
    "SendResult",
]

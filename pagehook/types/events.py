from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, ClassVar, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import AccountLinkStatus, EventKind


PAGE_OBJECT = "page"


def to_seconds(raw: int) -> int:
    """Convert a platform timestamp (milliseconds) to whole seconds."""
    return raw // 1000


class WireModel(BaseModel):
    """Base for every model decoded from the webhook body.

    Unknown keys are dropped so new platform fields never break decoding,
    and numeric ids are accepted where the platform sends strings.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )


def _none_as_empty(value: Any) -> Any:
    return [] if value is None else value


class Participant(WireModel):
    """Sender or recipient of an event; `id` is opaque."""

    id: str = ""


class AttachmentPayload(WireModel):
    url: Optional[str] = None


class Attachment(WireModel):
    """File or media sent along with an inbound message."""

    type: str = ""
    payload: Optional[AttachmentPayload] = None


class QuickReplySelection(WireModel):
    """Quick reply button the user tapped."""

    payload: str = ""


class ReferralInfo(WireModel):
    """Where a conversation was entered from (m.me link, ad, ...)."""

    ref: str = ""
    source: str = ""
    type: str = ""


class EventPayload(WireModel):
    """Common fields of every typed event handed to handlers.

    `sender`, `recipient` and `timestamp` are not part of the variant's wire
    object; they are copied in from the surrounding event record when the
    payload is built for dispatch. `timestamp` is in whole seconds.
    """

    kind: ClassVar[EventKind] = EventKind.UNKNOWN

    sender: str = ""
    recipient: str = ""
    timestamp: int = 0

    @property
    def time(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp, tz=timezone.utc)


class TextMessage(EventPayload):
    """A message the user sent; may carry only attachments and no text."""

    kind: ClassVar[EventKind] = EventKind.TEXT

    id: str = Field(default="", alias="mid")
    sequence: int = Field(default=0, alias="seq")
    text: str = ""
    is_echo: bool = False
    attachments: List[Attachment] = Field(default_factory=list)
    quick_reply: Optional[QuickReplySelection] = None
    nlp: Optional[Dict[str, Any]] = None

    @field_validator("attachments", mode="before")
    @classmethod
    def _empty_attachments(cls, v: Any) -> Any:
        return _none_as_empty(v)

    def entities(self) -> Dict[str, Any]:
        """Return built-in NLP entities, if the page has NLP enabled."""
        if not self.nlp:
            return {}
        return self.nlp.get("entities") or {}


class _Watermarked(EventPayload):
    watermark: int = 0
    sequence: int = Field(default=0, alias="seq")

    @property
    def watermark_seconds(self) -> int:
        return to_seconds(self.watermark)

    @property
    def watermark_at(self) -> datetime:
        return datetime.fromtimestamp(self.watermark_seconds, tz=timezone.utc)


class Delivery(_Watermarked):
    """Messages up to `watermark` have been delivered."""

    kind: ClassVar[EventKind] = EventKind.DELIVERY

    message_ids: List[str] = Field(default_factory=list, alias="mids")

    @field_validator("message_ids", mode="before")
    @classmethod
    def _empty_mids(cls, v: Any) -> Any:
        return _none_as_empty(v)


class Read(_Watermarked):
    """Messages sent before `watermark` have been read."""

    kind: ClassVar[EventKind] = EventKind.READ


class PostBack(EventPayload):
    kind: ClassVar[EventKind] = EventKind.POSTBACK

    payload: str = ""
    title: Optional[str] = None
    referral: Optional[ReferralInfo] = None


class OptIn(EventPayload):
    kind: ClassVar[EventKind] = EventKind.OPTIN

    ref: str = ""
    user_ref: Optional[str] = None


class Referral(ReferralInfo, EventPayload):
    kind: ClassVar[EventKind] = EventKind.REFERRAL


class AccountLinking(EventPayload):
    kind: ClassVar[EventKind] = EventKind.ACCOUNT_LINKING

    status: AccountLinkStatus
    authorization_code: Optional[str] = None


class MessagingEvent(WireModel):
    """One event record as delivered by the platform.

    At most one of the variant slots is expected to be set. Nothing here
    enforces that; `pagehook.classifier` decides which slot is active.
    """

    sender: Optional[Participant] = None
    recipient: Optional[Participant] = None
    timestamp: int = 0

    message: Optional[TextMessage] = None
    delivery: Optional[Delivery] = None
    read: Optional[Read] = None
    postback: Optional[PostBack] = None
    optin: Optional[OptIn] = None
    referral: Optional[Referral] = None
    account_linking: Optional[AccountLinking] = None

    @property
    def sender_id(self) -> str:
        return self.sender.id if self.sender is not None else ""

    @property
    def recipient_id(self) -> str:
        return self.recipient.id if self.recipient is not None else ""


class Batch(WireModel):
    """One `entry` of the envelope."""

    id: str = ""
    sent_at: int = Field(default=0, alias="time")
    events: List[MessagingEvent] = Field(default_factory=list, alias="messaging")

    @field_validator("events", mode="before")
    @classmethod
    def _empty_events(cls, v: Any) -> Any:
        return _none_as_empty(v)


class Envelope(WireModel):
    """Top-level webhook body.

    Example:
        >>> from pagehook.types import Envelope
        >>> Envelope.model_validate({"object": "page", "entry": []}).batches
        []
    """

    kind: str = Field(default="", alias="object")
    batches: List[Batch] = Field(default_factory=list, alias="entry")

    @field_validator("batches", mode="before")
    @classmethod
    def _empty_batches(cls, v: Any) -> Any:
        return _none_as_empty(v)

    @property
    def is_page(self) -> bool:
        return self.kind == PAGE_OBJECT

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .enums import AttachmentType, MessagingType, NotificationType, SenderAction


class QuickReply(BaseModel):
    """Button offered under a text reply.

    Example:
        >>> from pagehook.types import QuickReply
        >>> QuickReply(title="Yes", payload="ANSWER_YES")
    """

    content_type: Literal["text", "user_phone_number", "user_email"] = "text"
    title: Optional[str] = None
    payload: Optional[str] = None
    image_url: Optional[str] = None

    @model_validator(mode="after")
    def _require_title_for_text(self) -> "QuickReply":
        if self.content_type == "text" and not self.title:
            raise ValueError("text quick replies require a title")
        return self


class OutboundMessage(BaseModel):
    """Base class for everything sent through the platform send API.

    Carries the delivery options that apply to every message kind so
    callers do not repeat them per method:

    - messaging_type: why the page is messaging (RESPONSE by default)
    - notification_type: push behaviour on the recipient's device
    - tag: required when messaging_type is MESSAGE_TAG

    The recipient is not part of the message; it comes from the
    `ReplyContext` the message is sent through.
    """

    messaging_type: MessagingType = MessagingType.RESPONSE
    notification_type: Optional[NotificationType] = None
    tag: Optional[str] = None

    @model_validator(mode="after")
    def _enforce_tag(self) -> "OutboundMessage":
        if self.messaging_type == MessagingType.MESSAGE_TAG and not self.tag:
            raise ValueError("MESSAGE_TAG messages require a tag")
        return self


class TextReply(OutboundMessage):
    """Plain text, optionally with up to thirteen quick replies.

    Example:
        >>> from pagehook.types import TextReply, QuickReply
        >>> TextReply(text="Pick one", quick_replies=[QuickReply(title="A", payload="A")])
    """

    text: str = Field(min_length=1, max_length=2000)
    quick_replies: Optional[List[QuickReply]] = None

    @field_validator("quick_replies")
    @classmethod
    def _validate_quick_replies(cls, v: Optional[List[QuickReply]]) -> Optional[List[QuickReply]]:
        if v is not None and len(v) > 13:
            raise ValueError("quick_replies cannot have more than 13 entries")
        return v


class AttachmentReply(OutboundMessage):
    """Media or file referenced by URL."""

    attachment_type: AttachmentType
    url: str
    is_reusable: bool = False
    quick_replies: Optional[List[QuickReply]] = None

    @field_validator("url")
    @classmethod
    def _validate_url(cls, v: str) -> str:
        if not v.startswith(("https://", "http://")):
            raise ValueError("attachment url must be http(s)")
        return v


class SenderActionReply(OutboundMessage):
    """Typing indicator or seen marker; carries no message body."""

    action: SenderAction

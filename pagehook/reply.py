from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .types import (
    AttachmentReply,
    AttachmentType,
    MessagingType,
    NotificationType,
    OutboundMessage,
    QuickReply,
    SendClient,
    SenderAction,
    SenderActionReply,
    SendResult,
    TextReply,
)


@dataclass(frozen=True)
class ReplyContext:
    """Handle for answering the conversation an event came from.

    Built by the dispatcher for each event and passed to every handler of
    that event. `target` is the event's sender; `credential` is the page
    access token. The dispatcher keeps no reference to it afterwards.

    Example:
        >>> def on_message(message, reply):
        ...     reply.sender_action(SenderAction.TYPING_ON)
        ...     reply.text(f"You said: {message.text}")
    """

    target: str
    credential: str = field(repr=False)
    client: SendClient = field(repr=False)

    def send(self, message: OutboundMessage) -> SendResult:
        return self.client.send(self.target, message, self.credential)

    def text(
        self,
        text: str,
        quick_replies: Optional[List[QuickReply]] = None,
        messaging_type: MessagingType = MessagingType.RESPONSE,
        notification_type: Optional[NotificationType] = None,
        tag: Optional[str] = None,
    ) -> SendResult:
        return self.send(
            TextReply(
                text=text,
                quick_replies=quick_replies,
                messaging_type=messaging_type,
                notification_type=notification_type,
                tag=tag,
            )
        )

    def attachment(
        self,
        attachment_type: AttachmentType,
        url: str,
        messaging_type: MessagingType = MessagingType.RESPONSE,
        tag: Optional[str] = None,
    ) -> SendResult:
        return self.send(
            AttachmentReply(
                attachment_type=attachment_type,
                url=url,
                messaging_type=messaging_type,
                tag=tag,
            )
        )

    def sender_action(self, action: SenderAction) -> SendResult:
        return self.send(SenderActionReply(action=action))

    def pass_thread_to_inbox(self, metadata: str = "") -> SendResult:
        """Hand the conversation over to the page inbox."""
        return self.client.pass_thread_control(self.target, self.credential, metadata=metadata)

"""Decide which kind of event a webhook record carries.

A record has one nullable slot per event kind. Normally exactly one is set;
if a malformed record has several, the first slot in `PRECEDENCE` wins.
This module is the only place that looks at those slots.
"""

from __future__ import annotations

from typing import Optional, Tuple

from .types import EventKind, EventPayload, MessagingEvent, to_seconds

PRECEDENCE: Tuple[Tuple[EventKind, str], ...] = (
    (EventKind.TEXT, "message"),
    (EventKind.DELIVERY, "delivery"),
    (EventKind.READ, "read"),
    (EventKind.POSTBACK, "postback"),
    (EventKind.OPTIN, "optin"),
    (EventKind.REFERRAL, "referral"),
    (EventKind.ACCOUNT_LINKING, "account_linking"),
)

_SLOTS = dict(PRECEDENCE)


def classify(event: MessagingEvent) -> EventKind:
    for kind, slot in PRECEDENCE:
        if getattr(event, slot) is not None:
            return kind
    return EventKind.UNKNOWN


def to_typed_event(event: MessagingEvent) -> Optional[EventPayload]:
    """Return the active payload with sender, recipient and time filled in.

    Returns None for unknown events. The record itself is left untouched;
    a copy of the payload is returned.
    """
    kind = classify(event)
    if kind is EventKind.UNKNOWN:
        return None

    payload: EventPayload = getattr(event, _SLOTS[kind])
    return payload.model_copy(
        update={
            "sender": event.sender_id,
            "recipient": event.recipient_id,
            "timestamp": to_seconds(event.timestamp),
        }
    )

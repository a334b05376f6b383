from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from .classifier import classify, to_typed_event
from .registry import HandlerRegistry
from .reply import ReplyContext
from .types import Envelope, EventKind, SendClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HandlerFailure:
    """A handler raised while processing one event."""

    kind: EventKind
    handler: str
    sender: str
    error: str


@dataclass
class DispatchReport:
    """Outcome of one pass over an envelope.

    Attributes:
        events: Event records seen across all batches.
        dispatched: Events that were classified and offered to handlers.
        unknown: Events with no recognizable payload (skipped).
        invocations: Handler calls made, including ones that raised.
        failures: One entry per handler call that raised.
    """

    events: int = 0
    dispatched: int = 0
    unknown: int = 0
    invocations: int = 0
    failures: List[HandlerFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class Dispatcher:
    """Fans the events of an envelope out to registered handlers.

    Batches and events are walked in the order received. For each known
    event a fresh `ReplyContext` targeting its sender is built, and every
    handler for the event's kind is called synchronously in registration
    order. A handler that raises is logged and recorded; the remaining
    handlers and events still run.

    The dispatcher keeps no state between calls besides its registry.
    """

    def __init__(self, registry: HandlerRegistry, credential: str, client: SendClient) -> None:
        self.registry = registry
        self.credential = credential
        self.client = client

    def dispatch(self, envelope: Envelope) -> DispatchReport:
        report = DispatchReport()

        for batch in envelope.batches:
            for record in batch.events:
                report.events += 1

                kind = classify(record)
                if kind is EventKind.UNKNOWN:
                    report.unknown += 1
                    logger.warning(
                        "Unknown action",
                        extra={"batch_id": batch.id, "event": record.model_dump(exclude_none=True)},
                    )
                    continue

                event = to_typed_event(record)
                reply = ReplyContext(target=record.sender_id, credential=self.credential, client=self.client)
                report.dispatched += 1

                for registration in self.registry.handlers_for(kind):
                    report.invocations += 1
                    try:
                        registration.handler(event, reply)
                    except Exception as exc:
                        logger.exception(
                            "Handler failed",
                            extra={"kind": kind.value, "handler": registration.name, "sender": reply.target},
                        )
                        report.failures.append(
                            HandlerFailure(
                                kind=kind,
                                handler=registration.name,
                                sender=reply.target,
                                error=repr(exc),
                            )
                        )

        logger.debug(
            "dispatch complete",
            extra={
                "events": report.events,
                "dispatched": report.dispatched,
                "unknown": report.unknown,
                "failures": len(report.failures),
            },
        )
        return report

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional, Union

from server.config import Settings, get_settings

from .adapters.graph import GraphClient
from .decoder import decode_envelope
from .dispatcher import DispatchReport, Dispatcher
from .errors import MalformedPayload, SignatureError
from .registry import HandlerRegistry
from .signature import verify_signature
from .types import SendClient

logger = logging.getLogger(__name__)

VERIFY_TOKEN_REJECTED = "Incorrect verify token."


@dataclass(frozen=True)
class Acknowledgement:
    """What the HTTP layer tells the platform about one POST."""

    ok: bool
    report: Optional[DispatchReport] = None

    @property
    def status(self) -> str:
        return "ok" if self.ok else "not ok"

    def body(self) -> dict:
        return {"status": self.status}


class WebhookEngine:
    """Receives webhook bodies for one page and dispatches their events.

    Owns the handler registry and the dispatcher. Register handlers through
    `engine.registry` during startup, then hand `process` every POST body.

    Example:
        >>> engine = WebhookEngine(access_token="PAGE_TOKEN", verify_token="s3cret")
        >>> @engine.registry.handle_message
        ... def echo(message, reply):
        ...     reply.text(message.text)
    """

    def __init__(
        self,
        access_token: str,
        verify_token: str = "",
        app_secret: Optional[str] = None,
        verify: bool = False,
        client: Optional[SendClient] = None,
    ) -> None:
        self.verify_token = verify_token
        self.app_secret = app_secret
        self.verify = verify
        self.registry = HandlerRegistry()
        self.dispatcher = Dispatcher(self.registry, access_token, client or GraphClient())

    def check_verify_token(self, token: Optional[str], challenge: Optional[str]) -> str:
        """Answer the subscription handshake sent as a GET request."""
        if self.verify_token and token == self.verify_token:
            return challenge or ""
        logger.warning("webhook verification rejected")
        return VERIFY_TOKEN_REJECTED

    def process(self, body: Union[bytes, str], signature: Optional[str] = None) -> Acknowledgement:
        """Authenticate, decode and dispatch one webhook body.

        Signature and decode failures are logged and produce a negative
        acknowledgement before any handler runs. Handler failures do not
        affect the acknowledgement.
        """
        raw = body.encode("utf-8") if isinstance(body, str) else body

        if self.verify:
            try:
                verify_signature(raw, signature, self.app_secret)
            except SignatureError as exc:
                logger.warning(
                    "could not verify request",
                    extra={"reason": type(exc).__name__, "detail": str(exc)},
                )
                return Acknowledgement(ok=False)

        try:
            envelope = decode_envelope(raw)
        except MalformedPayload as exc:
            logger.warning("could not decode request", extra={"detail": str(exc)})
            return Acknowledgement(ok=False)

        report = self.dispatcher.dispatch(envelope)
        return Acknowledgement(ok=True, report=report)


def build_engine(settings: Settings) -> WebhookEngine:
    return WebhookEngine(
        access_token=settings.page_access_token,
        verify_token=settings.verify_token,
        app_secret=settings.app_secret,
        verify=settings.should_verify,
        client=GraphClient(
            base_url=settings.graph_api_url,
            timeout=settings.graph_timeout_seconds,
        ),
    )


_engine_lock = threading.Lock()
_engine: Optional[WebhookEngine] = None


def get_engine() -> WebhookEngine:
    """Process-wide engine used by the webhook router.

    Built once under a lock, so concurrent first calls from the threadpool
    share one engine and one handler registry.
    """
    global _engine
    if _engine is None:
        with _engine_lock:
            if _engine is None:
                _engine = build_engine(get_settings())
    return _engine

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, Protocol

from .messages import OutboundMessage
from .results import SendResult

if TYPE_CHECKING:
    from pagehook.reply import ReplyContext


class SendClient(Protocol):
    """Outbound collaborator used by `ReplyContext`.

    The dispatch path never calls it; only handlers do, through the reply
    context they receive.

    Minimal example:
        >>> from pagehook.types import SendClient, OutboundMessage, SendResult
        >>> class RecordingClient(SendClient):
        ...     def __init__(self) -> None:
        ...         self.sent = []
        ...     def send(self, target, message, credential):  # type: ignore[override]
        ...         self.sent.append((target, message))
        ...         return SendResult(ok=True)
        ...     def pass_thread_control(self, target, credential, target_app_id=None, metadata=""):  # type: ignore[override]
        ...         return SendResult(ok=True)
    """

    def send(self, target: str, message: OutboundMessage, credential: str) -> SendResult:
        """Deliver `message` to `target` using the page `credential`.

        Implementations raise on platform or transport errors.
        """
        ...

    def pass_thread_control(
        self,
        target: str,
        credential: str,
        target_app_id: Optional[int] = None,
        metadata: str = "",
    ) -> SendResult:
        """Hand the conversation with `target` to another app."""
        ...


class EventHandler(Protocol):
    """Callable registered for one event kind.

    Receives the typed event payload and the reply context for its sender.
    The return value is ignored.
    """

    def __call__(self, event: Any, reply: "ReplyContext") -> Any:
        ...

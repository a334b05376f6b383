from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel


class SendResult(BaseModel):
    """Result returned by the send client after a successful call.

    Attributes:
        ok: True when the platform accepted the request.
        message_id: Platform id of the sent message, absent for sender actions.
        recipient_id: Page-scoped id the platform delivered to.
        data: Raw response body for debugging.

    Example:
        >>> from pagehook.types import SendResult
        >>> SendResult(ok=True, message_id="m_1", recipient_id="42")
    """

    ok: bool = True
    message_id: Optional[str] = None
    recipient_id: Optional[str] = None
    data: Optional[Dict[str, Any]] = None

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

import httpx

from pagehook.errors import GraphAPIError
from pagehook.types import (
    AttachmentReply,
    OutboundMessage,
    SendClient,
    SenderActionReply,
    SendResult,
    TextReply,
)

logger = logging.getLogger(__name__)

DEFAULT_GRAPH_API_URL = "https://graph.facebook.com/v11.0"

# App id of the page inbox; secondary receiver in the handover protocol.
INBOX_APP_ID = 263902037430900


class GraphClient(SendClient):
    """Send API client used behind `ReplyContext`.

    Builds the platform's JSON body from an `OutboundMessage`, posts it with
    the page access token as a query parameter and maps error bodies to
    `GraphAPIError`.
    """

    def __init__(self, base_url: Optional[str] = None, timeout: float = 15.0) -> None:
        self.base_url = (base_url or os.getenv("GRAPH_API_URL", DEFAULT_GRAPH_API_URL)).rstrip("/")
        self.timeout = timeout

    def send_endpoint(self) -> str:
        return f"{self.base_url}/me/messages"

    def thread_control_endpoint(self) -> str:
        return f"{self.base_url}/me/pass_thread_control"

    def _build_payload(self, target: str, message: OutboundMessage) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "messaging_type": message.messaging_type.value,
            "recipient": {"id": target},
        }
        if message.notification_type is not None:
            payload["notification_type"] = message.notification_type.value
        if message.tag:
            payload["tag"] = message.tag

        if isinstance(message, TextReply):
            body: Dict[str, Any] = {"text": message.text}
            if message.quick_replies:
                body["quick_replies"] = [
                    qr.model_dump(exclude_none=True) for qr in message.quick_replies
                ]
            payload["message"] = body
        elif isinstance(message, AttachmentReply):
            body = {
                "attachment": {
                    "type": message.attachment_type.value,
                    "payload": {"url": message.url, "is_reusable": message.is_reusable},
                }
            }
            if message.quick_replies:
                body["quick_replies"] = [
                    qr.model_dump(exclude_none=True) for qr in message.quick_replies
                ]
            payload["message"] = body
        elif isinstance(message, SenderActionReply):
            # Sender actions carry no messaging_type.
            del payload["messaging_type"]
            payload["sender_action"] = message.action.value
        else:
            raise ValueError(f"Unsupported outbound message: {type(message).__name__}")

        return payload

    def _post(self, url: str, payload: Dict[str, Any], credential: str) -> Dict[str, Any]:
        if not credential:
            raise RuntimeError("Missing page access token")

        with httpx.Client(timeout=self.timeout) as client:
            response = client.post(url, params={"access_token": credential}, json=payload)

        try:
            data = response.json()
        except ValueError:
            data = None

        if response.status_code == 200:
            return data if isinstance(data, dict) else {}

        if isinstance(data, dict):
            error = GraphAPIError.from_response_body(data, response.status_code)
            if error is not None:
                logger.warning(
                    "Send API error",
                    extra={"code": error.code, "fbtrace_id": error.fbtrace_id, "status": response.status_code},
                )
                raise error
        response.raise_for_status()
        return {}

    def send(self, target: str, message: OutboundMessage, credential: str) -> SendResult:  # type: ignore[override]
        """Send `message` to the page-scoped user `target`."""
        payload = self._build_payload(target, message)
        data = self._post(self.send_endpoint(), payload, credential)
        return SendResult(
            ok=True,
            message_id=data.get("message_id"),
            recipient_id=data.get("recipient_id"),
            data=data or None,
        )

    def pass_thread_control(  # type: ignore[override]
        self,
        target: str,
        credential: str,
        target_app_id: Optional[int] = None,
        metadata: str = "",
    ) -> SendResult:
        """Pass the thread with `target` to another app (the inbox by default)."""
        payload = {
            "recipient": {"id": target},
            "target_app_id": target_app_id if target_app_id is not None else INBOX_APP_ID,
            "metadata": metadata,
        }
        data = self._post(self.thread_control_endpoint(), payload, credential)
        return SendResult(ok=bool(data.get("success", True)), recipient_id=target, data=data or None)

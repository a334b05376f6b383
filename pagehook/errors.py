"""Exceptions raised while receiving webhooks and talking to the send API."""

from __future__ import annotations

from typing import Any, Dict, Optional


class WebhookError(Exception):
    """Base class for failures that reject an inbound webhook request."""


class SignatureError(WebhookError):
    """The request could not be authenticated."""


class MissingSecret(SignatureError):
    pass


class MissingHeader(SignatureError):
    pass


class MalformedHeader(SignatureError):
    pass


class UnsupportedEncoding(SignatureError):
    pass


class SignatureMismatch(SignatureError):
    pass


class MalformedPayload(WebhookError):
    """The body is not JSON, or cannot be mapped onto the envelope model."""


class GraphAPIError(Exception):
    """Error object returned by the platform's send API.

    Attributes mirror the platform's `error` object; `status_code` is the
    HTTP status of the response that carried it.
    """

    def __init__(
        self,
        message: str,
        *,
        type: Optional[str] = None,
        code: Optional[int] = None,
        error_subcode: Optional[int] = None,
        fbtrace_id: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.type = type
        self.code = code
        self.error_subcode = error_subcode
        self.fbtrace_id = fbtrace_id
        self.status_code = status_code

    @classmethod
    def from_response_body(cls, body: Dict[str, Any], status_code: int) -> Optional["GraphAPIError"]:
        """Build an error from `{"error": {...}}`, or None if there is none."""
        error = body.get("error")
        if not isinstance(error, dict):
            return None
        return cls(
            str(error.get("message", "")),
            type=error.get("type"),
            code=error.get("code"),
            error_subcode=error.get("error_subcode"),
            fbtrace_id=error.get("fbtrace_id"),
            status_code=status_code,
        )

"""Authenticate webhook bodies with the `X-Hub-Signature` header.

The platform signs the raw request body with the app secret and sends
`X-Hub-Signature: sha1=<hex digest>`. Verification must run on the exact
bytes received, before any JSON parsing.
"""

from __future__ import annotations

import hashlib
import hmac
from typing import Any, Callable, Dict, Optional

from .errors import (
    MalformedHeader,
    MissingHeader,
    MissingSecret,
    SignatureMismatch,
    UnsupportedEncoding,
)

SIGNATURE_HEADER = "X-Hub-Signature"

_DIGESTS: Dict[str, Callable[..., Any]] = {
    "sha1": hashlib.sha1,
}


def compute_signature(body: bytes, secret: str, encoding: str = "sha1") -> str:
    """Return the lowercase hex HMAC of `body` keyed with `secret`."""
    digestmod = _DIGESTS.get(encoding)
    if digestmod is None:
        raise UnsupportedEncoding(f"unsupported signature encoding: {encoding}")
    return hmac.new(secret.encode("utf-8"), body, digestmod).hexdigest()


def verify_signature(body: bytes, header: Optional[str], secret: Optional[str]) -> None:
    """Raise a `SignatureError` subclass unless `header` signs `body`.

    Checks run in a fixed order: secret configured, header present, header
    shaped `<encoding>=<digest>`, encoding supported, digest matches.
    """
    if not secret:
        raise MissingSecret("missing app secret")
    if not header:
        raise MissingHeader(f"missing {SIGNATURE_HEADER} header")

    encoding, sep, digest = header.partition("=")
    if not sep or not encoding or not digest:
        raise MalformedHeader(f"malformed {SIGNATURE_HEADER} header: {header}")

    encoding = encoding.strip().lower()
    if encoding not in _DIGESTS:
        raise UnsupportedEncoding(
            f"unknown {SIGNATURE_HEADER} header encoding, expected sha1: {encoding}"
        )

    expected = compute_signature(body, secret, encoding)
    provided = digest.strip().lower().encode("utf-8")
    if not hmac.compare_digest(expected.encode("utf-8"), provided):
        raise SignatureMismatch("invalid signature")

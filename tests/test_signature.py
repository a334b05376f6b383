from __future__ import annotations

import pytest

from pagehook.errors import (
    MalformedHeader,
    MissingHeader,
    MissingSecret,
    SignatureError,
    SignatureMismatch,
    UnsupportedEncoding,
    WebhookError,
)
from pagehook.signature import compute_signature, verify_signature
from tests.fixtures import messenger_events as fx

SECRET = "shh"
BODY = fx.encode(fx.envelope(fx.batch(fx.text_event("hi"))))


def _flip(digest: str, index: int) -> str:
    replacement = "0" if digest[index] != "0" else "1"
    return digest[:index] + replacement + digest[index + 1 :]


def test_valid_signature_passes() -> None:
    verify_signature(BODY, fx.sign(BODY, SECRET), SECRET)


def test_known_digest() -> None:
    # HMAC-SHA1("key", "The quick brown fox jumps over the lazy dog")
    body = b"The quick brown fox jumps over the lazy dog"
    assert compute_signature(body, "key") == "de7c9b85b8b78aa6bc8a7a36f70a90701c9db4d9"


def test_digest_and_encoding_are_case_insensitive() -> None:
    digest = compute_signature(BODY, SECRET)
    verify_signature(BODY, "SHA1=" + digest.upper(), SECRET)


@pytest.mark.parametrize("index", [0, 17, 39])
def test_flipped_hex_character_is_mismatch(index: int) -> None:
    digest = compute_signature(BODY, SECRET)
    with pytest.raises(SignatureMismatch):
        verify_signature(BODY, "sha1=" + _flip(digest, index), SECRET)


def test_other_body_is_mismatch() -> None:
    with pytest.raises(SignatureMismatch):
        verify_signature(BODY + b" ", fx.sign(BODY, SECRET), SECRET)


def test_wrong_secret_is_mismatch() -> None:
    with pytest.raises(SignatureMismatch):
        verify_signature(BODY, fx.sign(BODY, "other"), SECRET)


@pytest.mark.parametrize("header", [None, ""])
def test_missing_header(header) -> None:  # type: ignore[no-untyped-def]
    with pytest.raises(MissingHeader):
        verify_signature(BODY, header, SECRET)


@pytest.mark.parametrize("secret", [None, ""])
def test_missing_secret_checked_first(secret) -> None:  # type: ignore[no-untyped-def]
    with pytest.raises(MissingSecret):
        verify_signature(BODY, None, secret)


@pytest.mark.parametrize("header", ["sha1", "=abcdef", "sha1=", "deadbeef"])
def test_malformed_header(header: str) -> None:
    with pytest.raises(MalformedHeader):
        verify_signature(BODY, header, SECRET)


def test_sha256_is_unsupported() -> None:
    with pytest.raises(UnsupportedEncoding):
        verify_signature(BODY, "sha256=" + compute_signature(BODY, SECRET), SECRET)


def test_non_hex_digest_is_mismatch_not_crash() -> None:
    with pytest.raises(SignatureMismatch):
        verify_signature(BODY, "sha1=zzzzé", SECRET)


def test_failures_share_base_class() -> None:
    with pytest.raises(SignatureError):
        verify_signature(BODY, "sha1=00", SECRET)
    assert issubclass(SignatureError, WebhookError)


def test_compute_signature_rejects_unknown_encoding() -> None:
    with pytest.raises(UnsupportedEncoding):
        compute_signature(BODY, SECRET, "sha256")

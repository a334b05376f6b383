from __future__ import annotations

import json
import logging
from typing import Union

from pydantic import ValidationError

from .errors import MalformedPayload
from .types import PAGE_OBJECT, Envelope

logger = logging.getLogger(__name__)


def decode_envelope(body: Union[bytes, str]) -> Envelope:
    """Parse a raw webhook body into an `Envelope`.

    Extra keys are ignored. An `object` other than "page" is logged and
    decoding continues, since the platform may add sibling object types.

    Raises:
        MalformedPayload: invalid JSON, a non-object body, or a structure
            that does not fit the envelope model.
    """
    try:
        raw = json.loads(body)
    except (ValueError, RecursionError) as exc:
        # ValueError covers JSONDecodeError, UnicodeDecodeError and the
        # interpreter's integer digit limit.
        raise MalformedPayload(f"could not decode body: {exc}") from exc

    if not isinstance(raw, dict):
        raise MalformedPayload(f"expected a JSON object, got {type(raw).__name__}")

    try:
        envelope = Envelope.model_validate(raw)
    except ValidationError as exc:
        raise MalformedPayload(f"unexpected payload shape: {exc.error_count()} errors") from exc

    if envelope.kind != PAGE_OBJECT:
        logger.warning(
            "object is not page, undefined behaviour",
            extra={"object": envelope.kind},
        )

    return envelope

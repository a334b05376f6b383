from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from pagehook.signature import compute_signature

# 2018-11-24 21:31:51 UTC + 999ms
TIMESTAMP_MS = 1543095111999
TIMESTAMP_S = 1543095111


def event(
    *,
    sender: str = "111",
    recipient: str = "222",
    timestamp: int = TIMESTAMP_MS,
    **slots: Any,
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "sender": {"id": sender},
        "recipient": {"id": recipient},
        "timestamp": timestamp,
    }
    payload.update(slots)
    return payload


def text_event(text: str = "Hello", *, mid: str = "mid.1", seq: int = 1, **kw: Any) -> Dict[str, Any]:
    return event(message={"mid": mid, "seq": seq, "text": text}, **kw)


def delivery_event(
    *, mids: Optional[List[str]] = None, watermark: int = TIMESTAMP_MS, **kw: Any
) -> Dict[str, Any]:
    return event(delivery={"mids": mids, "watermark": watermark, "seq": 7}, **kw)


def read_event(*, watermark: int = TIMESTAMP_MS, **kw: Any) -> Dict[str, Any]:
    return event(read={"watermark": watermark, "seq": 8}, **kw)


def postback_event(payload: str = "GET_STARTED", **kw: Any) -> Dict[str, Any]:
    return event(postback={"payload": payload, "title": "Get Started"}, **kw)


def optin_event(ref: str = "PASS_THROUGH_PARAM", **kw: Any) -> Dict[str, Any]:
    return event(optin={"ref": ref}, **kw)


def referral_event(ref: str = "promo", **kw: Any) -> Dict[str, Any]:
    return event(referral={"ref": ref, "source": "SHORTLINK", "type": "OPEN_THREAD"}, **kw)


def account_linking_event(status: str = "linked", **kw: Any) -> Dict[str, Any]:
    linking: Dict[str, Any] = {"status": status}
    if status == "linked":
        linking["authorization_code"] = "auth-code"
    return event(account_linking=linking, **kw)


def batch(*events: Dict[str, Any], id: str = "PAGE_ID", time: int = TIMESTAMP_MS) -> Dict[str, Any]:
    return {"id": id, "time": time, "messaging": list(events)}


def envelope(*batches: Dict[str, Any], object: str = "page") -> Dict[str, Any]:
    return {"object": object, "entry": list(batches)}


def encode(payload: Dict[str, Any]) -> bytes:
    return json.dumps(payload).encode("utf-8")


def sign(body: bytes, secret: str) -> str:
    return "sha1=" + compute_signature(body, secret)

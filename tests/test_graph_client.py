from __future__ import annotations

import json

import httpx
import pytest
import respx

from pagehook.adapters.graph import INBOX_APP_ID, GraphClient
from pagehook.errors import GraphAPIError
from pagehook.reply import ReplyContext
from pagehook.types import (
    AttachmentType,
    MessagingType,
    NotificationType,
    QuickReply,
    SenderAction,
    SenderActionReply,
    TextReply,
)

BASE_URL = "https://graph.test/v11.0"


@pytest.fixture()
def graph() -> GraphClient:
    return GraphClient(base_url=BASE_URL)


@pytest.fixture()
def reply(graph: GraphClient) -> ReplyContext:
    return ReplyContext(target="42", credential="page-token", client=graph)


def _sent(route: respx.Route) -> dict:
    return json.loads(route.calls.last.request.content.decode())


@respx.mock
def test_text_reply_payload(reply: ReplyContext) -> None:
    route = respx.post(host="graph.test", path="/v11.0/me/messages").mock(
        return_value=httpx.Response(200, json={"recipient_id": "42", "message_id": "m_1"})
    )

    result = reply.text("Hello, World!")

    assert route.called
    request = route.calls.last.request
    assert request.url.params["access_token"] == "page-token"
    assert _sent(route) == {
        "messaging_type": "RESPONSE",
        "recipient": {"id": "42"},
        "message": {"text": "Hello, World!"},
    }
    assert result.ok is True
    assert result.message_id == "m_1"
    assert result.recipient_id == "42"


@respx.mock
def test_text_with_quick_replies_tag_and_notification(reply: ReplyContext) -> None:
    route = respx.post(host="graph.test", path="/v11.0/me/messages").mock(
        return_value=httpx.Response(200, json={"recipient_id": "42", "message_id": "m_2"})
    )

    reply.text(
        "Pick a colour",
        quick_replies=[QuickReply(title="Red", payload="RED"), QuickReply(content_type="user_email")],
        messaging_type=MessagingType.MESSAGE_TAG,
        notification_type=NotificationType.SILENT_PUSH,
        tag="ACCOUNT_UPDATE",
    )

    payload = _sent(route)
    assert payload["messaging_type"] == "MESSAGE_TAG"
    assert payload["tag"] == "ACCOUNT_UPDATE"
    assert payload["notification_type"] == "SILENT_PUSH"
    assert payload["message"]["quick_replies"] == [
        {"content_type": "text", "title": "Red", "payload": "RED"},
        {"content_type": "user_email"},
    ]


@respx.mock
def test_attachment_payload(reply: ReplyContext) -> None:
    route = respx.post(host="graph.test", path="/v11.0/me/messages").mock(
        return_value=httpx.Response(200, json={"recipient_id": "42", "message_id": "m_3"})
    )

    reply.attachment(AttachmentType.IMAGE, "https://cdn.test/cat.jpg")

    assert _sent(route)["message"] == {
        "attachment": {
            "type": "image",
            "payload": {"url": "https://cdn.test/cat.jpg", "is_reusable": False},
        }
    }


@respx.mock
def test_sender_action_has_no_messaging_type(reply: ReplyContext) -> None:
    route = respx.post(host="graph.test", path="/v11.0/me/messages").mock(
        return_value=httpx.Response(200, json={"recipient_id": "42"})
    )

    result = reply.sender_action(SenderAction.TYPING_ON)

    assert _sent(route) == {"recipient": {"id": "42"}, "sender_action": "typing_on"}
    assert result.message_id is None


@respx.mock
def test_platform_error_is_raised(graph: GraphClient) -> None:
    respx.post(host="graph.test", path="/v11.0/me/messages").mock(
        return_value=httpx.Response(
            400,
            json={
                "error": {
                    "message": "(#100) No matching user found",
                    "type": "OAuthException",
                    "code": 100,
                    "error_subcode": 2018001,
                    "fbtrace_id": "trace-1",
                }
            },
        )
    )

    with pytest.raises(GraphAPIError) as excinfo:
        graph.send("42", TextReply(text="hi"), "page-token")

    error = excinfo.value
    assert error.code == 100
    assert error.error_subcode == 2018001
    assert error.fbtrace_id == "trace-1"
    assert error.status_code == 400
    assert "No matching user" in str(error)


@respx.mock
def test_non_json_failure_raises_http_error(graph: GraphClient) -> None:
    respx.post(host="graph.test", path="/v11.0/me/messages").mock(
        return_value=httpx.Response(502, text="bad gateway")
    )
    with pytest.raises(httpx.HTTPStatusError):
        graph.send("42", SenderActionReply(action=SenderAction.MARK_SEEN), "page-token")


def test_missing_credential(graph: GraphClient) -> None:
    with pytest.raises(RuntimeError):
        graph.send("42", TextReply(text="hi"), "")


@respx.mock
def test_pass_thread_to_inbox(reply: ReplyContext) -> None:
    route = respx.post(host="graph.test", path="/v11.0/me/pass_thread_control").mock(
        return_value=httpx.Response(200, json={"success": True})
    )

    result = reply.pass_thread_to_inbox(metadata="needs a human")

    assert _sent(route) == {
        "recipient": {"id": "42"},
        "target_app_id": INBOX_APP_ID,
        "metadata": "needs a human",
    }
    assert result.ok is True


def test_base_url_from_environment() -> None:
    # conftest sets GRAPH_API_URL
    assert GraphClient().send_endpoint() == "https://graph.test/v11.0/me/messages"


def test_message_validation() -> None:
    with pytest.raises(ValueError):
        TextReply(text="x", messaging_type=MessagingType.MESSAGE_TAG)
    with pytest.raises(ValueError):
        TextReply(text="x", quick_replies=[QuickReply(title=str(i), payload=str(i)) for i in range(14)])
    with pytest.raises(ValueError):
        TextReply(text="")
    with pytest.raises(ValueError):
        QuickReply(content_type="text")
    with pytest.raises(ValueError):
        ReplyContext(target="1", credential="t", client=GraphClient(base_url=BASE_URL)).attachment(
            AttachmentType.FILE, "ftp://files.test/a.pdf"
        )

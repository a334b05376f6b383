from __future__ import annotations

import sys
from typing import Generator, List, Optional, Tuple

import pytest
from fastapi.testclient import TestClient

from main import app
from pagehook.engine import WebhookEngine, get_engine
from pagehook.types import OutboundMessage, SendClient, SendResult

APP_SECRET = "app-secret"
VERIFY_TOKEN = "verify-me"
PAGE_TOKEN = "page-token"

# Oversized integer literals only fail to parse once the interpreter caps digits.
INT_DIGIT_LIMIT = pytest.mark.skipif(sys.version_info < (3, 11), reason="no integer digit limit")


class RecordingClient(SendClient):
    """Send client that records calls instead of hitting the network."""

    def __init__(self) -> None:
        self.sent: List[Tuple[str, OutboundMessage, str]] = []
        self.handovers: List[Tuple[str, Optional[int], str]] = []

    def send(self, target: str, message: OutboundMessage, credential: str) -> SendResult:  # type: ignore[override]
        self.sent.append((target, message, credential))
        return SendResult(ok=True, recipient_id=target)

    def pass_thread_control(  # type: ignore[override]
        self, target: str, credential: str, target_app_id: Optional[int] = None, metadata: str = ""
    ) -> SendResult:
        self.handovers.append((target, target_app_id, metadata))
        return SendResult(ok=True, recipient_id=target)


@pytest.fixture(autouse=True)
def test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENV", "test")
    monkeypatch.setenv("GRAPH_API_URL", "https://graph.test/v11.0")


@pytest.fixture()
def send_client() -> RecordingClient:
    return RecordingClient()


@pytest.fixture()
def engine(send_client: RecordingClient) -> WebhookEngine:
    return WebhookEngine(
        access_token=PAGE_TOKEN,
        verify_token=VERIFY_TOKEN,
        app_secret=APP_SECRET,
        verify=True,
        client=send_client,
    )


@pytest.fixture()
def client(engine: WebhookEngine) -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_engine] = lambda: engine
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_engine, None)

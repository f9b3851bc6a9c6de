"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- A recording email sender that stands in for the SMTP adapter
- A valid registration payload
- Settings cache isolation
"""

import threading
from collections.abc import Generator

import pytest

from src.config.settings import get_settings
from src.domain.ports import (
    Accepted,
    Failed,
    OutboundMessage,
    SendOutcome,
    TransportErrorKind,
)


class RecordingEmailSender:
    """
    EmailSender test double that records every message it is given.

    Returns a fixed outcome (Accepted by default). Thread-safe so it can
    be shared by concurrent requests.
    """

    def __init__(self, outcome: SendOutcome | None = None) -> None:
        self.outcome = outcome or Accepted(message_id="abc123", transport_response="250 OK")
        self.sent: list[OutboundMessage] = []
        self.verify_calls = 0
        self._lock = threading.Lock()

    def send(self, message: OutboundMessage) -> SendOutcome:
        with self._lock:
            self.sent.append(message)
        return self.outcome

    def verify(self) -> bool:
        self.verify_calls += 1
        return True


@pytest.fixture
def valid_payload() -> dict[str, str]:
    """Registration payload with all four fields filled in."""
    return {
        "name": "Ada",
        "email": "ada@example.com",
        "phone": "555-0100",
        "program": "Data Science",
    }


@pytest.fixture
def accepting_sender() -> RecordingEmailSender:
    """Sender that always accepts with message id abc123."""
    return RecordingEmailSender()


@pytest.fixture
def failing_sender() -> RecordingEmailSender:
    """Sender that always fails with detail 'auth rejected'."""
    return RecordingEmailSender(
        Failed(error_kind=TransportErrorKind.AUTHENTICATION, detail="auth rejected")
    )


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Drop cached settings so each test sees its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sender_factory() -> type[RecordingEmailSender]:
    """Build recording senders with a custom outcome."""
    return RecordingEmailSender

"""
Integration tests for the registration flow.

Tests the full application stack (middleware, routing, domain service)
with the SMTP adapter replaced by a recording sender.
"""

import asyncio
import logging
from collections.abc import Generator
from datetime import datetime
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from src.adapters.smtp import SmtpEmailSender, TransportConfig
from src.api.dependencies import get_email_sender
from src.api.main import app


@pytest.fixture
def sender(accepting_sender):
    """Sender used by the application under test."""
    return accepting_sender


@pytest.fixture
def client(sender, monkeypatch: pytest.MonkeyPatch) -> Generator[TestClient, None, None]:
    """Create test client with the recording sender injected."""
    monkeypatch.setenv("EMAIL_USER", "school@example.com")
    app.dependency_overrides[get_email_sender] = lambda: sender
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestRegisterFlow:
    """Integration tests for POST /api/register."""

    def test_full_registration_flow(
        self,
        client: TestClient,
        sender,
        valid_payload: dict,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Valid registration sends one email and returns its id."""
        with caplog.at_level(logging.INFO):
            response = client.post("/api/register", json=valid_payload)

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Registration successful and email sent!",
            "messageId": "abc123",
        }
        assert len(sender.sent) == 1
        assert "Validation passed" in caplog.text

    def test_message_composed_from_payload(
        self, client: TestClient, sender, valid_payload: dict
    ) -> None:
        """The sent message is addressed and rendered from the payload."""
        client.post("/api/register", json=valid_payload)

        message = sender.sent[0]
        assert message.recipient == "ada@example.com"
        assert message.sender == "Tek School <school@example.com>"
        assert "Hello <strong>Ada</strong>" in message.body_html
        assert "Data Science" in message.body_html

    @pytest.mark.parametrize("field", ["name", "email", "phone", "program"])
    def test_missing_field_returns_400(
        self, client: TestClient, sender, valid_payload: dict, field: str
    ) -> None:
        """Any missing field returns 400 and nothing is sent."""
        del valid_payload[field]
        response = client.post("/api/register", json=valid_payload)

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "All fields are required"}
        assert sender.sent == []

    @pytest.mark.parametrize("field", ["name", "email", "phone", "program"])
    def test_empty_field_returns_400(
        self, client: TestClient, sender, valid_payload: dict, field: str
    ) -> None:
        """Any empty field returns 400 and nothing is sent."""
        valid_payload[field] = ""
        response = client.post("/api/register", json=valid_payload)

        assert response.status_code == 400
        assert sender.sent == []

    def test_numeric_phone_is_accepted(
        self, client: TestClient, sender, valid_payload: dict
    ) -> None:
        """A phone sent as a JSON number is present and rendered as digits."""
        valid_payload["phone"] = 5550100
        response = client.post("/api/register", json=valid_payload)

        assert response.status_code == 200
        assert "<strong>Phone:</strong> 5550100" in sender.sent[0].body_html

    def test_null_field_returns_400(
        self, client: TestClient, sender, valid_payload: dict
    ) -> None:
        """A null field returns 400 and nothing is sent."""
        valid_payload["phone"] = None
        response = client.post("/api/register", json=valid_payload)

        assert response.status_code == 400
        assert sender.sent == []


class TestSendFailureFlow:
    """Integration tests for transport failure reporting."""

    @pytest.fixture
    def sender(self, failing_sender):
        return failing_sender

    def test_failure_returns_500_with_detail(
        self, client: TestClient, valid_payload: dict
    ) -> None:
        """Transport failure detail is passed through to the caller."""
        response = client.post("/api/register", json=valid_payload)

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "message": "Failed to send email",
            "error": "auth rejected",
        }

    def test_failure_is_not_retried(
        self, client: TestClient, sender, valid_payload: dict
    ) -> None:
        """One request produces one send attempt even when it fails."""
        client.post("/api/register", json=valid_payload)
        assert len(sender.sent) == 1


class TestSmtpAdapterFlow:
    """Integration tests running the real SMTP adapter over a patched smtplib."""

    @pytest.fixture
    def sender(self) -> Generator[SmtpEmailSender, None, None]:
        with patch("src.adapters.smtp.smtp.smtplib.SMTP") as smtp_cls:
            session = smtp_cls.return_value
            session.__enter__.return_value = session
            session.has_extn.return_value = True
            session.mail.return_value = (250, b"2.1.0 OK")
            session.rcpt.return_value = (250, b"2.1.5 OK")
            session.data.return_value = (250, b"2.0.0 OK queued")
            yield SmtpEmailSender(
                TransportConfig(
                    host="smtp.example.com",
                    username="school@example.com",
                    password="app-password",
                )
            )

    def test_valid_registration_is_accepted(
        self, client: TestClient, valid_payload: dict
    ) -> None:
        """A normal address goes all the way through DATA."""
        response = client.post("/api/register", json=valid_payload)

        assert response.status_code == 200
        assert response.json()["messageId"].endswith("@example.com>")

    @pytest.mark.parametrize("email", ["a@", "<", '"', "a@[b", "a:b;c"])
    def test_unparseable_email_returns_json_500(
        self, client: TestClient, valid_payload: dict, email: str
    ) -> None:
        """Any non-empty email gets the structured failure response, never a crash."""
        valid_payload["email"] = email
        response = client.post("/api/register", json=valid_payload)

        assert response.status_code == 500
        assert response.headers["content-type"] == "application/json"
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Failed to send email"
        assert body["error"].startswith("Invalid message: ")


class TestInfoEndpoints:
    """Integration tests for health and root routes."""

    def test_health_check(self) -> None:
        """Health check returns 200 with status and an ISO timestamp."""
        client = TestClient(app)
        response = client.get("/api/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "Server is running"
        assert body["timestamp"].endswith("Z")
        parsed = datetime.fromisoformat(body["timestamp"].replace("Z", "+00:00"))
        assert parsed.utcoffset().total_seconds() == 0

    def test_health_check_without_transport(self) -> None:
        """Health check works even when no email sender was configured."""
        client = TestClient(app)
        assert client.get("/api/health").status_code == 200

    def test_root_describes_api(self) -> None:
        """Root route lists the API endpoints."""
        client = TestClient(app)
        response = client.get("/")

        assert response.status_code == 200
        assert response.json() == {
            "message": "Tek School Backend API",
            "version": "1.0.0",
            "endpoints": {
                "register": "POST /api/register",
                "health": "GET /api/health",
            },
        }

    def test_cors_allows_any_origin(self) -> None:
        """CORS preflight is accepted for any origin."""
        client = TestClient(app)
        response = client.options(
            "/api/register",
            headers={
                "Origin": "https://frontend.example.org",
                "Access-Control-Request-Method": "POST",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"


class TestLifespan:
    """Integration tests for application startup."""

    def test_startup_builds_sender_and_runs_probe(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Startup stores the SMTP sender and schedules the probe."""
        monkeypatch.delenv("EMAIL_USER", raising=False)
        monkeypatch.delenv("EMAIL_PASSWORD", raising=False)

        with (
            patch("src.api.main.SmtpEmailSender.verify", return_value=False) as verify,
            caplog.at_level(logging.INFO),
            TestClient(app) as client,
        ):
            assert client.get("/api/health").status_code == 200
            probe = app.state.smtp_probe
            assert probe is not None
            assert client.portal.call(asyncio.wait_for, probe, 5) is False
            assert app.state.email_sender.config.port == 587

        verify.assert_called_once()
        assert "EMAIL_USER: not set" in caplog.text

    def test_startup_probe_can_be_disabled(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """No probe is scheduled when disabled."""
        monkeypatch.setenv("SMTP_VERIFY_ON_STARTUP", "false")

        with (
            patch("src.api.main.SmtpEmailSender.verify") as verify,
            TestClient(app),
        ):
            assert app.state.smtp_probe is None

        verify.assert_not_called()

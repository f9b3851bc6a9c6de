"""
Shared fixtures for adversarial tests.

Provides a full-application client whose email sender records every
message, for concurrency and hostile-input tests.
"""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from src.api.dependencies import get_email_sender
from src.api.main import app

# Module-level marker for all adversarial tests
pytestmark = pytest.mark.adversarial


@pytest.fixture
def client(
    accepting_sender, monkeypatch: pytest.MonkeyPatch
) -> Generator[TestClient, None, None]:
    """Create test client with the recording sender injected."""
    monkeypatch.setenv("EMAIL_USER", "school@example.com")
    app.dependency_overrides[get_email_sender] = lambda: accepting_sender
    yield TestClient(app)
    app.dependency_overrides.clear()

"""
Shared fixtures for unit and integration tests.
"""
import pytest

from rescriber.config import Settings
from tests.helpers import STUB_BASE_URL, RecordingView, build_stub_app


@pytest.fixture
def settings():
    """Settings pointing at the stub service."""
    return Settings(base_url=STUB_BASE_URL, timeout_seconds=10.0)


@pytest.fixture
def view():
    return RecordingView()


@pytest.fixture
def stub_app():
    return build_stub_app()


@pytest.fixture
def sample_pii_texts():
    """Messages a user might type into the keyboard."""
    return {
        "email": "Contact me at john.doe@example.com",
        "phone": "call me at 555-123-4567",
        "ssn": "My SSN is 123-45-6789",
        "multiple": "Jane here: jane@example.com or (555) 987-6543",
        "no_pii": "See you at the meeting tomorrow",
    }

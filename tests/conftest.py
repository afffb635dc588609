"""
Pytest fixtures for the Brake Time Admin tests.

Every fixture talks to an in-memory backend through httpx's MockTransport.
"""
import pytest

from braketime.core.notifications import RequestNotificationSink
from braketime.shared.services.backend_client import BackendClient

from tests.fake_backend import FakeBackend
from tests.helpers import build_service


@pytest.fixture
def fake_backend():
    return FakeBackend()


@pytest.fixture
def backend(fake_backend):
    return BackendClient(
        base_url="http://backend.test/rest/v1",
        api_key="test-key",
        transport=fake_backend.transport()
    )


@pytest.fixture
def notifier():
    return RequestNotificationSink()


@pytest.fixture
def service(backend, notifier):
    """Admin orchestrator in column mode (manager stored on the store row)"""
    return build_service(backend, notifier)


@pytest.fixture
def assignment_service(backend, notifier):
    """Admin orchestrator resolving store managers through the join table"""
    return build_service(backend, notifier, mode="assignment")

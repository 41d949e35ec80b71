"""Pytest configuration and fixtures."""

import os

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG"] = "true"
os.environ["MOLDOVA_BASE_URL"] = ""
os.environ["LV_AUTH_BASE_URL"] = ""
os.environ["PRICING_JITTER"] = "true"

from remitdemo.capture.camera import CameraDevice, CameraSession, CameraUnavailableError
from remitdemo.capture.flow import FaceCaptureFlow
from remitdemo.capture.login import LoginSession
from remitdemo.identity.client import IdentityClient
from remitdemo.identity.factory import reset_proxies
from remitdemo.pricing.context import initialize_pricing
from remitdemo.sessions import SessionStore

SNAPSHOT = "data:image/jpeg;base64,c25hcHNob3Q="


class StaticImageCamera(CameraDevice):
    """Camera that always returns the same image."""

    def __init__(self, data_url, available=True):
        self.data_url = data_url
        self.available = available
        self.running = False
        self.start_count = 0

    def start(self) -> None:
        if not self.available:
            raise CameraUnavailableError("camera permission denied")
        self.running = True
        self.start_count += 1

    def read_frame(self):
        return self.data_url if self.running else None

    def stop(self) -> None:
        self.running = False


@pytest.fixture
def reference_pricing():
    """Pricing context with the unjittered reference tables."""
    return initialize_pricing(jitter=False)


@pytest.fixture
def session_store() -> SessionStore:
    return SessionStore("test-session")


@pytest.fixture(autouse=True)
def fresh_proxies():
    """Make every test resolve identity proxies from settings again."""
    reset_proxies()
    yield
    reset_proxies()


@pytest.fixture
def test_app():
    """Create test application."""
    from remitdemo.api.app import create_app

    return create_app()


@pytest_asyncio.fixture
async def client(test_app):
    """Create async test client."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def make_identity_client(handler) -> IdentityClient:
    """IdentityClient whose requests are answered by `handler`."""
    return IdentityClient(base_url="http://test", transport=httpx.MockTransport(handler))


@pytest.fixture
def make_flow(session_store):
    """Build a capture flow wired to a fake identity endpoint and camera."""

    def _make(handler, frame=SNAPSHOT, camera_available=True):
        camera = CameraSession(StaticImageCamera(frame, available=camera_available))
        return FaceCaptureFlow(
            client=make_identity_client(handler),
            camera=camera,
            login=LoginSession(session_store),
        )

    return _make

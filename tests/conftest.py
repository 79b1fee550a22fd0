# tests/conftest.py
import pathlib
import sys

import httpx
import pytest

# Add <repo> to sys.path so `import pptmaker...` works under pytest without an install
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from pptmaker.analytics import Analytics  # noqa: E402
from pptmaker.api_client import BackendClient  # noqa: E402
from pptmaker.paywall_settings import PaywallSettingsService  # noqa: E402
from pptmaker.preferences import Preferences  # noqa: E402
from pptmaker.storage import LocalStore  # noqa: E402
from pptmaker.workflow import WorkflowController  # noqa: E402
from tenacity import wait_none  # noqa: E402

from fake_backend import create_app  # noqa: E402

BASE_URL = "http://backend.test"


class RecordingSink:
    def __init__(self):
        self.events = []

    def __call__(self, event, props):
        self.events.append((event, props))

    def names(self):
        return [e for e, _ in self.events]


class StaticEntitlements:
    """Entitlement checker whose answer the test flips; counts how often it is asked."""

    def __init__(self, active=False):
        self.active = active
        self.calls = 0

    async def has_premium_access(self):
        self.calls += 1
        return self.active


@pytest.fixture
def backend():
    return create_app()


@pytest.fixture
def transport(backend):
    return httpx.ASGITransport(app=backend)


@pytest.fixture
def client(transport):
    return BackendClient(BASE_URL, timeout=5, transport=transport)


@pytest.fixture
def prefs(tmp_path):
    return Preferences(tmp_path / "prefs" / "preferences.json")


@pytest.fixture
def store(tmp_path):
    return LocalStore(tmp_path / "documents")


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def analytics(sink):
    return Analytics(sink)


@pytest.fixture
def controller(client, store, analytics):
    return WorkflowController(client, store, analytics)


@pytest.fixture
def settings_service(prefs, transport):
    return PaywallSettingsService(BASE_URL + "/settings", prefs, timeout=5,
                                  attempts=1, wait=wait_none(), transport=transport)


@pytest.fixture
def entitlements():
    return StaticEntitlements()

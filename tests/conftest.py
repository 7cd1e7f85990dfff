import httpx
import pytest
import pytest_asyncio

from jamii.core.config import Settings
from jamii.core.storage import MemoryStorage
from jamii.main import create_dashboard

from fake_api import FakeApiState, create_fake_api


@pytest.fixture
def settings():
    return Settings(API_BASE_URL="http://test", STORAGE_BACKEND="memory")


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def api_state():
    return FakeApiState()


@pytest_asyncio.fixture
async def dashboard(settings, storage, api_state):
    transport = httpx.ASGITransport(app=create_fake_api(api_state))
    dash = create_dashboard(settings=settings, storage=storage, transport=transport)
    yield dash
    await dash.close()

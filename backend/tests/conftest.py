import pytest
from fastapi.testclient import TestClient

from smartschedule.core.config import get_settings
from smartschedule.main import app


@pytest.fixture() #test client
def client():
    get_settings.cache_clear()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

import pytest
from fastapi.testclient import TestClient

from filedrop.core.config import Settings
from filedrop.main import create_app


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        UPLOAD_DIR=str(tmp_path / "uploads"),
        LOG_DIR="",
        NAMING="filename",
        TAMPER_PROBABILITY=0.0,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def store(app):
    return app.state.store

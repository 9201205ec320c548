"""Test fixtures — temporary files directory, services and FastAPI test client."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from rfs.config import Settings
from rfs.main import create_app
from rfs.services import init_services, shutdown_services


class FakeClock:
    """Manually advanced stand-in for time.monotonic."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def files_dir(tmp_path):
    """A served directory with three naturally-ordered images."""
    directory = tmp_path / "files"
    directory.mkdir()
    (directory / "img1.png").write_bytes(b"one")
    (directory / "img2.png").write_bytes(b"two")
    (directory / "img10.png").write_bytes(b"ten")
    return directory


@pytest.fixture
def test_settings(files_dir):
    return Settings(
        _env_file=None,
        files_dir=str(files_dir),
        listing_path="list",
        cache_ttl_secs=300,
    )


@pytest_asyncio.fixture
async def client(test_settings):
    """Async test client with services wired to the temporary directory."""
    init_services(test_settings)
    app = create_app()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    shutdown_services()

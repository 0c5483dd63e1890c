"""
Test configuration and fixtures.
Fakes the presign backend and the storage endpoint with httpx.MockTransport.
"""
import json
import os

# Set test environment before any imports
os.environ["ENVIRONMENT"] = "test"
os.environ["NOTIFICATION_LANGUAGE"] = "vi"

import pytest
import httpx
from typing import AsyncGenerator, Optional

from directupload.clients.presign_client import PresignClient
from directupload.clients.storage_client import StorageClient
from directupload.config import Settings
from directupload.models.upload import LocalFile
from directupload.services.notifications import Notifier
from directupload.services.upload_service import UploadOrchestrator


BACKEND_URL = "http://backend.test"
PNG_HEADER = b"\x89PNG\r\n\x1a\n"


class RecordingNotifier(Notifier):
    """Notifier that remembers every message."""

    def __init__(self):
        self.successes: list[str] = []
        self.errors: list[str] = []

    def success(self, title: str) -> None:
        self.successes.append(title)

    def error(self, title: str) -> None:
        self.errors.append(title)


class FakeUploadBackend:
    """
    In-process presign backend and storage endpoint.

    Grants are {url: https://store.test/<key>, key: key-<filename>} unless
    `grant` overrides them. Failures are injected via the *_status and
    *_error attributes.
    """

    def __init__(self):
        self.presign_calls: list[dict] = []
        self.put_calls: list[httpx.Request] = []
        self.grant: Optional[dict] = None
        self.presign_status = 200
        self.presign_error: Optional[Exception] = None
        self.put_status = 200
        self.put_error: Optional[Exception] = None
        self.fail_put_for: set[str] = set()

    def handler(self, request: httpx.Request) -> httpx.Response:
        if request.method == "POST" and request.url.path == "/admin/posts/presign":
            body = json.loads(request.content)
            self.presign_calls.append({"body": body, "headers": request.headers})
            if self.presign_error is not None:
                raise self.presign_error
            if self.presign_status != 200:
                return httpx.Response(self.presign_status, json={"detail": "rejected"})
            if self.grant is not None:
                return httpx.Response(200, json=self.grant)
            key = f"key-{body['filename']}"
            return httpx.Response(200, json={"url": f"https://store.test/{key}", "key": key})

        if request.method == "PUT":
            self.put_calls.append(request)
            if self.put_error is not None:
                raise self.put_error
            if any(name in request.url.path for name in self.fail_put_for):
                return httpx.Response(500)
            return httpx.Response(self.put_status)

        return httpx.Response(404)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from the environment and .env."""
    return Settings(
        _env_file=None,
        api_base_url=BACKEND_URL,
        access_token="test-token",
        notification_language="vi",
    )


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def backend() -> FakeUploadBackend:
    return FakeUploadBackend()


@pytest.fixture
async def presign_client(backend: FakeUploadBackend, test_settings: Settings) -> AsyncGenerator[PresignClient, None]:
    """Presign client wired to the fake backend."""
    http_client = httpx.AsyncClient(transport=backend.transport, base_url=BACKEND_URL)
    yield PresignClient(http_client=http_client, settings=test_settings)
    await http_client.aclose()


@pytest.fixture
async def storage_client(backend: FakeUploadBackend, test_settings: Settings) -> AsyncGenerator[StorageClient, None]:
    """Storage client wired to the fake storage endpoint."""
    http_client = httpx.AsyncClient(transport=backend.transport)
    yield StorageClient(http_client=http_client, settings=test_settings)
    await http_client.aclose()


@pytest.fixture
def make_orchestrator(presign_client, storage_client, notifier, test_settings):
    """Factory for orchestrators sharing the fake backend."""
    def factory(**kwargs) -> UploadOrchestrator:
        kwargs.setdefault("settings", test_settings)
        return UploadOrchestrator(
            presign_client=presign_client,
            storage_client=storage_client,
            notifier=notifier,
            **kwargs
        )
    return factory


@pytest.fixture
def orchestrator(make_orchestrator) -> UploadOrchestrator:
    return make_orchestrator()


def make_png(name: str = "cover.png", size_bytes: int = 2 * 1024 * 1024) -> LocalFile:
    """In-memory PNG-typed file of the given size."""
    content = PNG_HEADER + b"\0" * (size_bytes - len(PNG_HEADER))
    return LocalFile.from_bytes(name, content, "image/png")


@pytest.fixture
def png_file() -> LocalFile:
    """A valid 2MB PNG."""
    return make_png()


@pytest.fixture
def unreadable_png(tmp_path) -> LocalFile:
    """A PNG whose bytes vanish before they can be read."""
    path = tmp_path / "gone.png"
    path.write_bytes(PNG_HEADER)
    file = LocalFile.from_path(path)
    path.unlink()
    return file

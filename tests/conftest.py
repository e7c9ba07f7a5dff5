"""Shared fixtures: an in-memory WebDAV server and sync configurations."""

import threading
from pathlib import Path
from typing import Optional
from urllib.parse import unquote

import httpx
import pytest

from davsync.api import WebDavClient
from davsync.config import SyncConfig

BASE_URL = "http://dav.test/remote.php/dav"
BASE_PATH = "/remote.php/dav"


class InterruptedStream(httpx.SyncByteStream):
    """Response body that drops the connection after sending ``content``."""

    def __init__(self, content: bytes) -> None:
        self.content = content

    def __iter__(self):
        for start in range(0, len(self.content), 4096):
            yield self.content[start : start + 4096]
        raise httpx.ReadError("connection reset")


class FakeWebDavServer:
    """Minimal WebDAV server served through httpx.MockTransport.

    MKCOL answers 405 for existing collections and 409 when the parent is
    missing; PUT answers 409 when the parent collection is missing.
    """

    def __init__(self) -> None:
        self.files: dict[str, bytes] = {}
        self.dirs: set[str] = set()
        self.requests: list[tuple[str, str]] = []
        self.fail: dict[tuple[str, str], int] = {}
        self.interrupted: set[str] = set()
        """Paths whose GET body is cut off after the stored content"""
        self.auth_headers: list[Optional[str]] = []
        self._lock = threading.Lock()

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def client(self, **kwargs) -> WebDavClient:
        return WebDavClient(BASE_URL, transport=self.transport, **kwargs)

    def calls(self, method: str) -> list[str]:
        """Paths requested with ``method``, in order."""
        return [path for m, path in self.requests if m == method]

    def _exists_parent(self, path: str) -> bool:
        parent = path.rsplit("/", 1)[0] if "/" in path else ""
        return parent == "" or parent in self.dirs

    def handle(self, request: httpx.Request) -> httpx.Response:
        path = unquote(request.url.path)
        assert path.startswith(BASE_PATH)
        path = path[len(BASE_PATH) :].strip("/")
        method = request.method

        with self._lock:
            self.requests.append((method, path))
            self.auth_headers.append(request.headers.get("Authorization"))

            status = self.fail.get((method, path))
            if status is not None:
                return httpx.Response(status)

            if method == "HEAD":
                found = path in self.files or path in self.dirs
                return httpx.Response(200 if found else 404)
            if method == "GET":
                if path in self.files:
                    if path in self.interrupted:
                        return httpx.Response(
                            200, stream=InterruptedStream(self.files[path])
                        )
                    return httpx.Response(200, content=self.files[path])
                return httpx.Response(404)
            if method == "MKCOL":
                if path in self.dirs or path in self.files:
                    return httpx.Response(405)
                if not self._exists_parent(path):
                    return httpx.Response(409)
                self.dirs.add(path)
                return httpx.Response(201)
            if method == "PUT":
                if not self._exists_parent(path):
                    return httpx.Response(409)
                existed = path in self.files
                self.files[path] = request.read()
                return httpx.Response(204 if existed else 201)
            if method == "DELETE":
                if path in self.files:
                    del self.files[path]
                    return httpx.Response(204)
                return httpx.Response(404)
        return httpx.Response(405)


@pytest.fixture
def dav_server():
    """Provide a fresh in-memory WebDAV server."""
    return FakeWebDavServer()


@pytest.fixture
def dav_client(dav_server):
    """Provide a WebDAV client connected to the in-memory server."""
    client = dav_server.client()
    yield client
    client.close()


@pytest.fixture
def sync_folder(tmp_path) -> Path:
    """Create an empty folder to be synced."""
    folder = tmp_path / "data"
    folder.mkdir()
    return folder


@pytest.fixture
def make_config(tmp_path, sync_folder):
    """Factory for sync configurations pointing at the test folders."""

    def _make(**overrides) -> SyncConfig:
        values = {
            "webdav_url": BASE_URL,
            "folders": [str(sync_folder)],
            "hash_store_path": str(tmp_path / "state" / "hashes.yaml"),
            "remote_hash_path": "hashes.yaml",
        }
        values.update(overrides)
        return SyncConfig.from_dict(values)

    return _make

"""Shared fixtures: an in-memory upstream served through httpx.MockTransport."""

import json

import httpx
import pytest

UPSTREAM = "https://upstream.test/repo"


class FakeUpstream:
    """Serves JSON documents by path and records every request."""

    def __init__(self, files: dict | None = None):
        self.files = dict(files or {})
        self.failing: set[str] = set()
        self.requests: list[str] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix("/repo")
        self.requests.append(path)
        if path in self.failing:
            return httpx.Response(500, text="boom")
        if path not in self.files:
            return httpx.Response(404, text="not found")
        body = self.files[path]
        if isinstance(body, str):
            return httpx.Response(200, text=body)
        return httpx.Response(200, content=json.dumps(body).encode())

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def count(self, path: str) -> int:
        return self.requests.count(path)


@pytest.fixture
def upstream():
    return FakeUpstream({
        "/shader-list-testing.json": [
            {"title": "Refined Ultra", "tags": ["Ultra"], "platforms": ["ANDROID", "WINDOWS"]},
            {"title": "Basic", "tags": ["Lite"], "platforms": ["ANDROID"]},
        ],
        "/developer-list-testing.json": {"0": "a.json", "1": "b.json"},
        "/developers/a.json": {"name": "devendrn"},
        "/developers/b.json": {"name": "brsolanki"},
    })


@pytest.fixture
def repo_client(upstream):
    from services.repository import RepositoryClient
    return RepositoryClient(base_url=UPSTREAM, timeout=5, transport=upstream.transport)


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()

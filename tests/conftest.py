from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from pathlib import Path
import sys
from typing import Any, Union

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import httpx
import pytest

from vta_frontend.config import LoggingSettings, Settings
from vta_frontend.dependencies import ChatWorkspace, build_admin_workspace, build_chat_workspace

Handler = Callable[[httpx.Request], Union[httpx.Response, Awaitable[httpx.Response]]]


class FakeBackend:
    """Route table behind an ``httpx.MockTransport`` that records every request."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Handler] = {}
        self.requests: list[httpx.Request] = []

    def route(self, method: str, path: str, handler: Handler) -> None:
        self.routes[(method, path)] = handler

    def json(self, method: str, path: str, payload: Any, status_code: int = 200) -> None:
        self.route(method, path, lambda request: httpx.Response(status_code, json=payload))

    def calls(self, path: str) -> list[httpx.Request]:
        return [request for request in self.requests if request.url.path == path]

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, json={"detail": "Not found"})
        result = handler(request)
        if inspect.isawaitable(result):
            result = await result
        return result


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(logging=LoggingSettings(log_dir=tmp_path / "logs"))


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def make_chat_workspace(settings: Settings, backend: FakeBackend) -> Callable[..., ChatWorkspace]:
    """Build a chat workspace whose traffic goes to the fake backend."""

    def _factory(storage: dict[str, str] | None = None, **kwargs: Any) -> ChatWorkspace:
        return build_chat_workspace(
            storage if storage is not None else {},
            settings=settings,
            transport=backend.transport,
            **kwargs,
        )

    return _factory


@pytest.fixture
def make_admin_workspace(settings: Settings, backend: FakeBackend):
    def _factory(storage: dict[str, str] | None = None):
        return build_admin_workspace(
            storage if storage is not None else {},
            settings=settings,
            transport=backend.transport,
        )

    return _factory

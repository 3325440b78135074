"""Test configuration and fixtures"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from pytidal import Session, Tidal, TidalCredentials

FILES_DIR = Path(__file__).parent / "files"


def load_file(name: str) -> str:
    """Read a JSON fixture from tests/files"""
    return (FILES_DIR / name).read_text(encoding="utf-8")


@dataclass
class RecordedRequest:
    """A request received by the fake API"""
    method: str
    path: str
    query: dict[str, str]
    headers: Mapping[str, str]
    form: dict[str, str] = field(default_factory=dict)


class FakeTidalApi:
    """
    In-process stand-in for the TIDAL API.

    Responses are registered per test with add() / add_file(); every
    request is recorded in .requests. Unregistered routes answer 404 with
    a TIDAL-style error body.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], tuple[int, str | bytes, dict[str, str]]] = {}
        self.requests: list[RecordedRequest] = []
        app = web.Application()
        app.router.add_route("*", "/{tail:.*}", self._dispatch)
        self.server = TestServer(app)

    @property
    def url(self) -> str:
        return f"http://{self.server.host}:{self.server.port}"

    def add(
        self,
        method: str,
        path: str,
        body: str | bytes = "",
        status: int = 200,
        headers: dict[str, str] | None = None
    ) -> None:
        self.routes[(method, path)] = (status, body, headers or {})

    def add_file(self, method: str, path: str, filename: str, status: int = 200) -> None:
        self.add(method, path, load_file(filename), status=status)

    def requests_to(self, method: str, path: str) -> list[RecordedRequest]:
        return [r for r in self.requests if r.method == method and r.path == path]

    async def _dispatch(self, request: web.Request) -> web.Response:
        form = {}
        if request.method in ("POST", "PUT"):
            form = dict(await request.post())

        self.requests.append(RecordedRequest(
            method=request.method,
            path=request.path,
            query=dict(request.query),
            headers=request.headers.copy(),
            form=form,
        ))

        route = self.routes.get((request.method, request.path))
        if route is None:
            return web.json_response(
                {"status": 404, "subStatus": 2001, "userMessage": "Resource not found"},
                status=404,
            )

        status, body, headers = route
        if isinstance(body, bytes):
            # Served as-is, even when it is not valid UTF-8
            return web.Response(
                status=status,
                body=body,
                headers=headers,
                content_type="application/json",
                charset="utf-8",
            )
        return web.Response(
            status=status,
            text=body,
            headers=headers,
            content_type="application/json",
        )


@pytest_asyncio.fixture
async def fake_api():
    """Running fake TIDAL API"""
    api = FakeTidalApi()
    await api.server.start_server()
    yield api
    await api.server.close()


@pytest.fixture
def session():
    """Session of a logged-in US user"""
    return Session(user_id=1234, session_id="session-id-1", country_code="US")


@pytest.fixture
def credentials(session):
    """Credentials with a session"""
    return TidalCredentials("some_token", session)


@pytest_asyncio.fixture
async def client(fake_api, credentials):
    """Client pointed at the fake API"""
    async with Tidal(credentials, api_url=fake_api.url) as tidal:
        yield tidal

"""
TIDAL API client for pytidal.

This module provides the Tidal facade: it holds logged-in credentials, owns
the aiohttp session, and exposes the endpoint namespaces.

Request Conventions:
    Every request made through api_call():
        - goes to {api_url}{path}, unless the url is already absolute
        - carries X-Tidal-SessionId and Origin headers
        - carries the session's countryCode as a query parameter
          (TIDAL rejects requests without it)
        - sends payloads form-encoded
        - raises a ClientError subclass for any non-2xx status

Usage:
    credentials = await TidalCredentials(token).create_session(username, password)

    async with Tidal(credentials) as client:
        artist = await client.artists().get("37312")
        albums = await client.artists().albums("37312")
        found = await client.searches().find("trivium", limit=5)

Lifecycle:
    The aiohttp.ClientSession is created lazily on the first request, inside
    the running event loop, and closed by close() or on leaving the async
    context. An injected session is never closed by the client.
"""

import asyncio
import json
from dataclasses import dataclass
from typing import Any, Callable, Mapping, TypeVar

import aiohttp

from pytidal.auth import Session, TidalCredentials
from pytidal.core.config import DEFAULT_API_URL, DEFAULT_TIMEOUT, Config
from pytidal.core.exceptions import (
    ClientError,
    ConfigError,
    EtagError,
    ForbiddenError,
    NotFoundError,
    ParseError,
    RequestError,
    SessionRequiredError,
    StatusCodeError,
    UnauthorizedError,
)
from pytidal.core.logger import get_logger
from pytidal.endpoints.albums import Albums
from pytidal.endpoints.artists import Artists
from pytidal.endpoints.playlists import Playlists
from pytidal.endpoints.search import Search
from pytidal.endpoints.tracks import Tracks
from pytidal.models import Album, Artist, ItemPage, Playlist, SearchResult, Track


logger = get_logger(__name__)

T = TypeVar("T")

# The web player's origin; some endpoints refuse requests without it
ORIGIN = "http://listen.tidal.com"


@dataclass(frozen=True)
class ApiResponse:
    """
    A successful (2xx) response, fully read.

    Attributes:
        status: HTTP status code.
        headers: Response headers (case-insensitive mapping).
        text: Response body decoded as text.
    """
    status: int
    headers: Mapping[str, str]
    text: str


class Tidal:
    """
    Client facade for the TIDAL REST API.

    Attributes:
        credentials: Credentials with a populated session.
        api_url: Base URL of the API, without trailing slash.
        timeout: Total timeout per request, in seconds.
    """

    def __init__(
        self,
        credentials: TidalCredentials,
        *,
        api_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        http: aiohttp.ClientSession | None = None
    ) -> None:
        """
        Initialize the client.

        Args:
            credentials: Credentials returned by create_session().
            api_url: Base URL of the API.
            timeout: Total timeout per request, in seconds.
            http: Optional aiohttp session to use instead of an owned one.

        Raises:
            SessionRequiredError: If credentials carry no session.
        """
        if credentials.session is None:
            raise SessionRequiredError(
                "A session needs to be obtained before using Tidal. "
                "Call TidalCredentials.create_session() first."
            )

        self.credentials = credentials
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self._http = http
        self._owns_http = http is None

    def __repr__(self) -> str:
        return f"Tidal(user_id={self.user_id}, api_url={self.api_url!r})"

    async def __aenter__(self) -> "Tidal":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the owned HTTP session. Safe to call more than once."""
        if self._owns_http and self._http is not None:
            if not self._http.closed:
                await self._http.close()
                logger.debug("HTTP session closed")
            self._http = None

    def _get_http(self) -> aiohttp.ClientSession:
        if self._http is None:
            self._http = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
            self._owns_http = True
        return self._http

    # =========================================================================
    # Session information
    # =========================================================================

    @property
    def session(self) -> Session:
        # Checked in __init__, credentials are immutable
        return self.credentials.session

    @property
    def user_id(self) -> int:
        return self.session.user_id

    @property
    def country_code(self) -> str:
        return self.session.country_code

    # =========================================================================
    # Endpoint namespaces
    # =========================================================================

    def albums(self) -> Albums:
        return Albums(self)

    def artists(self) -> Artists:
        return Artists(self)

    def playlists(self) -> Playlists:
        return Playlists(self)

    def searches(self) -> Search:
        return Search(self)

    def tracks(self) -> Tracks:
        return Tracks(self)

    # =========================================================================
    # Transport
    # =========================================================================

    def _build_url(self, url: str) -> str:
        if url.startswith("http"):
            return url
        if not url.startswith("/"):
            url = "/" + url
        return f"{self.api_url}{url}"

    async def api_call(
        self,
        method: str,
        url: str,
        query: Mapping[str, str] | None = None,
        payload: Mapping[str, str] | None = None,
        etag: str | None = None
    ) -> ApiResponse:
        """
        Send one authenticated request and read the whole response.

        Args:
            method: HTTP method, e.g. "GET".
            url: Path relative to api_url, or an absolute URL.
            query: Extra query parameters, merged over countryCode.
            payload: Form fields; sent only when given.
            etag: Value for the If-None-Match header, when editing playlists.

        Returns:
            ApiResponse: Status, headers and body of the 2xx response.

        Raises:
            UnauthorizedError: On 401.
            ForbiddenError: On 403.
            NotFoundError: On 404.
            StatusCodeError: On any other non-2xx status.
            RequestError: If no response was received (network error, timeout).
            ParseError: If the body cannot be decoded as text.
        """
        full_url = self._build_url(url)

        headers = {
            "X-Tidal-SessionId": self.session.session_id,
            "Origin": ORIGIN,
        }
        if etag is not None:
            headers["If-None-Match"] = etag

        # TIDAL requires countryCode on every request
        params = {"countryCode": self.country_code}
        if query:
            params.update({key: str(value) for key, value in query.items()})

        logger.debug(f"{method} {full_url} params={params}")

        try:
            async with self._get_http().request(
                method,
                full_url,
                params=params,
                data=dict(payload) if payload is not None else None,
                headers=headers
            ) as response:
                status = response.status
                response_headers = response.headers
                try:
                    text = await response.text()
                except UnicodeDecodeError as e:
                    logger.error(f"{method} {full_url} -> {status}: body is not valid text")
                    raise ParseError(
                        f"response body could not be decoded: {e}",
                        details={"method": method, "url": full_url, "status": status},
                        status=status
                    ) from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"{method} {full_url} failed: {e!r}")
            raise RequestError(
                f"request error: {e!r}",
                details={"method": method, "url": full_url, "original_error": repr(e)}
            ) from e

        logger.debug(f"{method} {full_url} -> {status} ({len(text)} bytes)")

        if 200 <= status < 300:
            return ApiResponse(status=status, headers=response_headers, text=text)

        error = _error_from_response(status, text, method, full_url)
        logger.warning(f"{method} {full_url} -> {status}: {error.message}")
        raise error

    async def get(self, url: str, params: Mapping[str, str] | None = None) -> str:
        """GET url and return the response body."""
        response = await self.api_call("GET", url, query=params)
        return response.text

    async def post(
        self,
        url: str,
        payload: Mapping[str, str],
        etag: str | None = None
    ) -> str:
        """POST a form to url and return the response body."""
        response = await self.api_call("POST", url, payload=payload, etag=etag)
        return response.text

    async def put(self, url: str, payload: Mapping[str, str], etag: str) -> str:
        """PUT a form to url with If-None-Match and return the response body."""
        response = await self.api_call("PUT", url, payload=payload, etag=etag)
        return response.text

    async def etag(self, url: str) -> str:
        """
        Read the ETag header of a GET on url.

        Playlist edits must echo the current ETag of the playlist's items.

        Raises:
            EtagError: If the response carries no ETag header.
        """
        response = await self.api_call("GET", url)
        value = response.headers.get("ETag")
        if not value:
            raise EtagError(
                "etag header missing from response",
                details={"url": self._build_url(url)},
                status=response.status
            )
        return value

    # =========================================================================
    # Deserialization
    # =========================================================================

    @staticmethod
    def convert_result(text: str, parse: Callable[[Any], T]) -> T:
        """
        Decode a JSON body and hand it to a record parser.

        Args:
            text: Response body.
            parse: Usually a from_api classmethod, e.g. Artist.from_api.

        Raises:
            ParseError: If text is not valid JSON or parse rejects its shape.
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ParseError(
                f"json parse error: {e}",
                details={"body": text[:200]}
            ) from e
        return parse(data)

    @classmethod
    def convert_items(cls, text: str, parse_item: Callable[[Any], T]) -> list[T]:
        """Decode an {"items": [...]} body into a list of records."""
        page = cls.convert_result(text, lambda data: ItemPage.from_api(data, parse_item))
        return page.items

    # =========================================================================
    # Shortcuts kept for backward compatibility
    # =========================================================================

    def _deprecated(self, old: str, new: str) -> None:
        logger.warning(
            f"DEPRECATION WARNING!: Tidal.{old}() will be removed in the next version. "
            f"Please favor using .{new}()"
        )

    async def search(self, term: str, limit: int | None = None) -> SearchResult:
        self._deprecated("search", "searches().find")
        return await self.searches().find(term, limit)

    async def artist(self, id: str) -> Artist:
        self._deprecated("artist", "artists().get")
        return await self.artists().get(id)

    async def search_artist(self, term: str, limit: int | None = None) -> list[Artist]:
        self._deprecated("search_artist", "artists().search")
        return await self.artists().search(term, limit)

    async def album(self, id: str) -> Album:
        self._deprecated("album", "albums().get")
        return await self.albums().get(id)

    async def artist_albums(self, id: str) -> list[Album]:
        self._deprecated("artist_albums", "artists().albums")
        return await self.artists().albums(id)

    async def search_album(self, term: str, limit: int | None = None) -> list[Album]:
        self._deprecated("search_album", "albums().search")
        return await self.albums().search(term, limit)

    async def album_tracks(self, id: str) -> list[Track]:
        self._deprecated("album_tracks", "albums().tracks")
        return await self.albums().tracks(id)

    async def search_track(self, term: str, limit: int | None = None) -> list[Track]:
        self._deprecated("search_track", "tracks().search")
        return await self.tracks().search(term, limit)

    async def playlist(self, id: str) -> Playlist:
        self._deprecated("playlist", "playlists().get")
        return await self.playlists().get(id)

    async def search_playlist(self, term: str, limit: int | None = None) -> list[Playlist]:
        self._deprecated("search_playlist", "playlists().search")
        return await self.playlists().search(term, limit)

    async def user_playlists(self) -> list[Playlist]:
        self._deprecated("user_playlists", "playlists().user_playlists")
        return await self.playlists().user_playlists()

    async def playlist_tracks(self, id: str) -> list[Track]:
        self._deprecated("playlist_tracks", "playlists().tracks")
        return await self.playlists().tracks(id)

    async def playlist_add_tracks(
        self,
        id: str,
        tracks: list[Track],
        add_dupes: bool = False
    ) -> Playlist:
        self._deprecated("playlist_add_tracks", "playlists().add_tracks")
        return await self.playlists().add_tracks(id, tracks, add_dupes)

    async def create_playlist(self, title: str, description: str) -> Playlist:
        self._deprecated("create_playlist", "playlists().create")
        return await self.playlists().create(title, description)


def _error_from_response(status: int, text: str, method: str, url: str) -> ClientError:
    """
    Map a non-2xx response to the matching ClientError subclass.

    403 and 404 bodies usually carry {"status", "subStatus", "userMessage"};
    when they don't, the status alone is reported.
    """
    details = {"method": method, "url": url, "status": status}

    if status == 401:
        return UnauthorizedError(details=details)

    if status in (403, 404):
        try:
            payload = json.loads(text)
        except json.JSONDecodeError:
            payload = None
        error_cls = NotFoundError if status == 404 else ForbiddenError
        return error_cls.from_payload(status, payload, details=details)

    return StatusCodeError(f"status code: {status}", details=details, status=status)


async def create_client(
    config: Config,
    http: aiohttp.ClientSession | None = None
) -> Tidal:
    """
    Log in with a loaded configuration and return a ready client.

    Args:
        config: Result of load_config(); must include username and password.
        http: Optional aiohttp session shared by the login and the client.

    Returns:
        Tidal: A client holding the new session.

    Raises:
        ConfigError: If the account has no username or password.
        InvalidCredentialsError, RequestError, ParseError: From the login.

    Example:
        config = load_config()
        async with await create_client(config) as client:
            artist = await client.artists().get("37312")
    """
    if not config.has_user_credentials:
        raise ConfigError(
            "Username and password are required to create a session",
            details={"username_set": bool(config.account.username)}
        )

    credentials = await TidalCredentials(config.account.token).create_session(
        config.account.username,
        config.account.password,
        api_url=config.api.url,
        http=http,
        timeout=config.api.timeout
    )
    return Tidal(
        credentials,
        api_url=config.api.url,
        timeout=config.api.timeout,
        http=http
    )

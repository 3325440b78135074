"""Test the Tidal client transport, errors and shortcuts"""

import logging

import pytest

from pytidal import (
    Artist,
    ClientError,
    Config,
    ConfigError,
    EtagError,
    ForbiddenError,
    NotFoundError,
    ParseError,
    RequestError,
    SessionRequiredError,
    StatusCodeError,
    Tidal,
    TidalCredentials,
    UnauthorizedError,
    create_client,
)
from pytidal.core.config import AccountConfig, ApiConfig


class TestTidalInit:
    """Test client construction"""

    def test_requires_session(self):
        """Test a client cannot be built from credentials without a session"""
        with pytest.raises(SessionRequiredError):
            Tidal(TidalCredentials("some_token"))

    def test_session_properties(self, credentials):
        """Test the session is exposed through the client"""
        client = Tidal(credentials, api_url="https://example.com/v1/")

        assert client.user_id == 1234
        assert client.country_code == "US"
        assert client.api_url == "https://example.com/v1"

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self, credentials):
        """Test closing twice, and closing a client that never connected"""
        client = Tidal(credentials)
        await client.close()
        await client.close()


class TestApiCall:
    """Test request conventions against the fake API"""

    @pytest.mark.asyncio
    async def test_session_headers_and_country(self, client, fake_api):
        """Test every request carries the session id, origin and country"""
        fake_api.add_file("GET", "/artists/37312", "artist.json")

        await client.get("/artists/37312")

        [request] = fake_api.requests_to("GET", "/artists/37312")
        assert request.headers["X-Tidal-SessionId"] == "session-id-1"
        assert request.headers["Origin"] == "http://listen.tidal.com"
        assert request.query == {"countryCode": "US"}
        assert "If-None-Match" not in request.headers

    @pytest.mark.asyncio
    async def test_query_merged_with_country(self, client, fake_api):
        """Test caller parameters are sent next to countryCode"""
        fake_api.add("GET", "/search", "{}")

        await client.get("/search", {"query": "trivium", "limit": 5})

        [request] = fake_api.requests_to("GET", "/search")
        assert request.query == {"countryCode": "US", "query": "trivium", "limit": "5"}

    @pytest.mark.asyncio
    async def test_absolute_url_is_not_prefixed(self, client, fake_api):
        """Test a full URL is requested as given"""
        fake_api.add("GET", "/elsewhere", '{"ok": true}')

        text = await client.get(f"{fake_api.url}/elsewhere")

        assert text == '{"ok": true}'
        assert len(fake_api.requests_to("GET", "/elsewhere")) == 1

    @pytest.mark.asyncio
    async def test_post_sends_form_and_etag(self, client, fake_api):
        """Test post() form-encodes the payload and sets If-None-Match"""
        fake_api.add("POST", "/playlists/abc/items", "{}")

        await client.post("/playlists/abc/items", {"trackIds": "1,2"}, "etag-1")

        [request] = fake_api.requests_to("POST", "/playlists/abc/items")
        assert request.form == {"trackIds": "1,2"}
        assert request.headers["If-None-Match"] == "etag-1"

    @pytest.mark.asyncio
    async def test_put_sends_form_and_etag(self, client, fake_api):
        """Test put() behaves like post() with the PUT method"""
        fake_api.add("PUT", "/playlists/abc", "{}")

        await client.put("/playlists/abc", {"title": "renamed"}, "etag-2")

        [request] = fake_api.requests_to("PUT", "/playlists/abc")
        assert request.form == {"title": "renamed"}
        assert request.headers["If-None-Match"] == "etag-2"

    @pytest.mark.asyncio
    async def test_api_call_returns_status_and_headers(self, client, fake_api):
        """Test the raw response is available through api_call()"""
        fake_api.add("GET", "/ping", "pong", status=202, headers={"X-Test": "yes"})

        response = await client.api_call("GET", "/ping")

        assert response.status == 202
        assert response.headers["X-Test"] == "yes"
        assert response.text == "pong"


class TestErrors:
    """Test non-2xx statuses map to the right exception"""

    @pytest.mark.asyncio
    async def test_not_found(self, client, fake_api):
        """Test a 404 body is carried on NotFoundError"""
        # Unregistered routes answer TIDAL's 404 body
        with pytest.raises(NotFoundError) as exc_info:
            await client.get("/artists/0")

        error = exc_info.value
        assert error.status == 404
        assert error.sub_status == 2001
        assert error.user_message == "Resource not found"
        assert error.message == "404: Resource not found"

    @pytest.mark.asyncio
    async def test_not_found_without_body(self, client, fake_api):
        """Test a 404 that is not JSON still maps to NotFoundError"""
        fake_api.add("GET", "/artists/0", "not here", status=404)

        with pytest.raises(NotFoundError) as exc_info:
            await client.get("/artists/0")

        assert exc_info.value.user_message is None
        assert exc_info.value.message == "status code: 404"

    @pytest.mark.asyncio
    async def test_forbidden(self, client, fake_api):
        """Test a 403 maps to ForbiddenError"""
        fake_api.add(
            "GET",
            "/albums/1",
            '{"status": 403, "subStatus": 4005, "userMessage": "Asset is not ready for playback"}',
            status=403,
        )

        with pytest.raises(ForbiddenError) as exc_info:
            await client.get("/albums/1")

        assert exc_info.value.sub_status == 4005

    @pytest.mark.asyncio
    async def test_unauthorized(self, client, fake_api):
        """Test a 401 maps to UnauthorizedError"""
        fake_api.add("GET", "/artists/37312", "", status=401)

        with pytest.raises(UnauthorizedError) as exc_info:
            await client.get("/artists/37312")

        assert exc_info.value.status == 401

    @pytest.mark.asyncio
    async def test_other_status(self, client, fake_api):
        """Test statuses without a dedicated class"""
        fake_api.add("GET", "/artists/37312", "oops", status=500)

        with pytest.raises(StatusCodeError) as exc_info:
            await client.get("/artists/37312")

        assert exc_info.value.status == 500
        assert isinstance(exc_info.value, ClientError)

    @pytest.mark.asyncio
    async def test_invalid_json(self, client, fake_api):
        """Test an unparsable 200 body raises ParseError"""
        fake_api.add("GET", "/artists/37312", "{not json")

        with pytest.raises(ParseError):
            await client.artists().get("37312")

    @pytest.mark.asyncio
    async def test_undecodable_body(self, client, fake_api):
        """Test a body that is not valid UTF-8 raises ParseError"""
        fake_api.add("GET", "/artists/1", b'{"name": "\xff"}')

        with pytest.raises(ParseError) as exc_info:
            await client.artists().get("1")

        assert exc_info.value.status == 200
        assert exc_info.value.details["url"].endswith("/artists/1")
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)

    @pytest.mark.asyncio
    async def test_unreachable_server(self, credentials):
        """Test connection failures raise RequestError"""
        async with Tidal(credentials, api_url="http://127.0.0.1:1", timeout=5) as client:
            with pytest.raises(RequestError) as exc_info:
                await client.get("/artists/37312")

        assert exc_info.value.status is None


class TestEtag:
    """Test reading ETags"""

    @pytest.mark.asyncio
    async def test_etag(self, client, fake_api):
        fake_api.add("GET", "/playlists/abc/items", "{}", headers={"ETag": "123457689"})

        assert await client.etag("/playlists/abc/items") == "123457689"

    @pytest.mark.asyncio
    async def test_missing_etag(self, client, fake_api):
        """Test a response without ETag raises EtagError"""
        fake_api.add("GET", "/playlists/abc/items", "{}")

        with pytest.raises(EtagError):
            await client.etag("/playlists/abc/items")


class TestConvert:
    """Test body deserialization helpers"""

    def test_convert_result(self):
        artist = Tidal.convert_result('{"id": 1, "name": "x"}', Artist.from_api)

        assert artist == Artist(id=1, name="x")

    def test_convert_items(self):
        artists = Tidal.convert_items('{"items": [{"id": 1}, {"id": 2}]}', Artist.from_api)

        assert [artist.id for artist in artists] == [1, 2]

    def test_convert_items_without_items(self):
        """Test a list body without 'items' is rejected"""
        with pytest.raises(ParseError):
            Tidal.convert_items('{"id": 1}', Artist.from_api)


class TestDeprecatedShortcuts:
    """Test the old flat methods still work and warn"""

    @pytest.mark.asyncio
    async def test_artist_shortcut(self, client, fake_api, caplog):
        fake_api.add_file("GET", "/artists/37312", "artist.json")

        with caplog.at_level(logging.WARNING, logger="pytidal"):
            artist = await client.artist("37312")

        assert artist.name == "myband"
        assert "DEPRECATION WARNING!" in caplog.text
        assert "artists().get" in caplog.text

    @pytest.mark.asyncio
    async def test_search_track_shortcut(self, client, fake_api):
        fake_api.add_file("GET", "/search", "search.json")

        tracks = await client.search_track("myband")

        assert tracks[0].title == "The Sin and the Sentence"

    @pytest.mark.asyncio
    async def test_playlist_tracks_shortcut(self, client, fake_api):
        fake_api.add_file(
            "GET",
            "/playlists/7ce7df87-6d37-4465-80db-84535a4e44a4/tracks",
            "playlist_tracks.json",
        )

        tracks = await client.playlist_tracks("7ce7df87-6d37-4465-80db-84535a4e44a4")

        assert tracks[0].title == "FULL OF HEALTH"


class TestCreateClient:
    """Test logging in from a configuration"""

    @pytest.mark.asyncio
    async def test_create_client(self, fake_api):
        """Test create_client logs in and targets the configured URL"""
        fake_api.add(
            "POST",
            "/login/username",
            '{"userId": 55, "sessionId": "session-id-55", "countryCode": "DE"}',
        )
        fake_api.add_file("GET", "/artists/37312", "artist.json")
        config = Config(
            account=AccountConfig(token="some_token", username="me", password="pw"),
            api=ApiConfig(url=fake_api.url, timeout=5.0),
        )

        async with await create_client(config) as client:
            assert client.user_id == 55
            artist = await client.artists().get("37312")

        assert artist.id == 37312
        [request] = fake_api.requests_to("GET", "/artists/37312")
        assert request.query == {"countryCode": "DE"}
        assert request.headers["X-Tidal-SessionId"] == "session-id-55"

    @pytest.mark.asyncio
    async def test_create_client_without_credentials(self, fake_api):
        """Test a token-only configuration cannot log in"""
        config = Config(
            account=AccountConfig(token="some_token"),
            api=ApiConfig(url=fake_api.url),
        )

        with pytest.raises(ConfigError):
            await create_client(config)

        assert fake_api.requests == []

"""
Credentials and session handling for pytidal.

All endpoints require a user session. Getting one is a two-step affair:

    1. An Application Token, captured once from the TIDAL desktop client
       (header X-Tidal-Token). It identifies the application, not the user.
    2. A login with the user's username and password, which exchanges the
       token for a Session (user id, session id, country code).

TIDAL login response example:
    {
        "userId": 173393989,
        "sessionId": "84df94d0-9t0b-537a-a485-4404e45581ft",
        "countryCode": "DE"
    }

Usage:
    credentials = TidalCredentials(token)
    credentials = await credentials.create_session(username, password)
    client = Tidal(credentials)

Sessions are never refreshed; when one expires requests fail with
UnauthorizedError and a new login is needed.
"""

import asyncio
import json
from dataclasses import dataclass, replace
from typing import Any

import aiohttp

from pytidal.core.config import DEFAULT_API_URL, DEFAULT_TIMEOUT
from pytidal.core.exceptions import (
    InvalidCredentialsError,
    MissingTokenError,
    ParseError,
    RequestError,
)
from pytidal.core.logger import get_logger


logger = get_logger(__name__)

LOGIN_PATH = "/login/username"


@dataclass(frozen=True)
class Session:
    """
    A logged-in user session.

    Attributes:
        user_id: Numeric id of the user, used in /users/{id}/... endpoints.
        session_id: Sent as X-Tidal-SessionId on every request.
        country_code: ISO country of the account; every request must carry it
                      as the countryCode query parameter.
    """
    user_id: int
    session_id: str
    country_code: str

    @classmethod
    def from_api(cls, data: Any) -> "Session":
        """
        Build a Session from the login response body.

        Raises:
            ParseError: If data is not an object, or a key is missing or has the wrong type.
        """
        if not isinstance(data, dict):
            raise ParseError(
                "Login response is not a JSON object",
                details={"record": "Session"}
            )
        user_id = data.get("userId")
        session_id = data.get("sessionId")
        country_code = data.get("countryCode")

        # bool is an int subclass, reject it explicitly
        if (
            not isinstance(user_id, int) or isinstance(user_id, bool)
            or not isinstance(session_id, str) or not session_id
            or not isinstance(country_code, str) or not country_code
        ):
            raise ParseError(
                "Malformed login response: expected integer userId and "
                "non-empty sessionId and countryCode",
                details={
                    "record": "Session",
                    "keys": sorted(data),
                    "types": {
                        "userId": type(user_id).__name__,
                        "sessionId": type(session_id).__name__,
                        "countryCode": type(country_code).__name__,
                    },
                }
            )

        return cls(user_id=user_id, session_id=session_id, country_code=country_code)

    @classmethod
    async def fetch(
        cls,
        token: str,
        username: str,
        password: str,
        api_url: str = DEFAULT_API_URL,
        http: aiohttp.ClientSession | None = None,
        timeout: float = DEFAULT_TIMEOUT
    ) -> "Session":
        """
        Exchange the application token and user credentials for a Session.

        One POST to {api_url}/login/username?token=<token> with a form body.
        The token also goes in the X-Tidal-Token header, as the desktop
        client sends it.

        Args:
            token: Application token.
            username: TIDAL account e-mail.
            password: TIDAL account password.
            api_url: Base URL of the API.
            http: Optional aiohttp session to reuse. A temporary one is
                  created (and closed) when omitted.
            timeout: Total request timeout in seconds.

        Returns:
            Session: The new session.

        Raises:
            InvalidCredentialsError: If the API answers with a non-2xx status.
            RequestError: If the request fails (network error, timeout).
            ParseError: If the response body is not a valid session.
        """
        url = f"{api_url.rstrip('/')}{LOGIN_PATH}"
        form = {"username": username, "password": password}

        if http is None:
            async with aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=timeout)
            ) as owned_http:
                return await cls._post_login(owned_http, url, token, username, form)

        return await cls._post_login(http, url, token, username, form)

    @classmethod
    async def _post_login(
        cls,
        http: aiohttp.ClientSession,
        url: str,
        token: str,
        username: str,
        form: dict[str, str]
    ) -> "Session":
        logger.debug(f"Requesting session for {username} at {url}")

        try:
            async with http.post(
                url,
                params={"token": token},
                data=form,
                headers={"X-Tidal-Token": token}
            ) as response:
                status = response.status
                try:
                    body = await response.text()
                except UnicodeDecodeError as e:
                    logger.error(f"Login response for {username} is not valid text (status={status})")
                    raise ParseError(
                        f"Login response could not be decoded: {e}",
                        details={"url": url, "status": status},
                        status=status
                    ) from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Login request failed for {username}: {e!r}")
            raise RequestError(
                f"Login request failed: {e!r}",
                details={"url": url, "original_error": repr(e)}
            ) from e

        if not 200 <= status < 300:
            user_message = _user_message(body)
            # Never log the password or the token
            logger.error(f"Creating session failed for {username}: status={status}, message={user_message}")
            raise InvalidCredentialsError(
                f"Fetch session failed: {user_message or f'status code: {status}'}",
                details={"url": url, "status": status, "username": username},
                status=status,
                user_message=user_message
            )

        try:
            data = json.loads(body)
        except json.JSONDecodeError as e:
            raise ParseError(
                f"Login response is not valid JSON: {e}",
                details={"url": url, "status": status},
                status=status
            ) from e

        session = cls.from_api(data)
        logger.debug(f"Session created for user {session.user_id} ({session.country_code})")
        return session


def _user_message(body: str) -> str | None:
    """Extract "userMessage" from an error body, if it is JSON."""
    try:
        payload = json.loads(body)
    except json.JSONDecodeError:
        return None
    if isinstance(payload, dict):
        return payload.get("userMessage")
    return None


@dataclass(frozen=True)
class TidalCredentials:
    """
    Application token plus, once logged in, the user session.

    Instances are immutable: create_session() and with_session() return
    new credentials and leave the original untouched.

    Attributes:
        token: Application token captured from the desktop client.
        session: The user session, None until create_session() succeeds.
    """
    token: str
    session: Session | None = None

    def __repr__(self) -> str:
        return f"TidalCredentials(token='***', session={self.session!r})"

    @property
    def is_authenticated(self) -> bool:
        return self.session is not None

    def with_session(self, session: Session | None) -> "TidalCredentials":
        """Return a copy of these credentials holding session."""
        return replace(self, session=session)

    async def create_session(
        self,
        username: str,
        password: str,
        *,
        api_url: str = DEFAULT_API_URL,
        http: aiohttp.ClientSession | None = None,
        timeout: float = DEFAULT_TIMEOUT
    ) -> "TidalCredentials":
        """
        Log in and return credentials carrying the new session.

        Args:
            username: TIDAL account e-mail.
            password: TIDAL account password.
            api_url: Base URL of the API.
            http: Optional aiohttp session to reuse.
            timeout: Total request timeout in seconds.

        Returns:
            TidalCredentials: A copy of self with session populated.

        Raises:
            MissingTokenError: If no application token is set. Nothing is sent.
            InvalidCredentialsError: If the login is rejected.
            RequestError: If the request fails.
            ParseError: If the response is malformed.
        """
        if not self.token or not self.token.strip():
            raise MissingTokenError(
                "Application Token needs to be set before creating a session"
            )

        session = await Session.fetch(
            self.token,
            username,
            password,
            api_url=api_url,
            http=http,
            timeout=timeout
        )
        return self.with_session(session)

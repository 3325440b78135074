"""
Exception classes for pytidal.

Every failure the client can surface is a subclass of TidalError, so callers
can catch everything with one except clause or react to a specific kind.

Exception Hierarchy:
    TidalError (base)
        ConfigError - Configuration file or environment issues
        AuthError - Login and session issues
            MissingTokenError - No application token set
            InvalidCredentialsError - Login rejected by the API
            SessionRequiredError - Client built without a session
        ClientError - Failures of a request made by the client
            UnauthorizedError - 401, session no longer valid
            ApiError - Error payload returned by the API
                ForbiddenError - 403
                NotFoundError - 404
            StatusCodeError - Any other non-2xx status
            RequestError - Network failure or timeout
            ParseError - Malformed JSON or unexpected shape
            EtagError - ETag header missing from a response
"""

from typing import Any


class TidalError(Exception):
    """
    Base exception for all pytidal errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context (e.g., url, status).

    Example:
        try:
            artist = await client.artists().get("37312")
        except TidalError as e:
            logger.error(f"Lookup failed: {e.message}")
            if e.details:
                logger.debug(f"Details: {e.details}")
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional context about the error.
                     Common keys include:
                     - 'url': URL of the failed request
                     - 'status': HTTP status code
                     - 'original_error': The underlying exception if wrapping another error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return the error message for display."""
        return self.message


class ConfigError(TidalError):
    """
    Raised when the configuration cannot be loaded.

    Common causes:
        - Explicit config path does not exist
        - config.yaml has invalid YAML syntax
        - No application token in the file or the environment
        - Invalid field values (e.g., negative timeout)
    """
    pass


# =============================================================================
# Authentication
# =============================================================================

class AuthError(TidalError):
    """Base class for failures while establishing or using a session."""
    pass


class MissingTokenError(AuthError):
    """
    Raised when a session is requested without an application token.

    The token must be captured from the TIDAL desktop client (header
    X-Tidal-Token) before any login can happen.
    """
    pass


class InvalidCredentialsError(AuthError):
    """
    Raised when the login endpoint rejects the username/password.

    Attributes:
        status: HTTP status returned by the login endpoint.
        user_message: The API's explanation, when the body carried one.
    """

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        status: int | None = None,
        user_message: str | None = None
    ) -> None:
        super().__init__(message, details)
        self.status = status
        self.user_message = user_message


class SessionRequiredError(AuthError):
    """Raised when a client is built from credentials that have no session."""
    pass


# =============================================================================
# Requests
# =============================================================================

class ClientError(TidalError):
    """
    Base class for failures of a request made by the client.

    Attributes:
        status: HTTP status code, or None when no response was received.
    """

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        status: int | None = None
    ) -> None:
        super().__init__(message, details)
        self.status = status


class UnauthorizedError(ClientError):
    """Raised on 401: the session id was rejected."""

    def __init__(self, message: str = "request unauthorized", details: dict | None = None) -> None:
        super().__init__(message, details, status=401)


class ApiError(ClientError):
    """
    Raised when the API answers with an error payload.

    TIDAL error bodies look like:
        {"status": 404, "subStatus": 2001, "userMessage": "Artist not found"}

    Attributes:
        sub_status: TIDAL's finer-grained error code, if present.
        user_message: The message meant for the end user, if present.
    """

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        status: int | None = None,
        sub_status: int | None = None,
        user_message: str | None = None
    ) -> None:
        super().__init__(message, details, status=status)
        self.sub_status = sub_status
        self.user_message = user_message

    @classmethod
    def from_payload(
        cls,
        status: int,
        payload: Any,
        details: dict | None = None
    ) -> "ApiError":
        """
        Build an error from a decoded error body.

        Args:
            status: HTTP status of the response.
            payload: Decoded JSON body, or None when it could not be decoded.
            details: Extra context to attach.

        Returns:
            An instance of cls. When the payload has no usable message the
            HTTP status alone is reported.
        """
        sub_status = None
        user_message = None
        if isinstance(payload, dict):
            sub_status = payload.get("subStatus")
            user_message = payload.get("userMessage") or payload.get("message")

        message = f"{status}: {user_message}" if user_message else f"status code: {status}"
        return cls(
            message,
            details=details,
            status=status,
            sub_status=sub_status,
            user_message=user_message
        )


class ForbiddenError(ApiError):
    """Raised on 403, typically a resource unavailable in the session's country."""
    pass


class NotFoundError(ApiError):
    """Raised on 404: the requested resource does not exist."""
    pass


class StatusCodeError(ClientError):
    """Raised on any non-2xx status without a more specific class."""
    pass


class RequestError(ClientError):
    """
    Raised when the request never produced a response.

    Common causes:
        - DNS or connection failure
        - Timeout (aiohttp.ClientTimeout)
        - Connection reset mid-response
    """
    pass


class ParseError(ClientError):
    """
    Raised when a response body cannot be turned into the expected record.

    Common causes:
        - Body is not valid JSON
        - JSON has the wrong shape (e.g., list where an object is expected)
        - Enum value the client does not know
    """
    pass


class EtagError(ClientError):
    """Raised when a response expected to carry an ETag header does not."""
    pass

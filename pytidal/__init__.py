"""
pytidal: an unofficial asynchronous client for the TIDAL API.

Since every endpoint requires user authentication, a session must be
created with a TIDAL username and password. To do so the application needs
an Application Token.

How to get an Application Token:
    Using a debug proxy (Charles or Fiddler) open the TIDAL desktop
    application, look for requests to api.tidal.com and copy the value it
    uses in the X-Tidal-Token header.

Modules:
    auth.py     - Application token, login and session
    client.py   - Tidal facade and HTTP transport
    endpoints/  - Albums, Artists, Playlists, Search, Tracks namespaces
    models/     - Typed records deserialized from responses
    core/       - Configuration, logging, exceptions

Usage:
    import asyncio
    import os

    from pytidal import Tidal, TidalCredentials

    async def main():
        # Set the token acquired by inspecting the TIDAL desktop application
        credentials = TidalCredentials(os.environ["PYTIDAL_APP_TOKEN"])

        # Create a session using the user credentials
        credentials = await credentials.create_session(
            os.environ["PYTIDAL_USERNAME"],
            os.environ["PYTIDAL_PASSWORD"],
        )

        # Use the credentials to start the client
        async with Tidal(credentials) as client:
            artist = await client.artists().get("37312")
            print(artist)

    asyncio.run(main())

Dependencies:
    - aiohttp: Asynchronous HTTP client
    - pyyaml: Configuration file parsing
    - python-dotenv: .env loading for secrets
    - colorama: Colored console logging
"""

__version__ = "0.2.0"
__license__ = "MIT"

from pytidal.auth import Session, TidalCredentials
from pytidal.client import ApiResponse, Tidal, create_client
from pytidal.core import (
    ApiError,
    AuthError,
    ClientError,
    Config,
    ConfigError,
    EtagError,
    ForbiddenError,
    InvalidCredentialsError,
    MissingTokenError,
    NotFoundError,
    ParseError,
    RequestError,
    SessionRequiredError,
    StatusCodeError,
    TidalError,
    UnauthorizedError,
    get_logger,
    load_config,
    setup_logging,
)
from pytidal.models import (
    Album,
    Artist,
    ArtistType,
    AudioMode,
    AudioQuality,
    ItemPage,
    ModelType,
    Playlist,
    SearchResult,
    Track,
)

__all__ = [
    # Version
    "__version__",
    # Auth and client
    "TidalCredentials",
    "Session",
    "Tidal",
    "ApiResponse",
    "create_client",
    # Core
    "Config",
    "load_config",
    "setup_logging",
    "get_logger",
    # Exceptions
    "TidalError",
    "ConfigError",
    "AuthError",
    "MissingTokenError",
    "InvalidCredentialsError",
    "SessionRequiredError",
    "ClientError",
    "UnauthorizedError",
    "ApiError",
    "ForbiddenError",
    "NotFoundError",
    "StatusCodeError",
    "RequestError",
    "ParseError",
    "EtagError",
    # Models
    "Album",
    "Artist",
    "Playlist",
    "Track",
    "ItemPage",
    "SearchResult",
    "ModelType",
    "ArtistType",
    "AudioMode",
    "AudioQuality",
]

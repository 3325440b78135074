"""
Core module for pytidal.

This module provides the foundational components used throughout the client:
    - exceptions: Custom exception classes for error handling
    - config: Configuration loading from YAML and environment
    - logger: Logging setup and per-module loggers

Usage:
    from pytidal.core import (
        Config, load_config,
        setup_logging, get_logger,
        TidalError, NotFoundError
    )
"""

from pytidal.core.config import (
    DEFAULT_API_URL,
    DEFAULT_TIMEOUT,
    AccountConfig,
    ApiConfig,
    Config,
    load_config,
)
from pytidal.core.exceptions import (
    ApiError,
    AuthError,
    ClientError,
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
)
from pytidal.core.logger import get_logger, setup_logging

__all__ = [
    # Config
    "Config",
    "AccountConfig",
    "ApiConfig",
    "DEFAULT_API_URL",
    "DEFAULT_TIMEOUT",
    "load_config",
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
    # Logger
    "setup_logging",
    "get_logger",
]

"""Shared utilities for ZDC session loading.

This module provides the configuration object, the exception hierarchy and
the structured logging helpers used across all layers.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    LoaderConfig,
)
from .errors import (
    AmbiguousSessionError,
    DocumentSyntaxError,
    DuplicateFieldError,
    InvariantViolationError,
    MissingFieldError,
    NestingDepthError,
    SchemaError,
    SessionNotFoundError,
    SessionPathError,
    UnexpectedFieldError,
    UnknownDiscriminantError,
    ZdcError,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "LoaderConfig",
    "AmbiguousSessionError",
    "DocumentSyntaxError",
    "DuplicateFieldError",
    "InvariantViolationError",
    "MissingFieldError",
    "NestingDepthError",
    "SchemaError",
    "SessionNotFoundError",
    "SessionPathError",
    "UnexpectedFieldError",
    "UnknownDiscriminantError",
    "ZdcError",
    "CorrelationLogger",
    "get_logger",
]

"""Core infrastructure - errors, logging, console output."""

from genmock.core.errors import (
    ConfigError,
    ErrorCode,
    GenmockError,
    InternalError,
    OutputError,
    SourceError,
    SynthesisError,
)
from genmock.core.logging import configure_logging, get_logger

__all__ = [
    "ConfigError",
    "ErrorCode",
    "GenmockError",
    "InternalError",
    "OutputError",
    "SourceError",
    "SynthesisError",
    "configure_logging",
    "get_logger",
]

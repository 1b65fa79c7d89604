"""genmock error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Source
- 4xxx: Synthesis
- 5xxx: Output
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_INVALID_VALUE = 2001
    CONFIG_PACKAGE_UNRESOLVED = 2002

    # Source (3xxx)
    SOURCE_UNREADABLE = 3001
    SOURCE_PARSE_ERROR = 3002
    SOURCE_INTERFACE_NOT_FOUND = 3003
    SOURCE_UNSUPPORTED = 3004

    # Synthesis (4xxx)
    SYNTHESIS_METHOD_FAILED = 4001

    # Output (5xxx)
    OUTPUT_UNWRITABLE = 5001

    # Internal (9xxx)
    INTERNAL_RENDER_FAILED = 9001


@dataclass(frozen=True, slots=True)
class GenmockError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)
    exit_code: int = 2

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'SOURCE_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(GenmockError):
    """Invalid options or unresolvable package."""

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def package_unresolved(cls, package: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PACKAGE_UNRESOLVED,
            message=f"Could not access package {package}: {reason}",
            details={"package": package, "reason": reason},
        )


class SourceError(GenmockError):
    """Errors reading, parsing or searching the source package."""

    @classmethod
    def unreadable(cls, path: str, reason: str) -> "SourceError":
        return cls(
            code=ErrorCode.SOURCE_UNREADABLE,
            message=f"Failed to access {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def parse_error(cls, path: str, line: int) -> "SourceError":
        return cls(
            code=ErrorCode.SOURCE_PARSE_ERROR,
            message=f"Failed to parse {path}: syntax error near line {line}",
            details={"path": path, "line": line},
        )

    @classmethod
    def interface_not_found(cls, name: str, path: str) -> "SourceError":
        return cls(
            code=ErrorCode.SOURCE_INTERFACE_NOT_FOUND,
            message=f"Interface {name} not found in {path}",
            details={"interface": name, "path": path},
        )

    @classmethod
    def unsupported(cls, name: str, reason: str) -> "SourceError":
        return cls(
            code=ErrorCode.SOURCE_UNSUPPORTED,
            message=f"Cannot mock {name}: {reason}",
            details={"interface": name, "reason": reason},
        )


class SynthesisError(GenmockError):
    """A single method could not be synthesized."""

    @classmethod
    def method_failed(cls, method: str, reason: str) -> "SynthesisError":
        return cls(
            code=ErrorCode.SYNTHESIS_METHOD_FAILED,
            message=f"Failed to synthesize method {method}: {reason}",
            details={"method": method, "reason": reason},
        )


class InternalError(GenmockError):
    """The pipeline produced something it should not have."""

    @classmethod
    def render_failed(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_RENDER_FAILED,
            message=f"Failed to render mock: {reason}",
            details=details,
        )


class OutputError(GenmockError):
    """The generated mock could not be written."""

    @classmethod
    def unwritable(cls, path: str, reason: str) -> "OutputError":
        return cls(
            code=ErrorCode.OUTPUT_UNWRITABLE,
            message=f"Failed to open {path} for writing: {reason}",
            details={"path": path, "reason": reason},
        )

"""SaneLint error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Parse
- 4xxx: Patch
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2004

    # Parse (3xxx)
    PARSE_GRAMMAR_UNAVAILABLE = 3001
    PARSE_UNSUPPORTED_FILE = 3002
    PARSE_DECODE_ERROR = 3003

    # Patch (4xxx)
    PATCH_OVERLAP = 4001
    PATCH_OUT_OF_RANGE = 4002

    # Internal (9xxx)
    INTERNAL_ERROR = 9001
    INTERNAL_RULE_FAILURE = 9002


@dataclass(frozen=True, slots=True)
class SaneLintError(Exception):
    """Base error with structured context for reports."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'CONFIG_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(SaneLintError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class ParseError(SaneLintError):
    """Source could not be turned into a syntax tree."""

    @classmethod
    def grammar_unavailable(cls, module: str) -> "ParseError":
        return cls(
            code=ErrorCode.PARSE_GRAMMAR_UNAVAILABLE,
            message=f"Tree-sitter grammar not available: {module}",
            details={"module": module},
        )

    @classmethod
    def unsupported_file(cls, path: str) -> "ParseError":
        return cls(
            code=ErrorCode.PARSE_UNSUPPORTED_FILE,
            message=f"Not a Ruby source file: {path}",
            details={"path": path},
        )

    @classmethod
    def decode_error(cls, path: str, reason: str) -> "ParseError":
        return cls(
            code=ErrorCode.PARSE_DECODE_ERROR,
            message=f"Cannot decode {path} as UTF-8: {reason}",
            details={"path": path, "reason": reason},
        )


class PatchError(SaneLintError):
    """Edit instructions could not be applied."""

    @classmethod
    def overlap(cls, first: tuple[int, int], second: tuple[int, int]) -> "PatchError":
        return cls(
            code=ErrorCode.PATCH_OVERLAP,
            message=f"Edit at {second[0]}..{second[1]} overlaps edit at {first[0]}..{first[1]}",
            details={"first": list(first), "second": list(second)},
        )

    @classmethod
    def out_of_range(cls, position: int, size: int) -> "PatchError":
        return cls(
            code=ErrorCode.PATCH_OUT_OF_RANGE,
            message=f"Edit position {position} outside buffer of {size} bytes",
            details={"position": position, "size": size},
        )


class InternalError(SaneLintError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )

    @classmethod
    def rule_failure(cls, rule_id: str, path: str, reason: str) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_RULE_FAILURE,
            message=f"Rule {rule_id} failed on {path}: {reason}",
            details={"rule": rule_id, "path": path, "reason": reason},
        )

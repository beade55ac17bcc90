"""Error hierarchy and exit code mapping for alpaca-cli."""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    CONFIG_MISSING = "CONFIG_MISSING"
    CONFIG_INVALID = "CONFIG_INVALID"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    USAGE_ERROR = "USAGE_ERROR"
    UNKNOWN_COMMAND = "UNKNOWN_COMMAND"
    REMOTE_UNAVAILABLE = "REMOTE_UNAVAILABLE"
    REMOTE_REJECTED = "REMOTE_REJECTED"
    TIMEOUT = "TIMEOUT"
    INTERNAL_ERROR = "INTERNAL_ERROR"


EXIT_CODE_BY_ERROR: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_FAILED: 2,
    ErrorCode.USAGE_ERROR: 2,
    ErrorCode.UNKNOWN_COMMAND: 2,
    ErrorCode.CONFIG_MISSING: 3,
    ErrorCode.CONFIG_INVALID: 3,
    ErrorCode.REMOTE_UNAVAILABLE: 4,
    ErrorCode.REMOTE_REJECTED: 5,
    ErrorCode.TIMEOUT: 10,
}


class AlpacaCliError(Exception):
    """Typed exception rendered once by the top-level command runner."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        *,
        details: dict[str, Any] | None = None,
        suggestion: str | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.suggestion = suggestion

    @property
    def exit_code(self) -> int:
        return EXIT_CODE_BY_ERROR.get(self.code, 1)

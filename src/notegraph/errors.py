"""Structured errors for notegraph.

Unknown note ids are never errors: every engine query has an empty result for
them. The exceptions here cover precondition failures, bad paths and I/O.
"""

import json
from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Machine-readable error codes for --json-errors output."""

    NOTE_NOT_FOUND = "NOTE_NOT_FOUND"
    INVALID_PATH = "INVALID_PATH"
    PARSE_ERROR = "PARSE_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    SNAPSHOT_NOT_LOADED = "SNAPSHOT_NOT_LOADED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class NotegraphError(Exception):
    """Base error carrying a code and optional details."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        error: dict[str, Any] = {"code": self.code.value, "message": self.message}
        if self.details:
            error["details"] = self.details
        return {"error": error}

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


class SnapshotNotLoadedError(NotegraphError):
    """An engine query ran before any notes were installed."""

    def __init__(self) -> None:
        super().__init__(
            ErrorCode.SNAPSHOT_NOT_LOADED,
            "No note snapshot loaded; call update_notes() first",
        )


class InvalidPathError(NotegraphError):
    """A note path is malformed or escapes the vault root."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(
            ErrorCode.INVALID_PATH,
            f"Invalid path '{path}': {reason}",
            {"path": path},
        )


def format_error_json(code: ErrorCode | str, message: str, details: dict | None = None) -> str:
    """Format an error that did not originate as a NotegraphError."""
    code_value = code.value if isinstance(code, ErrorCode) else code
    error: dict[str, Any] = {"code": code_value, "message": message}
    if details:
        error["details"] = details
    return json.dumps({"error": error})

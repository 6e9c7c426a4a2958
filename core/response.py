# core/response.py

from __future__ import annotations

from enum import Enum


class ErrorCode(Enum):
    # === Validation Failures ===

    # field value is out of bounds or incorrectly formatted (e.g. gpa outside 0.0-4.0)
    INVALID_FIELD = "INVALID_FIELD"

    # === Constraint Violations ===
    DUPLICATE_ID = "DUPLICATE_ID"

    # === Not Found ===
    NOT_FOUND = "NOT_FOUND"

    # === State Restrictions ===

    # destructive operation attempted without explicit confirmation
    CONFIRMATION_REQUIRED = "CONFIRMATION_REQUIRED"

    # === Storage Faults ===
    IO_FAILURE = "IO_FAILURE"


class Response:
    """
    Standard Response object for StudentRoster manipulators and RosterPersistence operations.

    Attributes:
        success (bool): Indicates whether the operation succeeded.
        error (ErrorCode | None): Machine-readable error kind, set only on failure.
        data (dict): Optional payload, varies by operation. On failure it holds the offending
            identifier or value (e.g. "id", "gpa", "path") rather than a display message.
    """

    def __init__(
        self,
        success: bool,
        error: ErrorCode | None = None,
        data: dict | None = None,
    ):
        self._success = success
        self._error = error
        self._data = data or {}

    # === properties ===

    @property
    def success(self) -> bool:
        return self._success

    @property
    def error(self) -> ErrorCode | None:
        return self._error

    @property
    def data(self) -> dict:
        return self._data

    # === public classmethods ===

    @classmethod
    def succeed(cls, data: dict | None = None) -> Response:
        return cls(success=True, error=None, data=data)

    @classmethod
    def fail(cls, error: ErrorCode, data: dict | None = None) -> Response:
        return cls(success=False, error=error, data=data)

    # === dunder methods ===

    def __bool__(self) -> bool:
        return self._success

    def __repr__(self) -> str:
        return f"Response({self._success}, {self._error}, {self._data})"

    def __str__(self) -> str:
        if self.success:
            return "Success"
        else:
            return f"Error: {self.error.value if self.error else ''}"

from __future__ import annotations

from typing import Any, Literal

ErrorKind = Literal[
    "INVALID_ARGUMENT",
    "INDEX_OUT_OF_RANGE",
    "FORMAT_ERROR",
    "IO_ERROR",
    "ALLOCATION_FAILURE",
]

ERROR_KIND_INVALID_ARGUMENT = "INVALID_ARGUMENT"
ERROR_KIND_INDEX_OUT_OF_RANGE = "INDEX_OUT_OF_RANGE"
ERROR_KIND_FORMAT_ERROR = "FORMAT_ERROR"
ERROR_KIND_IO_ERROR = "IO_ERROR"
ERROR_KIND_ALLOCATION_FAILURE = "ALLOCATION_FAILURE"

VALID_ERROR_KINDS = {
    ERROR_KIND_INVALID_ARGUMENT,
    ERROR_KIND_INDEX_OUT_OF_RANGE,
    ERROR_KIND_FORMAT_ERROR,
    ERROR_KIND_IO_ERROR,
    ERROR_KIND_ALLOCATION_FAILURE,
}


class StringArrayError(Exception):
    """Base error: the failing operation, the error kind and a message."""

    kind: ErrorKind = "INVALID_ARGUMENT"

    def __init__(self, operation: str, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(f"{operation}: {message}")
        self.operation = operation
        self.message = message
        self.details = dict(details or {})

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "operation": self.operation,
            "message": self.message,
            "details": self.details,
        }


class InvalidArgumentError(StringArrayError, ValueError):
    kind: ErrorKind = "INVALID_ARGUMENT"


class IndexOutOfRangeError(StringArrayError, IndexError):
    kind: ErrorKind = "INDEX_OUT_OF_RANGE"


class SarrayFormatError(StringArrayError, ValueError):
    kind: ErrorKind = "FORMAT_ERROR"


class StreamError(StringArrayError, OSError):
    kind: ErrorKind = "IO_ERROR"


class AllocationError(StringArrayError, MemoryError):
    kind: ErrorKind = "ALLOCATION_FAILURE"


__all__ = [
    "ERROR_KIND_ALLOCATION_FAILURE",
    "ERROR_KIND_FORMAT_ERROR",
    "ERROR_KIND_INDEX_OUT_OF_RANGE",
    "ERROR_KIND_INVALID_ARGUMENT",
    "ERROR_KIND_IO_ERROR",
    "VALID_ERROR_KINDS",
    "AllocationError",
    "ErrorKind",
    "IndexOutOfRangeError",
    "InvalidArgumentError",
    "SarrayFormatError",
    "StreamError",
    "StringArrayError",
]

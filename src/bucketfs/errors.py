"""Structured error types for bucketfs."""

from __future__ import annotations

from enum import Enum
from typing import Any

from botocore.exceptions import ClientError

_NOT_FOUND_CODES = {"NoSuchKey", "404", "NotFound"}


class BucketFSError(Exception):
    """Base error for all bucketfs errors."""


class ErrorKind(str, Enum):
    """Closed set of failure kinds surfaced to filesystem callers."""

    NOT_FOUND = "NotFoundError"
    NOT_READABLE = "NotReadableError"
    NO_MODIFICATION_ALLOWED = "NoModificationAllowedError"
    UNSUPPORTED_OPERATION = "UnsupportedOperationError"


class FileSystemError(BucketFSError):
    """A failed filesystem operation on one logical path."""

    kind: ErrorKind = ErrorKind.NOT_READABLE

    def __init__(
        self,
        repository: str,
        path: str,
        cause: BaseException | None = None,
        message: str | None = None,
    ) -> None:
        self.repository = repository
        self.path = path
        self.cause = cause
        detail = message or (str(cause) if cause is not None else self.kind.value)
        super().__init__(f"{self.kind.value}: {repository}:{path}: {detail}")


class NotFoundError(FileSystemError):
    """Raised when the store reports the key as missing."""

    kind = ErrorKind.NOT_FOUND


class NotReadableError(FileSystemError):
    """Raised when a read-intent operation fails for any other reason."""

    kind = ErrorKind.NOT_READABLE


class NoModificationAllowedError(FileSystemError):
    """Raised when a write-intent operation fails for any other reason."""

    kind = ErrorKind.NO_MODIFICATION_ALLOWED


class UnsupportedOperationError(FileSystemError):
    """Raised locally for operations this adapter cannot perform."""

    kind = ErrorKind.UNSUPPORTED_OPERATION


class InvalidPathError(BucketFSError):
    """Raised when a logical path cannot be mapped to a store key."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid path {path!r}: {reason}")


class ConfigError(BucketFSError):
    """Raised for invalid configuration or storage URIs."""

    def __init__(self, operation: str, detail: str) -> None:
        self.operation = operation
        self.detail = detail
        super().__init__(f"Configuration error during {operation}: {detail}")


_ERROR_CLASSES: dict[ErrorKind, type[FileSystemError]] = {
    ErrorKind.NOT_FOUND: NotFoundError,
    ErrorKind.NOT_READABLE: NotReadableError,
    ErrorKind.NO_MODIFICATION_ALLOWED: NoModificationAllowedError,
    ErrorKind.UNSUPPORTED_OPERATION: UnsupportedOperationError,
}


def status_code_of(err: BaseException) -> int | None:
    """Return the HTTP status carried by a store error, if any."""
    if isinstance(err, ClientError):
        meta: dict[str, Any] = err.response.get("ResponseMetadata", {}) or {}
        status = meta.get("HTTPStatusCode")
        if isinstance(status, int):
            return status
        code = err.response.get("Error", {}).get("Code", "")
        if code in _NOT_FOUND_CODES:
            return 404
        return None
    status = getattr(err, "status_code", None)
    return status if isinstance(status, int) else None


def is_not_found(err: BaseException) -> bool:
    if isinstance(err, NotFoundError):
        return True
    if isinstance(err, ClientError):
        code = err.response.get("Error", {}).get("Code", "")
        if code in _NOT_FOUND_CODES:
            return True
    return status_code_of(err) == 404


def classify_error(err: BaseException, write: bool) -> ErrorKind:
    """Map a raw store failure onto an error kind.

    Only the status code and the write intent are consulted; message text is
    never parsed.
    """
    if isinstance(err, FileSystemError):
        return err.kind
    if is_not_found(err):
        return ErrorKind.NOT_FOUND
    if write:
        return ErrorKind.NO_MODIFICATION_ALLOWED
    return ErrorKind.NOT_READABLE


def create_error(
    kind: ErrorKind,
    *,
    repository: str,
    path: str,
    cause: BaseException | None = None,
    message: str | None = None,
) -> FileSystemError:
    """Build the typed exception for ``kind``."""
    return _ERROR_CLASSES[kind](repository, path, cause=cause, message=message)

"""openfps_store exceptions."""

from __future__ import annotations

from pathlib import Path


class StoreError(Exception):
    """Base exception for openfps_store."""


class NotFound(StoreError):
    """A required document or file is missing."""


class AlreadyExists(StoreError):
    """Rename destination is already occupied."""


class NoParent(StoreError):
    """Path has no parent directory (e.g. a filesystem root)."""


class DimensionMismatch(StoreError):
    """Pixel buffer length disagrees with width * height * 4."""

    def __init__(self, expected: int, actual: int):
        super().__init__(f"Pixel buffer length mismatch: expected {expected} bytes, got {actual}")
        self.expected = expected
        self.actual = actual


class UnsupportedFormat(StoreError):
    """Source color encoding is not one of L, LA, RGB, RGBA."""

    def __init__(self, mode: str):
        super().__init__(f"Unsupported color encoding: {mode}")
        self.mode = mode


class DecodeError(StoreError):
    """Malformed or truncated image data (or transport encoding)."""


class EncodeError(StoreError):
    """Image encoding failed."""


class IOFailure(StoreError):
    """Generic filesystem failure, wrapping the underlying OSError."""

    def __init__(self, operation: str, path: str | Path, cause: BaseException | None = None):
        message = f"Failed to {operation}: {path}"
        if cause is not None:
            message = f"{message} ({cause})"
        super().__init__(message)
        self.operation = operation
        self.path = str(path)


class UnknownCommand(StoreError):
    """No command registered under this name."""

    def __init__(self, name: str):
        super().__init__(f"Unknown command: {name}")
        self.name = name

"""Typed storage errors raised by every tracker store."""

from __future__ import annotations

from enum import Enum
from typing import ClassVar

from carrot.models.tracker import INT64_MAX, INT64_MIN


class ErrorKind(str, Enum):
    """Category of a storage failure."""

    NOT_FOUND = "not_found"
    STORAGE_IO = "storage_io"
    INVALID_DATA = "invalid_data"


class StorageError(Exception):
    """Base class for failures raised by a tracker store."""

    kind: ClassVar[ErrorKind] = ErrorKind.STORAGE_IO


class NotFoundError(StorageError):
    """The trackable targeted by a mutation or delete does not exist."""

    kind = ErrorKind.NOT_FOUND


class StorageIOError(StorageError):
    """The underlying database file or connection failed."""

    kind = ErrorKind.STORAGE_IO


class InvalidDataError(StorageError):
    """Input or a stored row that cannot be represented as a model."""

    kind = ErrorKind.INVALID_DATA


def require_int64(name: str, value: int) -> int:
    """Return *value*, or raise ``InvalidDataError`` if SQLite cannot store it."""
    if not INT64_MIN <= value <= INT64_MAX:
        raise InvalidDataError(f"{name} {value} is outside the 64-bit integer range")
    return value

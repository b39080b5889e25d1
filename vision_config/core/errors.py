"""Failure values produced by the camera config store.

These classes are exceptions so they can carry a message and chain a cause,
but the store never raises them at its callers. Internal read/write steps
return them (or a ``ReadResult`` wrapping one) and the public operations log
them and fall back.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ConfigStoreError(Exception):
    """Base class for classified store failures."""

    action = "access"

    def __init__(self, path: Path, cause: Optional[BaseException] = None) -> None:
        self.path = Path(path)
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Failed to {self.action} {self.path}{detail}")

    @property
    def kind(self) -> str:
        return type(self).__name__


class DirectoryCreateError(ConfigStoreError):
    """Camera folder could not be created and does not already exist."""

    action = "create camera config folder"


class FileCreateError(ConfigStoreError):
    """A default file could not be written during bootstrap."""

    action = "create default file"


class DeserializeError(ConfigStoreError):
    """File missing, unreadable, or holding malformed content."""

    action = "load"


class SerializeError(ConfigStoreError):
    """Payload could not be encoded or the file could not be written."""

    action = "save"


@dataclass(slots=True)
class ReadResult(Generic[T]):
    """Outcome of reading one settings file."""

    value: Optional[T] = None
    error: Optional[ConfigStoreError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


__all__ = [
    "ConfigStoreError",
    "DirectoryCreateError",
    "FileCreateError",
    "DeserializeError",
    "SerializeError",
    "ReadResult",
]

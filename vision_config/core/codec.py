"""JSON document helpers and payload codecs.

The store treats settings payloads as opaque. A codec turns a payload into
JSON-compatible primitives and back; the store only moves those primitives
between memory and disk.
"""

from __future__ import annotations

import dataclasses
import json
from typing import Any, Dict, Generic, Protocol, Type, TypeVar

T = TypeVar("T")

EXTRAS_FIELD = "extras"


class PayloadCodec(Protocol[T]):
    def encode(self, payload: T) -> Any: ...

    def decode(self, data: Any) -> T: ...


class PassthroughCodec:
    """Keeps payloads as plain dicts/lists; only objects are accepted on decode."""

    def encode(self, payload: Any) -> Any:
        return payload

    def decode(self, data: Any) -> Any:
        if not isinstance(data, dict):
            raise TypeError(f"expected a JSON object, got {type(data).__name__}")
        return data


class DataclassCodec(Generic[T]):
    """Maps a dataclass to a JSON object and back.

    Unknown keys are kept in the dataclass' ``extras`` mapping when it has
    one so newer settings written by other tools survive a load/save cycle.
    """

    def __init__(self, cls: Type[T]) -> None:
        if not dataclasses.is_dataclass(cls):
            raise TypeError(f"{cls!r} is not a dataclass")
        self.cls = cls
        self._fields = {f.name for f in dataclasses.fields(cls)}

    def encode(self, payload: T) -> Dict[str, Any]:
        if not isinstance(payload, self.cls):
            raise TypeError(f"expected {self.cls.__name__}, got {type(payload).__name__}")
        return dataclasses.asdict(payload)

    def decode(self, data: Any) -> T:
        if not isinstance(data, dict):
            raise TypeError(f"expected a JSON object, got {type(data).__name__}")
        known = {key: value for key, value in data.items() if key in self._fields}
        unknown = {key: value for key, value in data.items() if key not in self._fields}
        if unknown and EXTRAS_FIELD in self._fields:
            extras = dict(known.get(EXTRAS_FIELD) or {})
            extras.update(unknown)
            known[EXTRAS_FIELD] = extras
        return self.cls(**known)


def encode_document(data: Any) -> str:
    """Render primitives as the on-disk text: 2-space indent, trailing newline."""
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def decode_document(text: str) -> Any:
    """Parse on-disk text. Blank content is the "nothing stored" state (None)."""
    if not text.strip():
        return None
    return json.loads(text)


__all__ = [
    "PayloadCodec",
    "PassthroughCodec",
    "DataclassCodec",
    "encode_document",
    "decode_document",
]

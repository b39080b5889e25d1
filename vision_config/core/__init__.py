"""Shared plumbing: paths, codecs, failure values and logging."""

from .codec import DataclassCodec, PassthroughCodec, PayloadCodec
from .errors import (
    ConfigStoreError,
    DeserializeError,
    DirectoryCreateError,
    FileCreateError,
    ReadResult,
    SerializeError,
)
from .paths import CameraPaths, camera_paths, camera_slug, resolve_settings_root

__all__ = [
    'DataclassCodec',
    'PassthroughCodec',
    'PayloadCodec',
    'ConfigStoreError',
    'DeserializeError',
    'DirectoryCreateError',
    'FileCreateError',
    'ReadResult',
    'SerializeError',
    'CameraPaths',
    'camera_paths',
    'camera_slug',
    'resolve_settings_root',
]

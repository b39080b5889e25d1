"""Per-camera settings persistence for vision processing devices."""

from __future__ import annotations

from importlib import metadata

from .models import (
    DRIVER_MODE_NICKNAME,
    CameraSettings,
    PipelineSettings,
    make_driver_mode,
)
from .registry import CameraConfigBundle, CameraConfigRegistry
from .store import BootstrapReport, CameraConfigStore

try:
    __version__ = metadata.version("vision-config")
except metadata.PackageNotFoundError:  # pragma: no cover - local dev
    __version__ = "0.0.0"


__all__ = [
    "__version__",
    "DRIVER_MODE_NICKNAME",
    "CameraSettings",
    "PipelineSettings",
    "make_driver_mode",
    "CameraConfigBundle",
    "CameraConfigRegistry",
    "BootstrapReport",
    "CameraConfigStore",
]

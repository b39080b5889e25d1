"""Settings root resolution and per-camera path layout."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

SETTINGS_DIR_ENV = "VISION_CONFIG_SETTINGS_DIR"
DEFAULT_SETTINGS_DIR = Path.home() / ".vision_config"

CAMERAS_SUBDIR = "cameras"
CONFIG_FILENAME = "camera.json"
PIPELINES_FILENAME = "pipelines.json"
DRIVER_MODE_FILENAME = "drivermode.json"


@dataclass(frozen=True, slots=True)
class CameraPaths:
    """Resolved on-disk locations for one camera's settings."""

    folder: Path
    config: Path
    pipelines: Path
    driver_mode: Path


def resolve_settings_root(explicit: Optional[Union[str, Path]] = None) -> Path:
    """Return the settings root: explicit value, then env override, then ~/.vision_config."""
    if explicit is not None:
        return Path(explicit).expanduser()
    env_value = os.environ.get(SETTINGS_DIR_ENV)
    if env_value:
        return Path(env_value).expanduser()
    return DEFAULT_SETTINGS_DIR


def cameras_dir(settings_root: Union[str, Path]) -> Path:
    return Path(settings_root) / CAMERAS_SUBDIR


def camera_slug(name: str) -> str:
    """Folder name for a camera: spaces become underscores, nothing else changes."""
    return name.replace(" ", "_")


def camera_paths(settings_root: Union[str, Path], name: str) -> CameraPaths:
    folder = cameras_dir(settings_root) / camera_slug(name)
    return CameraPaths(
        folder=folder,
        config=folder / CONFIG_FILENAME,
        pipelines=folder / PIPELINES_FILENAME,
        driver_mode=folder / DRIVER_MODE_FILENAME,
    )


__all__ = [
    "SETTINGS_DIR_ENV",
    "DEFAULT_SETTINGS_DIR",
    "CAMERAS_SUBDIR",
    "CONFIG_FILENAME",
    "PIPELINES_FILENAME",
    "DRIVER_MODE_FILENAME",
    "CameraPaths",
    "resolve_settings_root",
    "cameras_dir",
    "camera_slug",
    "camera_paths",
]

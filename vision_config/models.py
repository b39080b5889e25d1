"""Default settings payloads for a vision camera."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, TypeVar

DRIVER_MODE_NICKNAME = "DRIVERMODE"
DEFAULT_PIPELINE_NICKNAME = "New Pipeline"

P = TypeVar("P")


@dataclass(slots=True)
class CameraSettings:
    """Device-level settings for one camera."""

    name: str
    fov: float = 60.0
    tilt: float = 0.0
    resolution_index: int = 0
    stream_divisor: int = 0
    extras: Dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class PipelineSettings:
    """One vision-processing pipeline profile."""

    nickname: str = DEFAULT_PIPELINE_NICKNAME
    exposure: float = 50.0
    brightness: float = 50.0
    gain: float = 0.0
    video_mode_index: int = 0
    is_3d: bool = False
    extras: Dict[str, Any] = field(default_factory=dict)


def make_driver_mode(factory: Callable[[], P]) -> P:
    """Build a profile with ``factory`` and force the driver-mode nickname.

    Dataclass profiles get a copy with the nickname replaced, mappings get
    the key set, anything else has the attribute assigned.
    """
    profile = factory()
    if dataclasses.is_dataclass(profile) and not isinstance(profile, type):
        return dataclasses.replace(profile, nickname=DRIVER_MODE_NICKNAME)
    if isinstance(profile, dict):
        profile["nickname"] = DRIVER_MODE_NICKNAME
        return profile
    setattr(profile, "nickname", DRIVER_MODE_NICKNAME)
    return profile


__all__ = [
    "DRIVER_MODE_NICKNAME",
    "DEFAULT_PIPELINE_NICKNAME",
    "CameraSettings",
    "PipelineSettings",
    "make_driver_mode",
]

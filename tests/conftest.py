"""Shared pytest configuration and fixtures for the vision_config test suite."""

import sys
from pathlib import Path

import pytest

# Ensure the project root is in the path for imports
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from vision_config.models import CameraSettings, PipelineSettings  # noqa: E402
from vision_config.store import CameraConfigStore  # noqa: E402


# =============================================================================
# Shared Fixtures
# =============================================================================

@pytest.fixture
def settings_root(tmp_path: Path) -> Path:
    """Empty settings root, one per test."""
    root = tmp_path / "settings"
    root.mkdir()
    return root


@pytest.fixture
def preliminary() -> CameraSettings:
    return CameraSettings(name="Camera 0", fov=68.5)


@pytest.fixture
def store(settings_root: Path, preliminary: CameraSettings) -> CameraConfigStore:
    return CameraConfigStore(settings_root, preliminary)


@pytest.fixture
def dict_store(settings_root: Path) -> CameraConfigStore:
    """Store holding plain dict payloads for config and pipelines."""
    from vision_config.core.codec import PassthroughCodec

    return CameraConfigStore(
        settings_root,
        {"name": "Camera 0", "fov": 70},
        pipeline_codec=PassthroughCodec(),
    )


@pytest.fixture
def sample_pipelines() -> list:
    return [
        PipelineSettings(nickname="Default"),
        PipelineSettings(nickname="Cargo", exposure=12.5, is_3d=True),
        PipelineSettings(nickname="Hatch", gain=4.0, extras={"contour_sort": "largest"}),
    ]

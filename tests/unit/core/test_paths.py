"""Unit tests for settings root resolution and camera path layout."""

from pathlib import Path

import pytest

from vision_config.core import paths
from vision_config.core.paths import camera_paths, camera_slug, resolve_settings_root


class TestCameraSlug:
    """Slug derivation from display names."""

    def test_spaces_become_underscores(self):
        assert camera_slug("Camera 0") == "Camera_0"

    def test_name_without_spaces_unchanged(self):
        assert camera_slug("Cam") == "Cam"

    def test_only_spaces_are_touched(self):
        assert camera_slug("USB  Cam-2 (Front)") == "USB__Cam-2_(Front)"

    def test_case_preserved(self):
        assert camera_slug("lifeCam HD") == "lifeCam_HD"

    def test_deterministic(self):
        assert camera_slug("Camera 0") == camera_slug("Camera 0")


class TestCameraPaths:
    """Per-camera file layout."""

    def test_layout(self, tmp_path):
        resolved = camera_paths(tmp_path, "Camera 0")

        assert resolved.folder == tmp_path / "cameras" / "Camera_0"
        assert resolved.config == resolved.folder / "camera.json"
        assert resolved.pipelines == resolved.folder / "pipelines.json"
        assert resolved.driver_mode == resolved.folder / "drivermode.json"

    def test_accepts_string_root(self, tmp_path):
        resolved = camera_paths(str(tmp_path), "Cam")
        assert resolved.folder == tmp_path / "cameras" / "Cam"

    def test_pure(self, tmp_path):
        camera_paths(tmp_path, "Camera 0")
        assert not (tmp_path / "cameras").exists()


class TestResolveSettingsRoot:
    """Settings root precedence."""

    def test_explicit_wins(self, tmp_path, monkeypatch):
        monkeypatch.setenv(paths.SETTINGS_DIR_ENV, str(tmp_path / "env"))
        assert resolve_settings_root(tmp_path / "explicit") == tmp_path / "explicit"

    def test_env_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv(paths.SETTINGS_DIR_ENV, str(tmp_path / "env"))
        assert resolve_settings_root() == tmp_path / "env"

    def test_env_expands_user(self, monkeypatch):
        monkeypatch.setenv(paths.SETTINGS_DIR_ENV, "~/vision")
        assert resolve_settings_root() == Path("~/vision").expanduser()

    @pytest.mark.parametrize("value", [None, ""])
    def test_default_when_unset(self, monkeypatch, value):
        if value is None:
            monkeypatch.delenv(paths.SETTINGS_DIR_ENV, raising=False)
        else:
            monkeypatch.setenv(paths.SETTINGS_DIR_ENV, value)
        assert resolve_settings_root() == paths.DEFAULT_SETTINGS_DIR

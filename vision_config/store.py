"""Self-healing, file-backed settings for a single camera.

Layout under the settings root::

    cameras/<slug>/camera.json       device settings
    cameras/<slug>/pipelines.json    ordered pipeline profiles
    cameras/<slug>/drivermode.json   the driver-mode profile

Every public operation returns a usable value. Read failures fall back to
defaults, write failures are logged and dropped, so a broken settings folder
never stops the camera from running.
"""

from __future__ import annotations

import contextlib
import dataclasses
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Generic, Iterable, List, Optional, Tuple, TypeVar, Union

from vision_config.core.codec import (
    DataclassCodec,
    PassthroughCodec,
    PayloadCodec,
    decode_document,
    encode_document,
)
from vision_config.core.errors import (
    ConfigStoreError,
    DeserializeError,
    DirectoryCreateError,
    FileCreateError,
    ReadResult,
    SerializeError,
)
from vision_config.core.logging_utils import LoggerLike, ensure_structured_logger
from vision_config.core.paths import CameraPaths, camera_paths, camera_slug
from vision_config.models import PipelineSettings, make_driver_mode

ConfigT = TypeVar("ConfigT")
PipelineT = TypeVar("PipelineT")
T = TypeVar("T")


@dataclass(slots=True)
class BootstrapReport:
    """What a call to ``ensure_layout`` created and what it could not."""

    created: List[Path] = field(default_factory=list)
    errors: List[ConfigStoreError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def _exists(path: Path) -> bool:
    try:
        return path.exists()
    except OSError:
        return False


def camera_name_of(preliminary: Any) -> Optional[str]:
    if isinstance(preliminary, dict):
        return preliminary.get("name")
    return getattr(preliminary, "name", None)


class CameraConfigStore(Generic[ConfigT, PipelineT]):
    """Durable config, pipelines and driver mode for one camera identity."""

    def __init__(
        self,
        settings_root: Union[str, Path],
        preliminary: ConfigT,
        *,
        name: Optional[str] = None,
        config_codec: Optional[PayloadCodec[ConfigT]] = None,
        pipeline_codec: Optional[PayloadCodec[PipelineT]] = None,
        pipeline_factory: Optional[Callable[[], PipelineT]] = None,
        logger: LoggerLike = None,
    ) -> None:
        identity = name if name is not None else camera_name_of(preliminary)
        if not identity or not isinstance(identity, str):
            raise ValueError("CameraConfigStore requires a non-empty camera name")
        if settings_root is None:
            raise ValueError("CameraConfigStore requires a settings root")

        self._name = identity
        self._preliminary = preliminary
        self._paths = camera_paths(settings_root, identity)

        if config_codec is None:
            if dataclasses.is_dataclass(preliminary):
                config_codec = DataclassCodec(type(preliminary))
            else:
                config_codec = PassthroughCodec()
        self._config_codec = config_codec

        if pipeline_codec is None:
            pipeline_codec = DataclassCodec(PipelineSettings)
        self._pipeline_codec = pipeline_codec
        if pipeline_factory is None:
            pipeline_factory = getattr(pipeline_codec, "cls", dict)
        self._pipeline_factory = pipeline_factory
        try:
            make_driver_mode(pipeline_factory)
        except (TypeError, AttributeError) as exc:
            raise ValueError(
                "pipeline factory must build profiles with a 'nickname' field"
            ) from exc

        component = f"CameraConfigStore.{self.slug}"
        self._logger = ensure_structured_logger(
            logger, component=component, fallback_name=component
        )

    # ------------------------------------------------------------------
    # Identity

    @property
    def name(self) -> str:
        return self._name

    @property
    def slug(self) -> str:
        return camera_slug(self._name)

    @property
    def paths(self) -> CameraPaths:
        return self._paths

    @property
    def preliminary(self) -> ConfigT:
        return self._preliminary

    def default_driver_mode(self) -> PipelineT:
        return make_driver_mode(self._pipeline_factory)

    # ------------------------------------------------------------------
    # Bootstrap

    def load(self) -> ConfigT:
        """Make sure the folder and files exist, then return the device config."""
        self.ensure_layout()
        return self.load_config()

    def ensure_layout(self) -> BootstrapReport:
        """Create whatever is missing from the camera folder; never raises."""
        report = BootstrapReport()

        folder_error = self._ensure_folder()
        if folder_error is not None:
            self._record(report, folder_error)

        self._seed(
            report,
            self._paths.config,
            lambda: encode_document(self._config_codec.encode(self._preliminary)),
        )
        # Zero bytes is the "no pipelines yet" state.
        self._seed(report, self._paths.pipelines, lambda: "")
        self._seed(
            report,
            self._paths.driver_mode,
            lambda: encode_document(self._pipeline_codec.encode(self.default_driver_mode())),
        )

        if report.created:
            self._logger.info(
                "Seeded %d default file(s) in %s", len(report.created), self._paths.folder
            )
        return report

    def _ensure_folder(self) -> Optional[DirectoryCreateError]:
        folder = self._paths.folder
        if _exists(folder):
            return None
        try:
            folder.mkdir(parents=True)
        except FileExistsError:
            return None
        except OSError as exc:
            return DirectoryCreateError(folder, exc)
        self._logger.debug("Created camera config folder %s", folder)
        return None

    def _seed(self, report: BootstrapReport, path: Path, render: Callable[[], str]) -> None:
        if _exists(path):
            return
        try:
            data = render().encode("utf-8")
        except Exception as exc:
            self._record(report, FileCreateError(path, exc))
            return
        created, error = self._create_exclusive(path, data)
        if error is not None:
            self._record(report, error)
        elif created:
            report.created.append(path)

    @staticmethod
    def _create_exclusive(path: Path, data: bytes) -> Tuple[bool, Optional[FileCreateError]]:
        opened = False
        try:
            with open(path, "xb") as fh:
                opened = True
                fh.write(data)
        except FileExistsError:
            # Someone else created it between the check and the open.
            return False, None
        except (OSError, ValueError) as exc:
            if opened:
                with contextlib.suppress(OSError):
                    path.unlink()
            return False, FileCreateError(path, exc)
        return True, None

    # ------------------------------------------------------------------
    # Load

    def load_config(self) -> ConfigT:
        result = self._read(self._paths.config, self._config_codec.decode)
        if result.ok and result.value is not None:
            return result.value
        self._warn(result.error or self._empty(self._paths.config), "using preliminary config")
        return self._preliminary

    def load_pipelines(self) -> List[PipelineT]:
        result = self._read(self._paths.pipelines, self._decode_pipelines)
        if not result.ok:
            self._warn(result.error, "starting with no pipelines")
            return []
        return list(result.value or [])

    def load_driver_mode(self) -> PipelineT:
        result = self._read(self._paths.driver_mode, self._pipeline_codec.decode)
        if result.ok and result.value is not None:
            return result.value
        self._warn(result.error or self._empty(self._paths.driver_mode), "using default driver mode")
        return self.default_driver_mode()

    def _decode_pipelines(self, data: Any) -> List[PipelineT]:
        if not isinstance(data, list):
            raise TypeError(f"expected a JSON array, got {type(data).__name__}")
        return [self._pipeline_codec.decode(item) for item in data]

    def _read(self, path: Path, decode: Callable[[Any], T]) -> ReadResult[T]:
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            return ReadResult(error=DeserializeError(path, exc))
        try:
            data = decode_document(text)
            value = decode(data) if data is not None else None
        except Exception as exc:
            return ReadResult(error=DeserializeError(path, exc))
        return ReadResult(value=value)

    @staticmethod
    def _empty(path: Path) -> DeserializeError:
        return DeserializeError(path, ValueError("file is empty"))

    # ------------------------------------------------------------------
    # Save

    def save_config(self, config: ConfigT) -> bool:
        return self._save(self._paths.config, lambda: self._config_codec.encode(config))

    def save_pipelines(self, pipelines: Iterable[PipelineT]) -> bool:
        return self._save(
            self._paths.pipelines,
            lambda: [self._pipeline_codec.encode(profile) for profile in pipelines],
        )

    def save_driver_mode(self, profile: PipelineT) -> bool:
        return self._save(self._paths.driver_mode, lambda: self._pipeline_codec.encode(profile))

    def _save(self, path: Path, encode: Callable[[], Any]) -> bool:
        error = self._write(path, encode)
        if error is not None:
            self._warn(error, "keeping in-memory settings")
            return False
        self._logger.debug("Saved %s", path)
        return True

    def _write(self, path: Path, encode: Callable[[], Any]) -> Optional[SerializeError]:
        try:
            data = encode_document(encode()).encode("utf-8")
        except Exception as exc:
            return SerializeError(path, exc)

        tmp_path: Optional[Path] = None
        try:
            with tempfile.NamedTemporaryFile(
                "wb",
                dir=str(path.parent),
                prefix=f".{path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_path = Path(tmp.name)
                tmp.write(data)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_path, path)
            tmp_path = None
        except (OSError, ValueError) as exc:
            return SerializeError(path, exc)
        finally:
            if tmp_path is not None:
                with contextlib.suppress(OSError):
                    tmp_path.unlink()
        return None

    # ------------------------------------------------------------------
    # Logging

    def _record(self, report: BootstrapReport, error: ConfigStoreError) -> None:
        report.errors.append(error)
        self._warn(error, "continuing")

    def _warn(self, error: ConfigStoreError, outcome: str) -> None:
        self._logger.classified(error, outcome)


__all__ = ["BootstrapReport", "CameraConfigStore", "camera_name_of"]

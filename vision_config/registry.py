"""Registry that owns the settings root and hands out per-camera stores."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Generic, Iterable, List, Optional, TypeVar, Union

from vision_config.core.logging_utils import LoggerLike, ensure_structured_logger
from vision_config.core.paths import cameras_dir, camera_slug, resolve_settings_root
from vision_config.store import CameraConfigStore, camera_name_of

ConfigT = TypeVar("ConfigT")
PipelineT = TypeVar("PipelineT")


@dataclass(slots=True)
class CameraConfigBundle(Generic[ConfigT, PipelineT]):
    """Everything persisted for one camera, as loaded into memory."""

    config: ConfigT
    pipelines: List[PipelineT]
    driver_mode: PipelineT


class CameraConfigRegistry:
    """Owns the settings root and keeps one store per camera slug.

    Usage:
        registry = CameraConfigRegistry()
        bundle = registry.load_camera(CameraSettings(name="Camera 0"))
        bundle.pipelines.append(PipelineSettings(nickname="Cargo"))
        registry.save_camera("Camera 0", bundle)
    """

    def __init__(
        self,
        settings_root: Optional[Union[str, Path]] = None,
        *,
        logger: LoggerLike = None,
        **store_options: Any,
    ) -> None:
        self._root = resolve_settings_root(settings_root)
        self._logger = ensure_structured_logger(logger, fallback_name="CameraConfigRegistry")
        self._store_options = store_options
        self._stores: Dict[str, CameraConfigStore] = {}

    @property
    def settings_root(self) -> Path:
        return self._root

    def store_for(self, preliminary: Any, *, name: Optional[str] = None) -> CameraConfigStore:
        """Return the cached store for this camera, creating it on first use."""
        identity = name if name is not None else camera_name_of(preliminary)
        if not identity:
            raise ValueError("Camera name is required to resolve a config store")
        key = camera_slug(identity)
        store = self._stores.get(key)
        if store is None:
            store = CameraConfigStore(
                self._root,
                preliminary,
                name=identity,
                logger=self._logger.logger.getChild(key),
                **self._store_options,
            )
            self._stores[key] = store
            self._logger.debug("Registered config store for %s", key)
        return store

    def known_cameras(self) -> List[str]:
        """Slugs of every camera folder currently under the settings root."""
        folder = cameras_dir(self._root)
        try:
            return sorted(entry.name for entry in folder.iterdir() if entry.is_dir())
        except OSError:
            return []

    def load_camera(self, preliminary: Any, *, name: Optional[str] = None) -> CameraConfigBundle:
        store = self.store_for(preliminary, name=name)
        config = store.load()
        bundle = CameraConfigBundle(
            config=config,
            pipelines=store.load_pipelines(),
            driver_mode=store.load_driver_mode(),
        )
        self._logger.info(
            "Loaded settings for %s (%d pipeline(s))", store.slug, len(bundle.pipelines)
        )
        return bundle

    def save_camera(self, name: str, bundle: CameraConfigBundle) -> bool:
        """Persist all three parts; True only when every write succeeded."""
        store = self.store_for(bundle.config, name=name)
        results = [
            store.save_config(bundle.config),
            store.save_pipelines(bundle.pipelines),
            store.save_driver_mode(bundle.driver_mode),
        ]
        return all(results)

    async def load_all_async(self, preliminaries: Iterable[Any]) -> Dict[str, CameraConfigBundle]:
        """Load several cameras at once, each in a worker thread."""
        stores: Dict[str, CameraConfigStore] = {}
        for preliminary in preliminaries:
            store = self.store_for(preliminary)
            stores.setdefault(store.slug, store)
        bundles = await asyncio.gather(
            *(
                asyncio.to_thread(self.load_camera, store.preliminary, name=store.name)
                for store in stores.values()
            )
        )
        return dict(zip(stores.keys(), bundles))


__all__ = ["CameraConfigBundle", "CameraConfigRegistry"]

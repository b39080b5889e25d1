"""Unit tests for the structured logger helpers."""

import logging

from vision_config.core.errors import DeserializeError
from vision_config.core.logging_utils import (
    StructuredLogger,
    ensure_structured_logger,
    get_module_logger,
)


def test_module_logger_is_namespaced():
    logger = get_module_logger("CameraConfigStore")
    assert logger.name == "vision_config.CameraConfigStore"
    assert logger.component == "CameraConfigStore"


def test_messages_get_component_prefix(caplog):
    logger = get_module_logger("Registry")
    with caplog.at_level(logging.INFO, logger="vision_config"):
        logger.info("Loaded %d cameras", 2)

    assert caplog.messages == ["[Registry] Loaded 2 cameras"]


def test_bad_format_args_do_not_raise(caplog):
    logger = get_module_logger("Registry")
    with caplog.at_level(logging.INFO, logger="vision_config"):
        logger.info("Loaded %d cameras", "two")

    assert caplog.messages == ["[Registry] Loaded %d cameras | args=two"]


def test_ensure_wraps_plain_logger():
    plain = logging.getLogger("host.app")
    wrapped = ensure_structured_logger(plain, component="Camera_0")

    assert isinstance(wrapped, StructuredLogger)
    assert wrapped.logger is plain
    assert wrapped.component == "Camera_0"


def test_ensure_keeps_structured_logger():
    logger = get_module_logger("Registry")
    assert ensure_structured_logger(logger) is logger


def test_ensure_falls_back_to_module_logger():
    logger = ensure_structured_logger(None, fallback_name="CameraConfigStore.Cam")
    assert logger.name == "vision_config.CameraConfigStore.Cam"


def test_adapter_is_unwrapped():
    plain = logging.getLogger("host.adapter")
    wrapped = ensure_structured_logger(
        logging.LoggerAdapter(plain, {}), component="CameraConfigStore.Cam"
    )

    assert wrapped.logger is plain
    assert wrapped.component == "CameraConfigStore.Cam"


def test_classified_leads_with_error_class(caplog, tmp_path):
    logger = get_module_logger("CameraConfigStore.Cam")
    error = DeserializeError(tmp_path / "camera.json", ValueError("file is empty"))

    with caplog.at_level(logging.WARNING, logger="vision_config"):
        logger.classified(error, "using preliminary config")

    assert caplog.records[0].levelno == logging.WARNING
    assert caplog.messages == [
        f"[CameraConfigStore.Cam] DeserializeError: Failed to load {tmp_path / 'camera.json'}: "
        "file is empty - using preliminary config"
    ]

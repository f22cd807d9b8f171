from __future__ import annotations

"""
Integration tests for the Logging Infrastructure.

Verifies the idempotent setup of the queue based pipeline, forced
reconfiguration, file persistence and teardown.
"""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from protocrate.infra.logging import (
    _CONFIGURED_FLAG_ATTR,
    _HANDLER_TAG_ATTR,
    _QUEUE_LISTENER_ATTR,
    LoggingConfig,
    configure_logging,
    get_logger,
    shutdown_logging,
)

pytestmark = pytest.mark.usefixtures("reset_logging")


def _our_handlers(root: logging.Logger):
    return [h for h in root.handlers if getattr(h, _HANDLER_TAG_ATTR, False)]


def test_configure_logging_is_idempotent():
    root = configure_logging(LoggingConfig(level="DEBUG"))
    listener = getattr(root, _QUEUE_LISTENER_ATTR)

    configure_logging(LoggingConfig(level="ERROR"))

    assert len(_our_handlers(root)) == 1
    assert getattr(root, _QUEUE_LISTENER_ATTR) is listener
    assert root.level == logging.DEBUG


def test_force_reconfigures():
    root = configure_logging(LoggingConfig(level="DEBUG"))
    first = getattr(root, _QUEUE_LISTENER_ATTR)

    configure_logging(LoggingConfig(level="WARNING"), force=True)

    assert len(_our_handlers(root)) == 1
    assert getattr(root, _QUEUE_LISTENER_ATTR) is not first
    assert root.level == logging.WARNING


def test_unknown_level_defaults_to_info():
    root = configure_logging(LoggingConfig(level="chatty"))
    assert root.level == logging.INFO


def test_file_handler_persists_records(tmp_path: Path):
    log_file = tmp_path / "logs" / "protocrate.log"
    configure_logging(LoggingConfig(level="INFO", console=False, log_file=str(log_file)))

    get_logger("protocrate.test").info("relocated 3 units")
    shutdown_logging()

    content = log_file.read_text(encoding="utf-8")
    assert "INFO | protocrate.test | relocated 3 units" in content


def test_no_handlers_leaves_root_unconfigured():
    root = configure_logging(LoggingConfig(console=False, log_file=None))

    assert _our_handlers(root) == []
    assert not getattr(root, _CONFIGURED_FLAG_ATTR, False)


def test_shutdown_detaches_everything():
    root = configure_logging(LoggingConfig())
    shutdown_logging()

    assert _our_handlers(root) == []
    assert getattr(root, _QUEUE_LISTENER_ATTR) is None
    assert getattr(root, _CONFIGURED_FLAG_ATTR) is False


def test_emergency_console_on_pipeline_failure():
    with patch("protocrate.infra.logging.core.QueueListener", side_effect=RuntimeError("no threads")):
        root = configure_logging(LoggingConfig())

    handlers = _our_handlers(root)
    assert len(handlers) == 1
    assert "CRITICAL FALLBACK" in handlers[0].formatter._fmt
    assert root.level == logging.INFO

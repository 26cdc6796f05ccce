"""Tests for hubgen.logging."""

from __future__ import annotations

import logging
from pathlib import Path

from hubgen.logging import configure_logging, get_logger


def test_get_logger_nests_under_package_logger() -> None:
    assert get_logger().name == "hubgen"
    assert get_logger("generator").name == "hubgen.generator"


def test_configure_logging_replaces_handlers() -> None:
    configure_logging()
    logger = configure_logging(verbose=True)

    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert logger.propagate is False


def test_quiet_raises_console_threshold_only(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "hubgen.log"

    logger = configure_logging(quiet=True, log_file=log_file)
    get_logger("scan").info("scanned %d names", 3)

    console, sink = logger.handlers
    assert console.level == logging.WARNING
    assert sink.level == logging.INFO
    sink.flush()
    assert "hubgen.scan: scanned 3 names" in log_file.read_text(encoding="utf-8")

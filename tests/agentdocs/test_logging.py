"""Tests for agentdocs.logging module."""

from __future__ import annotations

import io
import json
import logging
from typing import TYPE_CHECKING

import pytest

from agentdocs.logging import (
    CorrelationContext,
    JsonFormatter,
    LoggerAdapter,
    get_correlation_id,
    get_logger,
    setup_logging,
    with_fields,
)

if TYPE_CHECKING:
    from collections.abc import Iterator


def _capturing_logger(name: str) -> tuple[logging.Logger, io.StringIO]:
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JsonFormatter())
    logger = logging.getLogger(name)
    logger.handlers = [handler]
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    return logger, stream


class TestGetLogger:
    """Tests for get_logger function."""

    def test_returns_logger_adapter(self) -> None:
        """get_logger returns a LoggerAdapter instance."""
        assert isinstance(get_logger(__name__), LoggerAdapter)

    def test_logger_has_null_handler(self) -> None:
        """A fresh logger gets a single NullHandler."""
        logger = get_logger(f"{__name__}.null_handler")
        handlers = logger.logger.handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.NullHandler)


class TestJsonFormatter:
    """Tests for JsonFormatter class."""

    def test_formats_as_json(self) -> None:
        """Records render as one JSON object with structured extras."""
        logger, stream = _capturing_logger(f"{__name__}.json")
        logger.info("Wrote artifact", extra={"operation": "knowledge", "artifact": "llms.txt"})
        data = json.loads(stream.getvalue())
        assert data["message"] == "Wrote artifact"
        assert data["level"] == "INFO"
        assert data["operation"] == "knowledge"
        assert data["artifact"] == "llms.txt"
        assert data["ts"].endswith("Z")

    def test_includes_exception(self) -> None:
        """Exception information is serialised."""
        logger, stream = _capturing_logger(f"{__name__}.exc")
        try:
            raise OSError("disk full")
        except OSError:
            logger.exception("Write failed")
        assert "disk full" in json.loads(stream.getvalue())["exc_info"]


class TestLoggerAdapter:
    """Tests for structured field injection."""

    def test_bound_fields_and_status(self) -> None:
        """Bound fields, the correlation id and an inferred status are injected."""
        base, stream = _capturing_logger(f"{__name__}.adapter")
        adapter = with_fields(LoggerAdapter(base, {}), operation="bundles")
        with CorrelationContext("run-1"):
            adapter.warning("Renamed bundle", extra={"section": "docs"})
        data = json.loads(stream.getvalue())
        assert data["operation"] == "bundles"
        assert data["status"] == "warning"
        assert data["correlation_id"] == "run-1"
        assert data["section"] == "docs"

    def test_call_extra_wins(self) -> None:
        """Per-call fields override bound ones."""
        base, stream = _capturing_logger(f"{__name__}.override")
        adapter = with_fields(base, operation="export", status="started")
        adapter.info("Begin", extra={"operation": "walk"})
        data = json.loads(stream.getvalue())
        assert data["operation"] == "walk"
        assert data["status"] == "started"

    def test_default_operation(self) -> None:
        """Records without an operation are tagged ``unknown``."""
        base, stream = _capturing_logger(f"{__name__}.default")
        LoggerAdapter(base, {}).error("Boom")
        data = json.loads(stream.getvalue())
        assert data["operation"] == "unknown"
        assert data["status"] == "error"


class TestCorrelationContext:
    """Tests for CorrelationContext."""

    def test_binds_and_resets(self) -> None:
        """The id is visible inside the block and restored afterwards."""
        before = get_correlation_id()
        with CorrelationContext("abc"):
            assert get_correlation_id() == "abc"
            with CorrelationContext("nested"):
                assert get_correlation_id() == "nested"
            assert get_correlation_id() == "abc"
        assert get_correlation_id() == before


class TestSetupLogging:
    """Tests for setup_logging."""

    @pytest.fixture(autouse=True)
    def _restore_root(self) -> Iterator[None]:
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        try:
            yield
        finally:
            root.handlers = handlers
            root.setLevel(level)

    def test_configures_json_handler(self) -> None:
        """The root logger gets a JSON handler at the requested level."""
        setup_logging("debug")
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert isinstance(root.handlers[0].formatter, JsonFormatter)

    def test_unknown_level_defaults_to_info(self) -> None:
        """Unrecognised level names fall back to INFO."""
        setup_logging("chatty")
        assert logging.getLogger().level == logging.INFO

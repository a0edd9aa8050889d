# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for logging configuration."""

import logging

import structlog

from src.core.config.settings import Settings
from src.utils.logging import bind_context, clear_context, get_logger, setup_logging


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_sets_application_log_level(self) -> None:
        setup_logging(Settings(log_level="WARNING"))

        assert logging.getLogger().level == logging.WARNING
        assert logging.getLogger("src").level == logging.WARNING
        assert logging.getLogger("sqlalchemy").level == logging.WARNING

    def test_installs_single_root_handler(self) -> None:
        settings = Settings()
        setup_logging(settings)
        setup_logging(settings)

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0].formatter, structlog.stdlib.ProcessorFormatter)

    def test_get_logger_returns_bound_logger(self) -> None:
        setup_logging(Settings())

        logger = get_logger("src.tests")

        assert hasattr(logger, "info")


class TestContext:
    """Tests for bind_context and clear_context."""

    def test_bind_and_clear(self) -> None:
        bind_context(request_id="abc-123")

        assert structlog.contextvars.get_contextvars()["request_id"] == "abc-123"

        clear_context()

        assert structlog.contextvars.get_contextvars() == {}

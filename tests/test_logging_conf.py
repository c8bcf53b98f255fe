from __future__ import annotations

import logging

from zip_bundler.logging_conf import build_logging_config, setup_logging
from zip_bundler.middleware.correlation import CorrelationIdFilter, _correlation_id


def test_level_is_applied_to_service_loggers() -> None:
    setup_logging("debug")
    try:
        assert logging.getLogger("app").level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING
    finally:
        setup_logging("info")


def test_console_handler_carries_correlation_filter() -> None:
    cfg = build_logging_config("INFO")
    assert "correlation" in cfg["handlers"]["console"]["filters"]


def test_filter_stamps_current_correlation_id() -> None:
    record = logging.LogRecord("app", logging.INFO, __file__, 1, "msg", None, None)
    token = _correlation_id.set("req-42")
    try:
        assert CorrelationIdFilter().filter(record) is True
    finally:
        _correlation_id.reset(token)
    assert record.correlation_id == "req-42"

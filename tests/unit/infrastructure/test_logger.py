# tests/unit/infrastructure/test_logger.py
from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from contextvars import copy_context
from typing import Any

import pytest

from pension_api.infrastructure.logging.logger import (
    _JsonFormatter,  # internal but importable
    configure_root_logging,
    get_json_logger,
    get_request_id,
    get_tenant_id,
    set_request_context,
)


def _capture_log(record_msg: str, level: int = logging.INFO, **extra: Any) -> dict[str, Any]:
    """Build a record, format it with the JSON formatter and parse the line."""
    logger = logging.getLogger("test.logger")
    record = logger.makeRecord(
        name=logger.name,
        level=level,
        fn="test_logger",
        lno=123,
        msg=record_msg,
        args=(),
        exc_info=None,
    )
    for k, v in extra.items():
        setattr(record, k, v)
    return json.loads(_JsonFormatter().format(record))


@pytest.fixture()
def _isolated_root() -> Iterator[logging.Logger]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    root.handlers.clear()
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_configure_root_logging_installs_json_handler(
    monkeypatch: pytest.MonkeyPatch, _isolated_root: logging.Logger
) -> None:
    monkeypatch.setenv("LOG_LEVEL", "debug")

    configure_root_logging()
    configure_root_logging()

    assert _isolated_root.level == logging.DEBUG
    assert len(_isolated_root.handlers) == 1
    assert isinstance(_isolated_root.handlers[0].formatter, _JsonFormatter)


def test_json_formatter_basic_fields() -> None:
    payload = _capture_log("hello-world")

    assert payload["message"] == "hello-world"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "test.logger"
    assert "ts" in payload


def test_json_formatter_merges_extra_fields() -> None:
    payload = _capture_log("calculation_completed", extra={"tenant_id": "acme", "messages": 2})

    assert payload["tenant_id"] == "acme"
    assert payload["messages"] == 2


def test_json_formatter_renders_non_json_values_as_strings() -> None:
    payload = _capture_log("odd", extra={"value": {1, 2}})

    assert isinstance(payload["value"], str)


def test_json_formatter_includes_request_id_from_record_and_env(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.delenv("REQUEST_ID", raising=False)

    def _run() -> None:
        assert _capture_log("with-record-id", request_id="abc-123")["request_id"] == "abc-123"
        monkeypatch.setenv("REQUEST_ID", "env-id")
        assert _capture_log("with-env-id")["request_id"] == "env-id"

    copy_context().run(_run)


def test_request_context_enriches_payload() -> None:
    def _run() -> None:
        set_request_context(request_id="rid-1", tenant_id="tenant_a")
        set_request_context(tenant_id="tenant_b")

        assert get_request_id() == "rid-1"
        assert get_tenant_id() == "tenant_b"
        payload = _capture_log("scoped")
        assert payload["request_id"] == "rid-1"
        assert payload["tenant_id"] == "tenant_b"

    copy_context().run(_run)


def test_json_formatter_includes_exception_info(caplog: pytest.LogCaptureFixture) -> None:
    logger = get_json_logger("test.logger.exc")

    with caplog.at_level(logging.ERROR, logger="test.logger.exc"):
        try:
            raise ValueError("boom")
        except ValueError:
            logger.exception("failure")

    payload = json.loads(_JsonFormatter().format(caplog.records[-1]))
    assert payload["level"] == "ERROR"
    assert payload["exc_type"] == "ValueError"
    assert "boom" in payload["exc_message"]

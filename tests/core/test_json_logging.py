from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from greeting_service.core.logging import JsonFormatter, setup_logging
from greeting_service.core.settings import get_settings


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="greeting_service.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="hello %s",
        args=("world",),
        exc_info=None,
    )
    record.__dict__.update(extra)
    return record


def test_formats_record_without_extra_fields() -> None:
    payload = json.loads(JsonFormatter().format(_record()))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "greeting_service.test"
    assert payload["message"] == "hello world"
    assert payload["request_id"] is None
    assert "host" not in payload


def test_formats_request_metadata() -> None:
    record = _record(
        request_id="abc", http_method="GET", request_path="/", status_code=200, duration_ms=0.4
    )
    payload = json.loads(JsonFormatter().format(record))

    assert payload["request_id"] == "abc"
    assert payload["method"] == "GET"
    assert payload["path"] == "/"
    assert payload["status_code"] == 200
    assert payload["duration_ms"] == 0.4


def test_formats_bind_address() -> None:
    payload = json.loads(JsonFormatter().format(_record(host="0.0.0.0", port=3000)))
    assert payload["host"] == "0.0.0.0"
    assert payload["port"] == 3000


def test_formats_startup_identity() -> None:
    record = _record(app="greeting-service", env="production", host="0.0.0.0", port=3000)
    payload = json.loads(JsonFormatter().format(record))
    assert payload["app"] == "greeting-service"
    assert payload["env"] == "production"


def test_default_level_comes_from_dotenv(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / ".env").write_text("LOG_LEVEL=warning\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()

    root = logging.getLogger()
    original_level = root.level
    try:
        setup_logging()
        assert root.level == logging.WARNING
    finally:
        root.setLevel(original_level)

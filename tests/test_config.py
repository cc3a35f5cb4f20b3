import json
import logging

from meal_planner import config
from meal_planner.logging_config import ContextualFormatter, StructuredJsonFormatter, request_id_ctx


def test_purchase_animation_ms(monkeypatch):
    monkeypatch.setenv("PURCHASE_ANIMATION_MS", "250")
    assert config.purchase_animation_ms() == 250
    monkeypatch.setenv("PURCHASE_ANIMATION_MS", "soon")
    assert config.purchase_animation_ms() == config.DEFAULT_PURCHASE_ANIMATION_MS
    monkeypatch.setenv("PURCHASE_ANIMATION_MS", "-5")
    assert config.purchase_animation_ms() == 0


def test_log_settings(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_FORMAT", "JSON")
    assert config.log_level() == "DEBUG"
    assert config.log_json() is True
    monkeypatch.delenv("LOG_FORMAT")
    assert config.log_json() is False


def _record(msg: str) -> logging.LogRecord:
    return logging.LogRecord("meal_planner.test", logging.INFO, __file__, 1, msg, None, None)


def test_json_formatter_includes_request_id():
    token = request_id_ctx.set("abc123")
    try:
        data = json.loads(StructuredJsonFormatter().format(_record("hello")))
    finally:
        request_id_ctx.reset(token)
    assert data["message"] == "hello"
    assert data["level"] == "INFO"
    assert data["request_id"] == "abc123"


def test_text_formatter_without_request_id():
    line = ContextualFormatter().format(_record("hello"))
    assert line.endswith("| meal_planner.test | hello")
    assert "req=" not in line

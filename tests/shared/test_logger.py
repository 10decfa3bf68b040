"""
🧪 test_logger.py — ініціалізація логування та JSON-формат для аудиту.
"""

import json
import logging

from travel_pricing.shared.utils.logger import (
    LOG_NAME,
    JsonFormatter,
    get_logger,
    init_logging,
    init_logging_from_config,
)


def test_get_logger_uses_package_prefix():
    assert get_logger().name == LOG_NAME
    assert get_logger("domain.tax").name == f"{LOG_NAME}.domain.tax"


def test_reinit_replaces_handlers():
    init_logging(level="INFO")
    logger = init_logging(level="DEBUG", console=True)
    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG


def test_file_handler_writes_json(tmp_path):
    log_file = tmp_path / "logs" / "pricing.log"
    logger = init_logging_from_config({"level": "INFO", "console": False, "json": True, "file": str(log_file)})
    get_logger("domain.markup").warning("⚠️ fallback", extra={"error_code": "markup_rule_not_found"})
    for handler in logger.handlers:
        handler.flush()

    lines = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
    record = lines[-1]
    assert record["name"] == f"{LOG_NAME}.domain.markup"
    assert record["level"] == "WARNING"
    assert record["error_code"] == "markup_rule_not_found"

    init_logging(console=True)                       # 🧹 Закриваємо файловий хендлер


def test_json_formatter_stringifies_unserializable_extra():
    record = logging.LogRecord(LOG_NAME, logging.INFO, __file__, 1, "msg", None, None)
    record.amount = object()
    payload = json.loads(JsonFormatter().format(record))
    assert payload["message"] == "msg"
    assert isinstance(payload["amount"], str)


def test_suppress_sets_third_party_levels():
    init_logging(suppress={"urllib3": "ERROR"})
    assert logging.getLogger("urllib3").level == logging.ERROR

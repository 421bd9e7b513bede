from __future__ import annotations

import logging
from pathlib import Path

from readmegen.logging import SecretMaskFilter, configure_logging, get_logger, mask_secrets


def _record(msg: str, *args: object) -> logging.LogRecord:
    return logging.LogRecord("readmegen.tests", logging.ERROR, __file__, 1, msg, args, None)


def test_filter_redacts_secrets_in_formatted_message() -> None:
    mask = SecretMaskFilter(["sk-abc", "sk-abcdef"])
    record = _record("Completion failed: bad key %s (prefix %s)", "sk-abcdef", "sk-abc")

    assert mask.filter(record) is True
    assert record.getMessage() == "Completion failed: bad key *** (prefix ***)"


def test_filter_leaves_clean_records_untouched() -> None:
    mask = SecretMaskFilter()
    mask.register(None, "")
    record = _record("Connecting to %s", "octo/demo")

    assert mask.filter(record) is True
    assert record.msg == "Connecting to %s"
    assert record.args == ("octo/demo",)


def test_configure_logging_writes_masked_file(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "readmegen.log"
    mask_secrets("ghp-logging-secret")

    configure_logging(verbose=True, log_file=log_file)
    get_logger("tests").debug("Request failed with token %s", "ghp-logging-secret")

    contents = log_file.read_text(encoding="utf-8")
    assert "Request failed with token ***" in contents
    assert "ghp-logging-secret" not in contents
    assert "DEBUG readmegen.tests:" in contents


def test_configure_logging_replaces_previous_handlers(tmp_path: Path) -> None:
    first = configure_logging(log_file=tmp_path / "first.log")
    first_handlers = list(first.handlers)

    logger = configure_logging(verbose=False)

    assert logger is first
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert not any(handler in logger.handlers for handler in first_handlers)
    file_handler = next(h for h in first_handlers if isinstance(h, logging.FileHandler))
    assert file_handler.stream is None

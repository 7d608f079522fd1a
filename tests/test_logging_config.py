from __future__ import annotations

import logging

from logging_config import ContextualFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="services.repair_check",
        level=logging.DEBUG,
        pathname=__file__,
        lineno=1,
        msg="Device not found",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_appends_known_extra_keys() -> None:
    formatter = ContextualFormatter(fmt="%(message)s")

    output = formatter.format(_record(device_id="dev-1", reason=None, unrelated="x"))

    assert output == "Device not found | device_id=dev-1"


def test_formatter_leaves_plain_messages_untouched() -> None:
    formatter = ContextualFormatter(fmt="%(levelname)s %(message)s")

    assert formatter.format(_record()) == "DEBUG Device not found"


def test_formatter_respects_custom_keys() -> None:
    formatter = ContextualFormatter(fmt="%(message)s", extra_keys=["http_status"])

    output = formatter.format(_record(http_status=502, device_id="dev-1"))

    assert output == "Device not found | http_status=502"

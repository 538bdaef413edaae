import io
import logging

import pytest

from cluster_dns.logging import (
    LOG_LEVELS,
    NOTICE,
    LogTarget,
    StartupLogBuffer,
    get_formatter,
    get_logger,
    get_logging_handler,
    start_logging,
    start_startup_logging,
)


def test_notice_level(caplog: pytest.LogCaptureFixture):
    logger = get_logger("cluster_dns.test")
    with caplog.at_level(NOTICE):
        logger.notice("noticed")
        logger.info("not noticed")
    assert [r.levelname for r in caplog.records] == ["NOTI"]


def test_level_names():
    assert LOG_LEVELS == ["critical", "error", "warning", "notice", "info", "debug"]
    assert [logging.getLevelName(n) for n in (logging.CRITICAL, logging.ERROR, NOTICE, logging.DEBUG)] == [
        "CRIT",
        "ERRO",
        "NOTI",
        "DEBG",
    ]
    assert logging.INFO < NOTICE < logging.WARNING


def test_formatter(monkeypatch: pytest.MonkeyPatch):
    record = logging.LogRecord("cluster_dns.test", NOTICE, __file__, 1, "message", None, None)

    monkeypatch.setenv("CLUSTER_DNS_LOGGING_NO_PREFIX_FORMAT", "true")
    assert get_formatter("cluster-dns", LogTarget.STDERR).format(record) == "[NOTI] cluster_dns.test: message"
    assert get_formatter("cluster-dns", LogTarget.SYSLOG).format(record) == "cluster_dns.test: message"

    monkeypatch.delenv("CLUSTER_DNS_LOGGING_NO_PREFIX_FORMAT")
    assert "cluster-dns[" in get_formatter("cluster-dns", LogTarget.STDERR).format(record)
    assert "(stderr): [NOTI] cluster_dns.test: message" in get_formatter("cluster-dns", LogTarget.STDERR).format(record)


@pytest.mark.parametrize("target", [LogTarget.STDOUT, LogTarget.STDERR])
def test_logging_handler(target: LogTarget):
    assert isinstance(get_logging_handler(target), logging.StreamHandler)


def test_start_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    try:
        start_logging("cluster-dns", "debug", "stdout")
        assert root.level == logging.DEBUG
        assert len(root.handlers) == len(handlers) + 1
    finally:
        root.handlers = handlers
        root.setLevel(level)


def test_startup_buffer_forwards_records_by_level(capsys: pytest.CaptureFixture, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("CLUSTER_DNS_LOGGING_NO_PREFIX_FORMAT", "true")
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    try:
        startup = start_startup_logging()
        assert root.level == logging.DEBUG
        logger = get_logger("cluster_dns.test")
        logger.debug("early debug")
        logger.warning("early warning")
        assert capsys.readouterr().out == ""

        start_logging("cluster-dns", "warning", "stdout", startup)
        assert startup not in root.handlers
        logger.info("late info")
        logger.error("late error")
    finally:
        root.handlers = handlers
        root.setLevel(level)
    assert capsys.readouterr().out == "[WARN] cluster_dns.test: early warning\n[ERRO] cluster_dns.test: late error\n"


def test_startup_buffer_keeps_records_until_target_is_set():
    buffer = StartupLogBuffer(capacity=2)
    for i in range(3):
        buffer.handle(logging.LogRecord("test", logging.CRITICAL, __file__, 1, f"message {i}", None, None))
    assert [r.getMessage() for r in buffer.buffer] == ["message 0", "message 1"]

    stream = io.StringIO()
    buffer.setTarget(logging.StreamHandler(stream))
    buffer.close()
    assert stream.getvalue() == "message 0\nmessage 1\n"
    assert buffer.buffer == []

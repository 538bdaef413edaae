from __future__ import annotations

import logging
import logging.handlers
import os
import sys
from enum import Enum
from typing import Any, NamedTuple, cast


class LogTarget(str, Enum):
    STDOUT = "stdout"
    SYSLOG = "syslog"
    STDERR = "stderr"


NOTICE = (logging.WARNING + logging.INFO) // 2


class _Level(NamedTuple):
    number: int
    # four letters, lines of every level stay aligned
    tag: str


# accepted by --loglevel, most severe first
_LEVELS = {
    "critical": _Level(logging.CRITICAL, "CRIT"),
    "error": _Level(logging.ERROR, "ERRO"),
    "warning": _Level(logging.WARNING, "WARN"),
    "notice": _Level(NOTICE, "NOTI"),
    "info": _Level(logging.INFO, "INFO"),
    "debug": _Level(logging.DEBUG, "DEBG"),
}

LOG_LEVELS = list(_LEVELS)

for _level in _LEVELS.values():
    logging.addLevelName(_level.number, _level.tag)


class ClusterDnsLogger(logging.Logger):
    def notice(self, message: str, *args: Any, **kwargs: Any) -> None:
        if self.isEnabledFor(NOTICE):
            self._log(NOTICE, message, args, **kwargs)


logging.setLoggerClass(ClusterDnsLogger)


def get_logger(name: str) -> ClusterDnsLogger:
    return cast(ClusterDnsLogger, logging.getLogger(name))


NO_PREFIX_FORMAT_ENV_VAR = "CLUSTER_DNS_LOGGING_NO_PREFIX_FORMAT"
SERVICE_COLUMN_WIDTH = 13

_RECORD_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def get_formatter(service: str, target: LogTarget) -> logging.Formatter:
    """
    Syslog adds its own timestamp and severity, so only the logger name and message are sent there.
    With the no-prefix variable set to 'true' the stream targets drop the timestamp and process column.
    """

    if target == LogTarget.SYSLOG:
        return logging.Formatter("%(name)s: %(message)s")
    if os.environ.get(NO_PREFIX_FORMAT_ENV_VAR) == "true":
        return logging.Formatter(_RECORD_FORMAT)

    origin = f"{service:>{SERVICE_COLUMN_WIDTH}}[%(process)d]"
    if target == LogTarget.STDERR:
        origin += "(stderr)"
    return logging.Formatter(f"%(asctime)s {origin}: {_RECORD_FORMAT}")


def get_logging_handler(target: LogTarget) -> logging.Handler:
    handlers = {
        LogTarget.STDOUT: lambda: logging.StreamHandler(sys.stdout),
        LogTarget.STDERR: lambda: logging.StreamHandler(sys.stderr),
        LogTarget.SYSLOG: lambda: logging.handlers.SysLogHandler(address="/dev/log"),
    }
    return handlers[target]()


DEFAULT_LOGLEVEL = "notice"
DEFAULT_LOGTARGET = LogTarget.STDERR
STARTUP_BUFFER_CAPACITY = 10_000



class StartupLogBuffer(logging.handlers.MemoryHandler):
    """
    Holds records logged while the command line is parsed, before the log level and target are known.

    Nothing leaves the buffer until 'start_logging' hands it the real handler,
    then only records passing the handler's level are forwarded.
    Records over the capacity are dropped.
    """

    def __init__(self, capacity: int = STARTUP_BUFFER_CAPACITY) -> None:
        super().__init__(capacity)

    def shouldFlush(self, record: logging.LogRecord) -> bool:  # noqa: N802
        return False

    def emit(self, record: logging.LogRecord) -> None:
        if len(self.buffer) < self.capacity:
            self.buffer.append(record)

    def flush(self) -> None:
        with self.lock:
            if self.target:
                for record in self.buffer:
                    if record.levelno >= self.target.level:
                        self.target.handle(record)
                self.buffer.clear()


def start_startup_logging() -> StartupLogBuffer:
    buffer = StartupLogBuffer()

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    root.addHandler(buffer)
    return buffer


def start_logging(
    service: str,
    loglevel: str = DEFAULT_LOGLEVEL,
    logtarget: str = DEFAULT_LOGTARGET.value,
    startup: StartupLogBuffer | None = None,
) -> None:
    level = _LEVELS[loglevel].number
    target = LogTarget(logtarget)

    handler = get_logging_handler(target)
    handler.setFormatter(get_formatter(service, target))
    handler.setLevel(level)

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)

    if startup is not None:
        root.removeHandler(startup)
        startup.setTarget(handler)
        # flushes what was logged so far
        startup.close()

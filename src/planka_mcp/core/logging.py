import logging
import os
from typing import Any, Iterator, Optional, Tuple

from .config import LOG_LEVEL_ENV

LOG_EXTRA_FIELDS = (
    "method",
    "path",
    "status",
    "duration_ms",
    "tool",
    "retry",
    "kind",
)

# Chatty third-party loggers; their request lines would duplicate planka.request.
QUIET_LOGGERS = ("httpx", "httpcore", "mcp.server.lowlevel.server")


class LogfmtFormatter(logging.Formatter):
    """logfmt lines: level, logger, event, then whichever known extras are set."""

    def format(self, record: logging.LogRecord) -> str:
        return " ".join(f"{k}={self._fmt_val(v)}" for k, v in self._pairs(record))

    def _pairs(self, record: logging.LogRecord) -> Iterator[Tuple[str, Any]]:
        yield "level", record.levelname.lower()
        yield "logger", record.name

        msg = record.getMessage()
        if msg:
            yield "event", msg

        for key in LOG_EXTRA_FIELDS:
            val = getattr(record, key, None)
            if val is not None:
                yield key, val

        if record.exc_info and record.exc_info[0] is not None:
            yield "exc_type", record.exc_info[0].__name__

    @staticmethod
    def _fmt_val(val: Any) -> str:
        if isinstance(val, (bool, int, float)):
            return str(val)
        s = str(val)
        if any(ch in s for ch in ' ="'):
            s = '"' + s.replace('"', '\\"') + '"'
        return s


def setup_logging(level: Optional[str] = None) -> None:
    """Log to stderr only; stdout carries the MCP stdio protocol."""
    level = level or os.getenv(LOG_LEVEL_ENV, "INFO")

    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler()  # stderr
    handler.setFormatter(LogfmtFormatter())
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["setup_logging", "LogfmtFormatter", "LOG_EXTRA_FIELDS"]

from __future__ import annotations

import logging
from typing import Any, Dict

# Attributes LogRecord sets itself; passing them in `extra` raises KeyError.
RESERVED_LOG_KEYS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime"}

SECRET_LOG_KEYS = frozenset({"password", "token", "authorization"})
MASK = "***"


def _event_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key, value in fields.items():
        if key in RESERVED_LOG_KEYS:
            continue
        out[key] = MASK if key.lower() in SECRET_LOG_KEYS else value
    return out


def log_event(
    event: str,
    logger: logging.Logger | None = None,
    *,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    """
    Emit a structured event record.

    Fields become LogRecord attributes for LogfmtFormatter. Names that collide
    with LogRecord internals are dropped; credentials are masked.
    """
    log = logger or logging.getLogger("planka_mcp.observability")
    log.log(level, event, extra={"event": event, **_event_fields(fields)})


__all__ = ["log_event", "RESERVED_LOG_KEYS", "SECRET_LOG_KEYS"]

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

_LOGGER_ROOT = "readygas"
_SERVICE_NAME = "readygas"
_HANDLER: Optional[logging.Handler] = None


class JsonFormatter(logging.Formatter):
    """
    One JSON object per line. Structured fields passed through `log_event`
    are merged at the top level.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts_ms": int(record.created * 1000),
            "level": record.levelname.lower(),
            "logger": record.name,
            "service": _SERVICE_NAME,
            "event": getattr(record, "event", None) or record.getMessage(),
        }
        fields = getattr(record, "fields", None)
        if isinstance(fields, dict):
            payload.update(fields)
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, sort_keys=True, default=str)


def configure_logging(
    level: str = "info",
    *,
    json_lines: bool = True,
    service_name: str = "readygas",
    force: bool = False,
) -> None:
    global _HANDLER, _SERVICE_NAME
    if _HANDLER is not None and not force:
        return
    _SERVICE_NAME = service_name
    handler = logging.StreamHandler()
    if json_lines:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    root = logging.getLogger()
    if _HANDLER is not None:
        root.removeHandler(_HANDLER)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    _HANDLER = handler


def log_event(
    event: str,
    *,
    ctx: Optional[Dict[str, Any]] = None,
    data: Optional[Dict[str, Any]] = None,
    level: int = logging.INFO,
) -> None:
    """
    Emit one structured event. `ctx` comes from `build_log_context`; its
    `tool` picks the logger (readygas.<tool>). `data` holds per-event fields
    and wins over `ctx` on key clashes.
    """
    ctx = ctx or {}
    tool = ctx.get("tool")
    logger = logging.getLogger(f"{_LOGGER_ROOT}.{tool}" if tool else _LOGGER_ROOT)
    if not logger.isEnabledFor(level):
        return
    fields: Dict[str, Any] = {**ctx, **(data or {})}
    # plain-text handlers still get the fields in the message
    text = event if not fields else f"{event} " + " ".join(f"{k}={v}" for k, v in sorted(fields.items()))
    logger.log(level, text, extra={"event": event, "fields": fields})


def build_log_context(**fields: Any) -> Dict[str, Any]:
    """Reusable correlation fields for `log_event`. None values are dropped."""
    return {k: v for k, v in fields.items() if v is not None}

from __future__ import annotations

import json
import logging
import sys
from contextvars import ContextVar
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

_TRACE_ID_CTX: ContextVar[str] = ContextVar("trace_id", default="unknown")

# 所有 culture_api.* 日志都挂在包 logger 下，不依赖 root logger 的 basicConfig
_PACKAGE_LOGGER = logging.getLogger("culture_api")
_EVENT_LOGGER = logging.getLogger("culture_api.events")
_LOG_FORMAT = "%(asctime)s %(levelname)s [%(trace_id)s] %(name)s %(message)s"

_handler: Optional[logging.Handler] = None


class _TraceIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.trace_id = get_trace_id()
        return True


def _build_handler(log_path: Optional[str]) -> logging.Handler:
    if not log_path:
        return logging.StreamHandler(sys.stderr)
    path = Path(log_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        path, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
    )


def init_logging(*, log_path: Optional[str] = None, level: int = logging.INFO) -> None:
    """
    Route the package's logs to ``log_path`` (rotating) or to stderr.

    Calling it again swaps the handler, so the launcher can log to stderr
    before the config is loaded and switch to LOG_PATH afterwards.
    """
    global _handler
    handler = _build_handler(log_path)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    handler.addFilter(_TraceIdFilter())

    if _handler is not None:
        _PACKAGE_LOGGER.removeHandler(_handler)
        _handler.close()
    _PACKAGE_LOGGER.addHandler(handler)
    _PACKAGE_LOGGER.setLevel(level)
    _PACKAGE_LOGGER.propagate = False
    _handler = handler


def set_trace_id(trace_id: str):
    return _TRACE_ID_CTX.set(trace_id)


def reset_trace_id(token) -> None:
    _TRACE_ID_CTX.reset(token)


def get_trace_id() -> str:
    return _TRACE_ID_CTX.get() or "unknown"


def summarize_text(text: str, limit: int = 400) -> str:
    if not text:
        return ""
    text = str(text)
    return text if len(text) <= limit else f"{text[:limit]}..."


def _event_line(event: str, fields: Dict[str, Any]) -> str:
    return json.dumps(
        {"event": event, "trace_id": get_trace_id(), **fields},
        ensure_ascii=False,
        default=str,
    )


def log_event(event: str, **fields: Any) -> None:
    _EVENT_LOGGER.info(_event_line(event, fields))


def log_error_event(event: str, **fields: Any) -> None:
    _EVENT_LOGGER.error(_event_line(event, fields))

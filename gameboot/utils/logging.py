from __future__ import annotations

import json
import logging
import sys
import time
from pathlib import Path
from typing import Any, Dict, Optional


DEFAULT_EXCLUDE = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "taskName",
}


def _extract_extras(record: logging.LogRecord) -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    for k, v in record.__dict__.items():
        if k in DEFAULT_EXCLUDE:
            continue
        if k.startswith("_"):
            continue
        data[k] = v
    return data


class JsonFormatter(logging.Formatter):
    """Structured JSON formatter with extra fields under 'extra'."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
            "ts": record.created,
        }
        extras = _extract_extras(record)
        if extras:
            payload["extra"] = extras
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


class HumanFormatter(logging.Formatter):
    """Console-friendly formatter with concise summaries for bootstrap events."""

    def format(self, record: logging.LogRecord) -> str:
        ts = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(record.created))
        logger_name = record.name
        msg = record.getMessage()
        extras = _extract_extras(record)
        summary = self._summarize(msg, extras)
        if summary:
            line = f"[{ts}] ({logger_name}) {msg} | {summary}"
        else:
            # Generic: flatten extras as k=v pairs (short)
            parts = []
            for k, v in extras.items():
                try:
                    text = json.dumps(v, ensure_ascii=False, default=str)
                    if len(text) > 120:
                        text = text[:117] + "..."
                except (TypeError, ValueError):
                    text = str(v)
                parts.append(f"{k}={text}")
            tail = " ".join(parts)
            line = f"[{ts}] ({logger_name}) {msg}{(' | ' + tail) if tail else ''}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line

    def _summarize(self, msg: str, extras: Dict[str, Any]) -> str:
        if msg == "step_status":
            return f"{extras.get('step')} -> {extras.get('state')}"

        if msg == "funding_attempt_failed":
            return (
                f"#{extras.get('attempt')} {extras.get('provider')} failed: {extras.get('error')}"
            )

        if msg == "funding_exhausted":
            causes = extras.get("causes") or []
            return f"all {len(causes)} providers failed"

        if msg == "bootstrap_done":
            outcome = extras.get("outcome")
            state = extras.get("state")
            error = extras.get("error")
            return f"outcome={outcome} state={state}{(' error=' + str(error)) if error else ''}"

        return ""


def setup_logging(level: str = "INFO", *, logs_dir: Optional[Path] = None) -> None:
    root = logging.getLogger()
    root.setLevel(level.upper())

    # Console: human-readable
    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(HumanFormatter())

    # File: structured JSON lines
    logs_dir = logs_dir or Path("logs")
    logs_dir.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(logs_dir / "bootstrap.jsonl", encoding="utf-8")
    file_handler.setFormatter(JsonFormatter())

    root.handlers.clear()
    root.addHandler(console)
    root.addHandler(file_handler)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str, *, level: Optional[str] = None) -> logging.Logger:
    logger = logging.getLogger(name)
    if level:
        logger.setLevel(level.upper())
    return logger


__all__ = ["setup_logging", "get_logger", "JsonFormatter", "HumanFormatter"]

"""Structured Logging — JSON and text formatters carrying request/record context.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Record context (resource, resource_id, operation, stage) is nested under
      "record", HTTP context (method, path, status_code, duration_ms) under
      "request"; error_code and payload stay top level
    - Enum values (Operation, RequestStage, ErrorCode) are written as their
      plain values so both formatters print "create", never "Operation.CREATE"
    - JSON format in production, human-readable text with a context suffix in development

Design Decisions:
    - setup_logging called once on startup via lifespan and replaces root handlers
"""

import json
import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any

RECORD_FIELDS = ("resource", "resource_id", "operation", "stage")
REQUEST_FIELDS = ("method", "path", "status_code", "duration_ms")
TOP_LEVEL_FIELDS = ("error_code", "payload")


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _pick(record: logging.LogRecord, keys: tuple[str, ...]) -> dict[str, Any]:
    found = {}
    for key in keys:
        val = record.__dict__.get(key)
        if val is not None:
            found[key] = _plain(val)
    return found


def record_context(record: logging.LogRecord) -> str:
    """Compact 'contact/3 create@persisted' label, empty when no record context."""
    ctx = _pick(record, RECORD_FIELDS)
    if not ctx:
        return ""
    target = ctx.get("resource", "")
    if "resource_id" in ctx:
        target = f"{target}/{ctx['resource_id']}"
    action = ctx.get("operation", "")
    if "stage" in ctx:
        action = f"{action}@{ctx['stage']}"
    return " ".join(part for part in (target, action) if part)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log.update(_pick(record, TOP_LEVEL_FIELDS))
        for group, keys in (("record", RECORD_FIELDS), ("request", REQUEST_FIELDS)):
            ctx = _pick(record, keys)
            if ctx:
                log[group] = ctx
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class ContextFormatter(logging.Formatter):
    """Human-readable lines with a [record context] suffix for development."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s - %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        ctx = record_context(record)
        code = _plain(record.__dict__.get("error_code"))
        if code is not None:
            ctx = f"{ctx} {code}".strip()
        if not ctx:
            return line
        head, sep, tail = line.partition("\n")
        return f"{head} [{ctx}]{sep}{tail}"


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Configure root logging for the application."""
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if fmt == "json" else ContextFormatter())
    logging.root.handlers = [handler]
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))

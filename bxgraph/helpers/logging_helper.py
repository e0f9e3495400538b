"""
Logging helpers: role-tagged log records and per-import context.

BxLogFilter derives two tags from the logger name so that log lines show
which layer produced them without every call site repeating it:

    bxgraph.workflows.importing.import_session_wf  ->  [Import Session] [Workflow]
    bxgraph.persistence.database.functions_aql     ->  [Functions] [AQL]

It also injects any context set with set_log_context() (for example the hash
of the binary being imported) as record.context_str.
"""

from __future__ import annotations

import contextvars
import logging
import sys
from typing import Any

_ROLE_SUFFIXES = {
    "_svc": "[Service]",
    "_wf": "[Workflow]",
    "_comp": "[Component]",
    "_aql": "[AQL]",
    "_helper": "[Helper]",
    "_dto": "[DTO]",
    "_cli": "[CLI]",
}

LOG_FORMAT = "%(asctime)s %(levelname)s %(bx_identity_tag)s %(bx_role_tag)s %(context_str)s%(message)s"

_log_context: contextvars.ContextVar[dict[str, Any] | None] = contextvars.ContextVar("bx_log_context", default=None)


def set_log_context(**values: Any) -> None:
    """Add key/value pairs to the context shown on every subsequent log line."""
    current = dict(_log_context.get() or {})
    current.update(values)
    _log_context.set(current)


def clear_log_context() -> None:
    _log_context.set(None)


def _derive_tags(name: str) -> tuple[str, str]:
    module = name.rsplit(".", 1)[-1]
    for suffix, role in _ROLE_SUFFIXES.items():
        if module.endswith(suffix):
            stem = module[: -len(suffix)]
            if not stem:
                break
            identity = " ".join(part.capitalize() for part in stem.split("_") if part)
            return f"[{identity}]", role
    return name, ""


class BxLogFilter(logging.Filter):
    """Adds bx_identity_tag, bx_role_tag and context_str to every record. Never drops records."""

    def filter(self, record: logging.LogRecord) -> bool:
        identity, role = _derive_tags(str(record.name or ""))
        record.bx_identity_tag = identity
        record.bx_role_tag = role

        context = _log_context.get()
        if context:
            joined = " ".join(f"{k}={v}" for k, v in context.items())
            record.context_str = f"[{joined}] "
        else:
            record.context_str = ""
        return True


def configure_logging(level: str | int = logging.INFO) -> None:
    """Install a stderr handler with BxLogFilter on the root logger (replaces existing handlers)."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(BxLogFilter())

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(level=level, handlers=[handler], force=True)
    # python-arango's HTTP layer is chatty at INFO
    logging.getLogger("urllib3").setLevel(logging.WARNING)

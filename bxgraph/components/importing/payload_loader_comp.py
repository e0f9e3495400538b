"""Payload file loading component."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from bxgraph.helpers.exceptions import PayloadError

logger = logging.getLogger(__name__)


def load_payload(file_path: str | Path) -> dict[str, Any]:
    """Read a JSON payload file.

    Raises:
        PayloadError: file missing or unreadable, invalid JSON, or top level is not an object
    """
    path = Path(file_path)
    if not path.is_file():
        raise PayloadError(f"File not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
    except OSError as e:
        raise PayloadError(f"Cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise PayloadError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise PayloadError(f"Top-level JSON value in {path} must be an object")
    logger.debug(f"[payload_loader] Loaded {path} ({len(data)} sections)")
    return data

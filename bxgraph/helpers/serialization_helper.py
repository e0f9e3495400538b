"""
JSON conversion for DTOs.

DTOs stay plain dataclasses; this module is the single place that turns them
(and the enums inside them) into JSON-ready structures for machine output.
"""

from __future__ import annotations

import dataclasses
import json
from enum import Enum
from typing import Any


def to_jsonable(obj: Any) -> Any:
    """Recursively convert dataclasses, enums and containers to JSON primitives."""
    if isinstance(obj, Enum):
        return obj.value
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: to_jsonable(getattr(obj, f.name)) for f in dataclasses.fields(obj)}
    if isinstance(obj, dict):
        return {str(k): to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, list | tuple):
        return [to_jsonable(v) for v in obj]
    return obj


def dumps_pretty(obj: Any) -> str:
    """Serialize a DTO (or list of DTOs) as indented JSON."""
    return json.dumps(to_jsonable(obj), indent=2, ensure_ascii=False)

from __future__ import annotations

import json
import math
import re
from pathlib import Path
from typing import Any, Dict

import yaml

from .models import Number


_INT_RE = re.compile(r"^[+-]?\d+$", re.ASCII)
_DECIMAL_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$", re.ASCII)


def load_yaml_or_json(path: Path) -> Dict[str, Any]:
    data: Dict[str, Any]
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in {".yaml", ".yml"}:
        data = yaml.safe_load(text) or {}
    elif path.suffix.lower() == ".json":
        data = json.loads(text)
    else:
        raise ValueError(f"Unsupported catalog file: {path}")
    if not isinstance(data, dict):
        raise ValueError(f"Invalid catalog file format: {path}")
    return data


def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def to_number(text: str | None) -> Number:
    """
    Convert a table cell to a number.

    Blank cells count as zero. Integral text gives an int, other finite
    decimal text a float. Raises ValueError for anything else.
    """
    value = (text or "").strip()
    if not value:
        return 0
    if _INT_RE.match(value):
        return int(value)
    if not _DECIMAL_RE.match(value):
        raise ValueError(f"Not a number: {value!r}")
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"Not a finite number: {value!r}")
    return number


def format_number(value: Number | None) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return str(value)


def progress_text(label: str, done: int, total: int) -> str:
    pct = 100.0 * done / total if total else 100.0
    return f"\r{label}... {done} of {total} ({pct:.2f}%)"

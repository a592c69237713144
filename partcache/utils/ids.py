# partcache/utils/ids.py
from __future__ import annotations

from typing import Any


def normalize_key(value: Any) -> str:
    """Repository keys are strings so 7 and "7" address the same slot."""
    return str(value)

"""Conversion of decoded JSON objects to flat XML fragments."""

from __future__ import annotations

import logging
from typing import Any

_log = logging.getLogger("wavely")


def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return str(value)


def map_to_xml(m: dict[str, Any]) -> bytes:
    """Render each key as an element; lists repeat the element for each object item."""
    out: list[str] = []
    for key, value in m.items():
        if isinstance(value, (str, bool, int, float)):
            out.append(f"<{key}>{_scalar(value)}</{key}>")
        elif isinstance(value, (dict, list)):
            items = value if isinstance(value, list) else [value]
            out.extend(f"<{key}>{map_to_xml(item).decode()}</{key}>"
                       for item in items if isinstance(item, dict))
        else:
            _log.warning("Encountered undefined datatype in map.")
    return "".join(out).encode()
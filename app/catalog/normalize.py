"""
Field coercion helpers for book records.

Records come from a hand-edited JSON file, so the same field may be a
string in one record, a list in another and missing or ``null`` in a
third. The helpers below turn such values into lowercase text (for
substring search) or lowercase token lists (for exact matching) and
never raise on unexpected shapes.
"""

from __future__ import annotations

import math
from typing import Any, Dict, List, Mapping, Optional


def _strings(value: Any) -> List[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [v for v in value if isinstance(v, str)]
    return []


def lower_text(value: Any) -> str:
    """Lowercase text of a string or list-of-strings value.

    List elements that are not strings are dropped; the rest are joined
    with a single space. Any other value yields an empty string.
    """
    return " ".join(s.lower() for s in _strings(value))


def lower_tokens(value: Any) -> List[str]:
    """Lowercase string tokens of a string or list-of-strings value."""
    return [s.lower() for s in _strings(value)]


def field_text(record: Mapping[str, Any], *fields: str) -> str:
    parts = [lower_text(record.get(f)) for f in fields]
    return " ".join(p for p in parts if p)


def field_tokens(record: Mapping[str, Any], *fields: str) -> List[str]:
    tokens: List[str] = []
    for f in fields:
        tokens.extend(lower_tokens(record.get(f)))
    return tokens


def mime_types(record: Mapping[str, Any]) -> List[str]:
    """Lowercase ``mime_type`` of every entry in ``formats``.

    Entries that are not objects, or whose ``mime_type`` is missing or
    not a string, are skipped.
    """
    formats = record.get("formats")
    if not isinstance(formats, (list, tuple)):
        return []
    result: List[str] = []
    for fmt in formats:
        if not isinstance(fmt, Mapping):
            continue
        mt = fmt.get("mime_type")
        if isinstance(mt, str):
            result.append(mt.lower())
    return result


def as_int(value: Any) -> Optional[int]:
    """Best-effort integer coercion; ``None`` when not possible."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def downloads_of(record: Dict[str, Any]) -> float:
    """Numeric ``downloads`` value, ``0`` when missing or not a number."""
    value = record.get("downloads")
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0
    else:
        return 0
    if isinstance(number, float) and math.isnan(number):
        return 0
    return number

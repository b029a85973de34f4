"""
Resolve the effective NPS value of a Helena contact.

The nps custom field may arrive as a number or as a string. Anything that
does not yield a usable number falls back to the bucket the contact was
fetched from. A resolved value of 0 also falls back: the survey scale
starts at 1, so a zero means the field was never filled in properly.
"""

import math
import re
from typing import Any

# Leading float literal, the same prefix a lenient float parser accepts
_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_float_prefix(raw: str) -> float | None:
    """Parse the leading numeric part of a string ("4", " 3.5", "2abc")."""
    match = _FLOAT_PREFIX.match(raw)
    if not match:
        return None
    try:
        value = float(match.group(1))
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def _read_custom_field(contact: dict[str, Any]) -> int | float | None:
    custom_fields = contact.get("customFields")
    if not isinstance(custom_fields, dict) or "nps" not in custom_fields:
        return None

    raw = custom_fields["nps"]
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        try:
            finite = math.isfinite(raw)
        except OverflowError:
            # int beyond float range
            return None
        return raw if finite else None
    if isinstance(raw, str):
        return parse_float_prefix(raw)
    return None


def resolve_nps_value(contact: dict[str, Any], bucket: int) -> int | float:
    """
    Effective NPS value for a contact fetched under ``bucket``.

    Args:
        contact: Raw Helena contact
        bucket: Score bucket (1-5) used as the upstream filter

    Returns:
        The custom field value when it is a non-zero finite number,
        otherwise the bucket value. Integral floats come back as int.
    """
    value = _read_custom_field(contact)
    if not value:
        return bucket
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value

"""Stable synthetic identifiers for contests whose source has no numeric id."""

from datetime import datetime

from .models.contest import to_millis

_INT32_MASK = 0xFFFFFFFF
_INT32_SIGN = 0x80000000


def _to_int32(value: int) -> int:
    value &= _INT32_MASK
    return value - (1 << 32) if value & _INT32_SIGN else value


def _utf16_units(text: str) -> list[int]:
    data = text.encode("utf-16-le", errors="surrogatepass")
    return [int.from_bytes(data[i:i + 2], "little") for i in range(0, len(data), 2)]


def rolling_hash(text: str) -> int:
    """
    Signed 32-bit polynomial hash of ``text``.

    Each step multiplies the running hash by 31, adds the next UTF-16 code
    unit and wraps to a signed 32-bit integer, so the result matches
    ``String.hashCode`` style hashes computed elsewhere.
    """
    h = 0
    for unit in _utf16_units(text):
        h = _to_int32(h * 31 + unit)
    return h


def assign_contest_id(platform: str, name: str, start: datetime | int) -> int:
    """
    Derive the id of a contest from its ``(platform, name, start)`` triple.

    Args:
        platform: Canonical platform tag
        name: Contest title as reported by the source
        start: Start instant, or its epoch milliseconds

    Returns:
        Non-negative integer, identical for identical inputs
    """
    start_millis = start if isinstance(start, int) else to_millis(start)
    return abs(rolling_hash(f"{platform}|{name}|{start_millis}"))

"""
Fixed-width storage encoding for the counter value.

W/8 bytes, big-endian, two's complement. A fixed width keeps the stored
form independent of the magnitude of the value.
"""

from __future__ import annotations

from ..errors import CORRUPT_STATE, HostError
from ..math import I32, IntBounds


def encode_value(value: int, bounds: IntBounds = I32) -> bytes:
    """Encode `value` as a bounds.byte_width big-endian signed integer."""
    if not bounds.contains(value):
        raise HostError(
            f"{value} does not fit {bounds.type_name}",
            code=CORRUPT_STATE,
            context={"value": value, "bits": bounds.bits},
        )
    return value.to_bytes(bounds.byte_width, byteorder="big", signed=True)


def decode_value(raw: bytes, bounds: IntBounds = I32) -> int:
    """Inverse of encode_value; a wrong length means the slot was not written by us."""
    if len(raw) != bounds.byte_width:
        raise HostError(
            f"stored value has {len(raw)} bytes, expected {bounds.byte_width}",
            code=CORRUPT_STATE,
            context={"len": len(raw), "bits": bounds.bits},
        )
    return int.from_bytes(raw, byteorder="big", signed=True)


__all__ = ["encode_value", "decode_value"]

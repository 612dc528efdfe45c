from __future__ import annotations

import math
import struct

from wasm_host_linker.types import Scalar, TypedValue, ValueKind

_U64_MASK = (1 << 64) - 1

# Tags each target kind accepts. Handles may travel
# as u64 even though they are resolved as s64.
_ACCEPTED = {
    ValueKind.S32: (ValueKind.S32,),
    ValueKind.S64: (ValueKind.S64, ValueKind.U64),
    ValueKind.U64: (ValueKind.U64,),
    ValueKind.F32: (ValueKind.F32,),
    ValueKind.F64: (ValueKind.F64,),
}


def _to_signed(value: int, bits: int) -> int:
    value &= (1 << bits) - 1
    if value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def _to_f32(value: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _narrow(kind: ValueKind, value: Scalar) -> Scalar:
    if kind is ValueKind.S32:
        return _to_signed(int(value), 32)
    if kind is ValueKind.S64:
        return _to_signed(int(value), 64)
    if kind is ValueKind.U64:
        return int(value) & _U64_MASK
    if kind is ValueKind.F32:
        return _to_f32(float(value))
    return float(value)


def extract(kind: ValueKind, value: TypedValue) -> Scalar:
    """Read ``value`` as the native type of ``kind``.

    A tag the target kind does not accept yields the zero value of that kind
    instead of an error.
    """
    if value.kind not in _ACCEPTED[kind]:
        return kind.zero()
    return _narrow(kind, value.value)


def wrap(kind: ValueKind, result: Scalar) -> TypedValue:
    """Tag a native ``result`` as ``kind``, narrowing it to the kind's width."""
    return TypedValue(kind, _narrow(kind, result))

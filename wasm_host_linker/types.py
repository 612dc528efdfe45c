from __future__ import annotations

import json
from collections.abc import Callable, MutableSequence, Sequence
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Union

LINKER_ABI_VERSION = 1

Scalar = Union[int, float]


class LogLevel(IntEnum):
    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4
    FATAL = 5


class ValueKind(IntEnum):
    S32 = 0
    S64 = 1
    U64 = 2
    F32 = 3
    F64 = 4

    @property
    def wit_name(self) -> str:
        return _WIT_NAMES[self]

    @property
    def is_float(self) -> bool:
        return self in (ValueKind.F32, ValueKind.F64)

    def zero(self) -> Scalar:
        return 0.0 if self.is_float else 0

    @classmethod
    def parse(cls, kind: ValueKind | int | str) -> ValueKind:
        if isinstance(kind, ValueKind):
            return kind
        if isinstance(kind, int):
            return cls(kind)
        if not isinstance(kind, str):
            raise ValueError(f"Invalid value kind: {kind!r}. Must be a ValueKind, int or str")
        for member, name in _WIT_NAMES.items():
            if kind.lower() in (name, member.name.lower()):
                return member
        raise ValueError(f"Invalid value kind: {kind}. Must be one of {sorted(_WIT_NAMES.values())}")


_WIT_NAMES = {
    ValueKind.S32: "s32",
    ValueKind.S64: "s64",
    ValueKind.U64: "u64",
    ValueKind.F32: "f32",
    ValueKind.F64: "f64",
}


@dataclass(frozen=True)
class TypedValue:
    """A tagged scalar exchanged across the host/guest call boundary."""

    kind: ValueKind
    value: Scalar

    @classmethod
    def s32(cls, value: int) -> TypedValue:
        return cls(ValueKind.S32, value)

    @classmethod
    def s64(cls, value: int) -> TypedValue:
        return cls(ValueKind.S64, value)

    @classmethod
    def u64(cls, value: int) -> TypedValue:
        return cls(ValueKind.U64, value)

    @classmethod
    def f32(cls, value: float) -> TypedValue:
        return cls(ValueKind.F32, value)

    @classmethod
    def f64(cls, value: float) -> TypedValue:
        return cls(ValueKind.F64, value)

    def is_kind(self, kind: ValueKind) -> bool:
        return self.kind == kind

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.wit_name, "value": self.value}


@dataclass(frozen=True)
class FuncType:
    """Declared signature of an exported function, excluding the instance handle."""

    params: tuple[ValueKind, ...] = ()
    result: ValueKind | None = None

    @property
    def param_count(self) -> int:
        return len(self.params)

    @property
    def arity(self) -> int:
        return 1 + len(self.params)

    def signature(self, name: str) -> str:
        params = ",".join(p.wit_name for p in self.params)
        result = self.result.wit_name if self.result is not None else "_"
        return f"{name}({params})->{result}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "params": [p.wit_name for p in self.params],
            "result": self.result.wit_name if self.result is not None else None,
        }


@dataclass
class CallOutcome:
    error: str | None = None

    @classmethod
    def ok(cls) -> CallOutcome:
        return cls()

    @classmethod
    def fail(cls, message: str) -> CallOutcome:
        return cls(error=message)

    @property
    def succeeded(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"ok": self.succeeded}
        if self.error is not None:
            d["error"] = self.error
        return d

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


HostCallback = Callable[
    [Any, FuncType, Sequence[TypedValue], MutableSequence[TypedValue]],
    CallOutcome,
]

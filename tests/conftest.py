"""Shared host interfaces and fixtures for linker tests."""

from __future__ import annotations

import pytest

from wasm_host_linker import (
    HandleTable,
    InterfaceLinker,
    LinkerConfig,
    LogLevel,
    MockLogSink,
    export_function,
    export_interface,
)


@export_interface("arieo:engine/counter@0.1.0")
class Counter:
    def __init__(self) -> None:
        self.total = 0
        self.resets = 0
        self.calls: list[tuple] = []

    @export_function(params=("s32",), result="u64")
    def add(self, amount: int) -> int:
        self.calls.append(("add", amount))
        self.total += amount
        return self.total

    @export_function()
    def reset(self) -> None:
        self.calls.append(("reset",))
        self.resets += 1
        self.total = 0

    @export_function(result="s64")
    def get_total(self) -> int:
        self.calls.append(("get_total",))
        return self.total


@export_interface("arieo:engine/transform@0.1.0")
class Transform:
    def __init__(self) -> None:
        self.calls: list[tuple] = []

    @export_function(params=("f32", "f32", "f64"), result="f64")
    def scale(self, x: float, y: float, factor: float) -> float:
        self.calls.append(("scale", x, y, factor))
        return (x + y) * factor

    @export_function(params=("s64", "u64"))
    def set_origin(self, x: int, y: int) -> None:
        self.calls.append(("set_origin", x, y))


@pytest.fixture
def sink() -> MockLogSink:
    return MockLogSink()


@pytest.fixture
def handles() -> HandleTable:
    return HandleTable()


@pytest.fixture
def trace_config() -> LinkerConfig:
    return LinkerConfig(log_level=LogLevel.TRACE)


@pytest.fixture
def linker(handles: HandleTable, sink: MockLogSink, trace_config: LinkerConfig) -> InterfaceLinker:
    return InterfaceLinker([Counter, Transform], handles=handles, sink=sink, config=trace_config)

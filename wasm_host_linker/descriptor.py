from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from wasm_host_linker.callback import HostFunctionCallback, generate_callback
from wasm_host_linker.config import LinkerConfig
from wasm_host_linker.errors import DuplicateExportError
from wasm_host_linker.handles import HandleTable
from wasm_host_linker.interface import get_interface_info, interface_type_tag
from wasm_host_linker.sink import LogSink
from wasm_host_linker.types import FuncType


@dataclass(frozen=True)
class FunctionExportDescriptor:
    name: str
    function_id: int
    checksum: int
    callback: HostFunctionCallback = field(compare=False, repr=False)
    func_type: FuncType = field(default_factory=FuncType)

    @property
    def arity(self) -> int:
        return self.func_type.arity

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "function_id": self.function_id,
            "checksum": self.checksum,
            "arity": self.arity,
            **self.func_type.to_dict(),
        }


@dataclass(frozen=True)
class InterfaceExportDescriptor:
    name: str
    interface_id: int
    checksum: int
    type_tag: int
    functions: tuple[FunctionExportDescriptor, ...] = ()

    @property
    def function_count(self) -> int:
        return len(self.functions)

    def function(self, name: str) -> FunctionExportDescriptor | None:
        for fn in self.functions:
            if fn.name == name:
                return fn
        return None

    def find_function(self, function_id: int) -> FunctionExportDescriptor | None:
        for fn in self.functions:
            if fn.function_id == function_id:
                return fn
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "interface_id": self.interface_id,
            "checksum": self.checksum,
            "type_tag": self.type_tag,
            "functions": [fn.to_dict() for fn in self.functions],
        }


def check_unique(scope: str, field_name: str, values: list[int]) -> None:
    seen: set[int] = set()
    for value in values:
        if value in seen:
            raise DuplicateExportError(scope, field_name, value)
        seen.add(value)


def build_interface_descriptor(
    host_type: type,
    *,
    handles: HandleTable,
    sink: LogSink | None = None,
    config: LinkerConfig | None = None,
) -> InterfaceExportDescriptor:
    """Describe one host interface and generate a callback per exported function."""
    info = get_interface_info(host_type)
    type_tag = interface_type_tag(info.host_type)

    functions = tuple(
        FunctionExportDescriptor(
            name=fn.export_name,
            function_id=fn.function_id,
            checksum=fn.checksum,
            callback=generate_callback(
                fn,
                interface_name=info.export_name,
                type_tag=type_tag,
                handles=handles,
                sink=sink,
                config=config,
            ),
            func_type=fn.func_type,
        )
        for fn in info.functions
    )

    scope = f"interface '{info.export_name}'"
    check_unique(scope, "function id", [fn.function_id for fn in functions])
    check_unique(scope, "function checksum", [fn.checksum for fn in functions])

    return InterfaceExportDescriptor(
        name=info.export_name,
        interface_id=info.interface_id,
        checksum=info.checksum,
        type_tag=type_tag,
        functions=functions,
    )

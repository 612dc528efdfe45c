from __future__ import annotations

from wasm_host_linker.types import (
    LINKER_ABI_VERSION,
    LogLevel,
    ValueKind,
    TypedValue,
    FuncType,
    CallOutcome,
    HostCallback,
)
from wasm_host_linker.convert import extract, wrap
from wasm_host_linker.config import ErrorPolicy, LinkerConfig
from wasm_host_linker.errors import (
    LinkerError,
    ConfigurationError,
    InterfaceDefinitionError,
    DuplicateExportError,
    HostCallError,
    ArityError,
    InvalidHandleError,
    HandleTypeMismatchError,
    ResultConversionError,
)
from wasm_host_linker.sink import LogSink, MockLogSink, set_sink, get_sink
from wasm_host_linker.interface import (
    ExportedFunction,
    InterfaceInfo,
    export_function,
    export_interface,
    get_interface_info,
    interface_type_tag,
)
from wasm_host_linker.handles import HandleTable
from wasm_host_linker.callback import HostFunctionCallback, generate_callback
from wasm_host_linker.descriptor import (
    FunctionExportDescriptor,
    InterfaceExportDescriptor,
    build_interface_descriptor,
)
from wasm_host_linker.registry import ExportRegistry, InterfaceLinker, export_interfaces
from wasm_host_linker.binding import define_registry

__all__ = [
    "LINKER_ABI_VERSION",
    "LogLevel",
    "ValueKind",
    "TypedValue",
    "FuncType",
    "CallOutcome",
    "HostCallback",
    "extract",
    "wrap",
    "ErrorPolicy",
    "LinkerConfig",
    "LinkerError",
    "ConfigurationError",
    "InterfaceDefinitionError",
    "DuplicateExportError",
    "HostCallError",
    "ArityError",
    "InvalidHandleError",
    "HandleTypeMismatchError",
    "ResultConversionError",
    "LogSink",
    "MockLogSink",
    "set_sink",
    "get_sink",
    "ExportedFunction",
    "InterfaceInfo",
    "export_function",
    "export_interface",
    "get_interface_info",
    "interface_type_tag",
    "HandleTable",
    "HostFunctionCallback",
    "generate_callback",
    "FunctionExportDescriptor",
    "InterfaceExportDescriptor",
    "build_interface_descriptor",
    "ExportRegistry",
    "InterfaceLinker",
    "export_interfaces",
    "define_registry",
]

from __future__ import annotations

from collections.abc import MutableSequence, Sequence
from typing import Any

from wasm_host_linker.config import ErrorPolicy, LinkerConfig
from wasm_host_linker.convert import extract, wrap
from wasm_host_linker.errors import (
    ArityError,
    HandleTypeMismatchError,
    HostCallError,
    InvalidHandleError,
    ResultConversionError,
)
from wasm_host_linker.handles import HandleTable
from wasm_host_linker.interface import ExportedFunction
from wasm_host_linker.sink import Diagnostics, LogSink
from wasm_host_linker.types import CallOutcome, FuncType, Scalar, TypedValue, ValueKind


class HostFunctionCallback:
    """Uniform host callback for one exported function.

    Calling it with ``(context, func_type, inputs, outputs)`` resolves
    ``inputs[0]`` to a host instance, converts the remaining inputs to the
    declared parameter kinds, calls the method and stores its result in
    ``outputs[0]``. The callback holds no per-call state, so it may be shared
    across threads.
    """

    __slots__ = ("_function", "_qualified_name", "_type_tag", "_handles", "_log", "_config")

    def __init__(
        self,
        function: ExportedFunction,
        *,
        interface_name: str,
        type_tag: int,
        handles: HandleTable,
        diagnostics: Diagnostics,
        config: LinkerConfig,
    ) -> None:
        self._function = function
        self._qualified_name = f"{interface_name}#{function.export_name}"
        self._type_tag = type_tag
        self._handles = handles
        self._log = diagnostics
        self._config = config

    @property
    def name(self) -> str:
        return self._qualified_name

    @property
    def func_type(self) -> FuncType:
        return self._function.func_type

    @property
    def arity(self) -> int:
        return self._function.func_type.arity

    def __repr__(self) -> str:
        return f"<HostFunctionCallback {self._qualified_name} arity={self.arity}>"

    def __call__(
        self,
        context: Any,
        func_type: FuncType | None,
        inputs: Sequence[TypedValue],
        outputs: MutableSequence[TypedValue],
    ) -> CallOutcome:
        self._log.info(f"Generated callback {self._qualified_name} invoked with {len(inputs)} args")

        if len(inputs) < self.arity:
            return self._reject(ArityError(self._qualified_name, self.arity, len(inputs)))

        handle = extract(ValueKind.S64, inputs[0])
        entry = self._handles.resolve(handle)
        if entry is None:
            return self._reject(InvalidHandleError(self._qualified_name, handle))
        if self._config.verify_handle_type and entry.type_tag != self._type_tag:
            mismatch = HandleTypeMismatchError(self._qualified_name, handle, self._type_tag, entry.type_tag)
            return self._reject(mismatch, benign=False)

        self._log.trace(f"Instance handle: {handle:#x}")

        args: list[Scalar] = []
        for index, kind in enumerate(self.func_type.params, start=1):
            value = extract(kind, inputs[index])
            self._log.trace(f"Param {index - 1}: type={kind.wit_name}, value={value}")
            args.append(value)

        result = getattr(entry.instance, self._function.name)(*args)

        result_kind = self.func_type.result
        if result_kind is not None:
            self._log.trace(f"Function returned: {result}")
            try:
                value = wrap(result_kind, result)
            except (TypeError, ValueError, OverflowError):
                error = ResultConversionError(self._qualified_name, result_kind.wit_name, result)
                return self._reject(error, benign=False)
            if len(outputs) > 0:
                outputs[0] = value

        return CallOutcome.ok()

    def _reject(self, error: HostCallError, *, benign: bool = True) -> CallOutcome:
        self._log.error(str(error))
        policy = self._config.error_policy
        if policy is ErrorPolicy.RAISE:
            raise error
        if policy is ErrorPolicy.REPORT or not benign:
            return CallOutcome.fail(str(error))
        return CallOutcome.ok()


def generate_callback(
    function: ExportedFunction,
    *,
    interface_name: str,
    type_tag: int,
    handles: HandleTable,
    sink: LogSink | None = None,
    config: LinkerConfig | None = None,
) -> HostFunctionCallback:
    """Build the host callback for ``function`` from its declared signature."""
    config = config or LinkerConfig()
    return HostFunctionCallback(
        function,
        interface_name=interface_name,
        type_tag=type_tag,
        handles=handles,
        diagnostics=Diagnostics(sink, config.log_level),
        config=config,
    )

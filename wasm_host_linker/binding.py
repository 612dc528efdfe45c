"""
Installs an export registry into a component linker.

The linker is expected to follow the wasmtime-py component API::

    from wasmtime import Engine
    from wasmtime.component import Linker

    linker = Linker(Engine())
    define_registry(linker, link_interfaces(LINKER_ABI_VERSION))

Imported functions then receive ``(store, handle, *args)`` from the runtime
as plain Python values.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from wasm_host_linker.convert import extract, wrap
from wasm_host_linker.descriptor import FunctionExportDescriptor
from wasm_host_linker.errors import ArityError, HostCallError
from wasm_host_linker.registry import ExportRegistry
from wasm_host_linker.types import Scalar, TypedValue, ValueKind


def make_host_function(descriptor: FunctionExportDescriptor) -> Callable[..., Scalar | None]:
    """Adapt a descriptor's callback to the ``(store, *args)`` calling style."""
    func_type = descriptor.func_type
    callback = descriptor.callback

    def host_function(store: Any, *args: Scalar) -> Scalar | None:
        if len(args) > func_type.arity:
            raise ArityError(callback.name, func_type.arity, len(args))
        inputs = [wrap(ValueKind.U64, args[0])] if args else []
        inputs.extend(wrap(kind, value) for kind, value in zip(func_type.params, args[1:]))

        outputs: list[TypedValue] = []
        if func_type.result is not None:
            outputs.append(TypedValue(func_type.result, func_type.result.zero()))

        outcome = callback(store, func_type, inputs, outputs)
        if not outcome.succeeded:
            raise HostCallError(outcome.error)
        if func_type.result is None:
            return None
        return extract(func_type.result, outputs[0])

    host_function.__name__ = descriptor.name.replace("-", "_")
    host_function.__qualname__ = callback.name
    return host_function


def define_registry(linker: Any, registry: ExportRegistry) -> int:
    """Define every function of ``registry`` on ``linker``; returns the count."""
    defined = 0
    with linker.root() as root:
        for iface in registry:
            with root.add_instance(iface.name) as instance:
                for fn in iface.functions:
                    instance.add_func(fn.name, make_host_function(fn))
                    defined += 1
    return defined

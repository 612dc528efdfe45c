"""
Declaration side of host interfaces.

A host interface is a plain class whose exported member functions carry an
explicit signature::

    @export_interface("arieo:engine/counter@0.1.0")
    class Counter:
        @export_function(params=("s32",), result="u64")
        def add(self, amount: int) -> int:
            ...

        @export_function()
        def reset(self) -> None:
            ...

The decorators only record metadata; nothing about the class is changed
beyond the ``__interface_info__`` attribute.
"""

from __future__ import annotations

import re
import zlib
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, TypeVar

from wasm_host_linker.errors import InterfaceDefinitionError
from wasm_host_linker.types import FuncType, ValueKind

INTERFACE_INFO_ATTR = "__interface_info__"
FUNCTION_DECL_ATTR = "__export_function__"

T = TypeVar("T", bound=type)
F = TypeVar("F", bound=Callable[..., Any])

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def crc32_id(text: str) -> int:
    return zlib.crc32(text.encode("utf-8"))


def kebab_case(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("-", name).replace("_", "-").strip("-").lower()


@dataclass(frozen=True)
class FunctionDeclaration:
    func_type: FuncType
    export_name: str | None = None
    function_id: int | None = None
    checksum: int | None = None


@dataclass(frozen=True)
class ExportedFunction:
    method: Callable[..., Any]
    name: str
    export_name: str
    function_id: int
    checksum: int
    func_type: FuncType


@dataclass(frozen=True)
class InterfaceInfo:
    export_name: str
    interface_id: int
    checksum: int
    host_type: type
    functions: tuple[ExportedFunction, ...]

    @property
    def function_count(self) -> int:
        return len(self.functions)


def export_function(
    params: Iterable[ValueKind | str] = (),
    result: ValueKind | str | None = None,
    *,
    export_name: str | None = None,
    function_id: int | None = None,
    checksum: int | None = None,
) -> Callable[[F], F]:
    """Mark a method as exported with an explicit parameter and result list."""
    try:
        func_type = FuncType(
            params=tuple(ValueKind.parse(p) for p in params),
            result=ValueKind.parse(result) if result is not None else None,
        )
    except ValueError as exc:
        raise InterfaceDefinitionError(str(exc)) from exc

    if export_name is not None and not export_name:
        raise InterfaceDefinitionError("export_name must not be empty")

    decl = FunctionDeclaration(func_type, export_name, function_id, checksum)

    def decorator(method: F) -> F:
        setattr(method, FUNCTION_DECL_ATTR, decl)
        return method

    return decorator


def _collect_functions(cls: type) -> list[ExportedFunction]:
    # Walk base classes first so inherited declarations keep their position
    # and overrides replace them in place.
    found: dict[str, ExportedFunction] = {}
    for klass in reversed(cls.__mro__):
        for attr, member in vars(klass).items():
            decl = getattr(member, FUNCTION_DECL_ATTR, None)
            if not isinstance(decl, FunctionDeclaration):
                continue
            export_name = decl.export_name or kebab_case(attr)
            found[attr] = ExportedFunction(
                method=member,
                name=attr,
                export_name=export_name,
                function_id=decl.function_id if decl.function_id is not None else crc32_id(export_name),
                checksum=decl.checksum if decl.checksum is not None else crc32_id(decl.func_type.signature(export_name)),
                func_type=decl.func_type,
            )
    return list(found.values())


def export_interface(
    name: str,
    *,
    interface_id: int | None = None,
    checksum: int | None = None,
) -> Callable[[T], T]:
    """Mark a class as a host interface exported under ``name``."""
    if not name:
        raise InterfaceDefinitionError("Interface export name must not be empty")

    def decorator(cls: T) -> T:
        functions = _collect_functions(cls)
        if not functions:
            raise InterfaceDefinitionError(f"Interface '{name}' ({cls.__qualname__}) exports no functions")

        seen: set[str] = set()
        for fn in functions:
            if fn.export_name in seen:
                raise InterfaceDefinitionError(f"Interface '{name}' exports '{fn.export_name}' more than once")
            seen.add(fn.export_name)

        if checksum is None:
            signatures = ";".join(fn.func_type.signature(fn.export_name) for fn in functions)
            resolved_checksum = crc32_id(f"{name};{signatures}")
        else:
            resolved_checksum = checksum

        info = InterfaceInfo(
            export_name=name,
            interface_id=interface_id if interface_id is not None else crc32_id(name),
            checksum=resolved_checksum,
            host_type=cls,
            functions=tuple(functions),
        )
        setattr(cls, INTERFACE_INFO_ATTR, info)
        return cls

    return decorator


def find_interface_type(cls: type) -> type | None:
    """Return the nearest class in ``cls``'s MRO declared with ``export_interface``."""
    for klass in cls.__mro__:
        if isinstance(vars(klass).get(INTERFACE_INFO_ATTR), InterfaceInfo):
            return klass
    return None


def get_interface_info(cls: type) -> InterfaceInfo:
    host_type = find_interface_type(cls) if isinstance(cls, type) else None
    if host_type is None:
        raise InterfaceDefinitionError(f"{cls!r} is not declared with @export_interface")
    return vars(host_type)[INTERFACE_INFO_ATTR]


def interface_type_tag(host_type: type) -> int:
    """Stable structural tag for a host type.

    Derived from the qualified name and the export name, so classes sharing a
    qualified name (factory-made or redefined) still get distinct tags.
    """
    info = vars(host_type).get(INTERFACE_INFO_ATTR)
    export_name = info.export_name if isinstance(info, InterfaceInfo) else ""
    return crc32_id(f"{host_type.__module__}.{host_type.__qualname__}:{export_name}")

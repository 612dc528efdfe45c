from __future__ import annotations

import json
import threading
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from wasm_host_linker.config import LinkerConfig
from wasm_host_linker.descriptor import (
    FunctionExportDescriptor,
    InterfaceExportDescriptor,
    check_unique,
    build_interface_descriptor,
)
from wasm_host_linker.handles import HandleTable
from wasm_host_linker.sink import Diagnostics, LogSink
from wasm_host_linker.types import LINKER_ABI_VERSION


@dataclass(frozen=True)
class ExportRegistry:
    """The complete export table a linked module hands to its loader."""

    interfaces: tuple[InterfaceExportDescriptor, ...] = ()
    abi_version: int = LINKER_ABI_VERSION

    def __len__(self) -> int:
        return len(self.interfaces)

    def __iter__(self) -> Iterator[InterfaceExportDescriptor]:
        return iter(self.interfaces)

    def interface(self, name: str) -> InterfaceExportDescriptor | None:
        for iface in self.interfaces:
            if iface.name == name:
                return iface
        return None

    def find_interface(self, interface_id: int) -> InterfaceExportDescriptor | None:
        for iface in self.interfaces:
            if iface.interface_id == interface_id:
                return iface
        return None

    def function(self, interface_id: int, function_id: int) -> FunctionExportDescriptor | None:
        iface = self.find_interface(interface_id)
        if iface is None:
            return None
        return iface.find_function(function_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "abi_version": self.abi_version,
            "interfaces": [iface.to_dict() for iface in self.interfaces],
        }

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), indent=indent)


class InterfaceLinker:
    """Assembles the export registry for a fixed list of host interface types.

    The registry is built once, by :meth:`initialize` or by the first
    :meth:`link_interfaces` call, and the same object is returned from then
    on.
    """

    def __init__(
        self,
        interface_types: Iterable[type],
        *,
        handles: HandleTable | None = None,
        sink: LogSink | None = None,
        config: LinkerConfig | None = None,
    ) -> None:
        self._interface_types = tuple(interface_types)
        self._handles = handles if handles is not None else HandleTable()
        self._sink = sink
        self._config = config or LinkerConfig()
        self._log = Diagnostics(sink, self._config.log_level)
        self._registry: ExportRegistry | None = None
        self._lock = threading.Lock()

    @property
    def interface_types(self) -> tuple[type, ...]:
        return self._interface_types

    @property
    def handles(self) -> HandleTable:
        return self._handles

    @property
    def config(self) -> LinkerConfig:
        return self._config

    @property
    def initialized(self) -> bool:
        return self._registry is not None

    def initialize(self) -> ExportRegistry:
        registry = self._registry
        if registry is not None:
            return registry
        with self._lock:
            if self._registry is None:
                self._registry = self._build()
            return self._registry

    def _build(self) -> ExportRegistry:
        interfaces = tuple(
            build_interface_descriptor(
                host_type,
                handles=self._handles,
                sink=self._sink,
                config=self._config,
            )
            for host_type in self._interface_types
        )
        check_unique("export registry", "interface id", [iface.interface_id for iface in interfaces])
        check_unique("export registry", "interface checksum", [iface.checksum for iface in interfaces])
        check_unique("export registry", "type tag", [iface.type_tag for iface in interfaces])

        function_count = sum(iface.function_count for iface in interfaces)
        self._log.info(f"Built export registry with {len(interfaces)} interfaces and {function_count} functions")
        return ExportRegistry(interfaces=interfaces)

    def link_interfaces(self, version_checksum: int) -> ExportRegistry:
        """Versioned entry point resolved by the loader.

        ``version_checksum`` is only recorded; comparing it against the
        registry's ABI version is the loader's job.
        """
        registry = self.initialize()
        self._log.trace(f"link_interfaces called with version checksum {version_checksum:#x}")
        return registry


def export_interfaces(
    *interface_types: type,
    handles: HandleTable | None = None,
    sink: LogSink | None = None,
    config: LinkerConfig | None = None,
) -> Callable[[int], ExportRegistry]:
    """Return the ``link_interfaces`` entry point for ``interface_types``."""
    linker = InterfaceLinker(interface_types, handles=handles, sink=sink, config=config)
    return linker.link_interfaces

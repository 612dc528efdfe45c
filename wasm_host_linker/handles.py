from __future__ import annotations

import itertools
import threading
from typing import Any, NamedTuple

from wasm_host_linker.errors import InterfaceDefinitionError
from wasm_host_linker.interface import find_interface_type, interface_type_tag


class HandleEntry(NamedTuple):
    instance: Any
    type_tag: int


class HandleTable:
    """Maps opaque 64-bit instance handles to host objects and their type tags.

    Handles are issued from 1 upwards and never reused, so a stale handle
    resolves to nothing instead of to whatever object took its place.
    """

    def __init__(self) -> None:
        self._entries: dict[int, HandleEntry] = {}
        self._counter = itertools.count(1)
        self._lock = threading.Lock()

    def register(self, instance: Any, type_tag: int | None = None) -> int:
        if type_tag is None:
            host_type = find_interface_type(type(instance))
            if host_type is None:
                raise InterfaceDefinitionError(
                    f"{type(instance).__qualname__} does not implement an exported interface; pass type_tag="
                )
            type_tag = interface_type_tag(host_type)
        with self._lock:
            handle = next(self._counter)
            self._entries[handle] = HandleEntry(instance, type_tag)
        return handle

    def resolve(self, handle: int) -> HandleEntry | None:
        if not handle:
            return None
        return self._entries.get(handle)

    def release(self, handle: int) -> bool:
        with self._lock:
            return self._entries.pop(handle, None) is not None

    def __contains__(self, handle: object) -> bool:
        return handle in self._entries

    def __len__(self) -> int:
        return len(self._entries)

from __future__ import annotations

import pytest

from conftest import Counter, Transform
from wasm_host_linker.descriptor import build_interface_descriptor
from wasm_host_linker.errors import DuplicateExportError, InterfaceDefinitionError
from wasm_host_linker.handles import HandleTable
from wasm_host_linker.interface import export_function, export_interface, get_interface_info, interface_type_tag
from wasm_host_linker.types import TypedValue


class TestBuildInterfaceDescriptor:
    def test_one_descriptor_per_function(self, handles: HandleTable) -> None:
        desc = build_interface_descriptor(Counter, handles=handles)
        info = get_interface_info(Counter)
        assert desc.function_count == info.function_count == 3
        for fn, declared in zip(desc.functions, info.functions):
            assert fn.name
            assert fn.name == declared.export_name
            assert fn.arity == 1 + declared.func_type.param_count
            assert fn.callback.arity == fn.arity

    def test_interface_fields(self, handles: HandleTable) -> None:
        desc = build_interface_descriptor(Transform, handles=handles)
        info = get_interface_info(Transform)
        assert desc.name == "arieo:engine/transform@0.1.0"
        assert desc.interface_id == info.interface_id
        assert desc.checksum == info.checksum
        assert desc.type_tag == interface_type_tag(Transform)

    def test_unique_ids_and_checksums(self, handles: HandleTable) -> None:
        desc = build_interface_descriptor(Counter, handles=handles)
        assert len({fn.function_id for fn in desc.functions}) == desc.function_count
        assert len({fn.checksum for fn in desc.functions}) == desc.function_count

    def test_lookup(self, handles: HandleTable) -> None:
        desc = build_interface_descriptor(Counter, handles=handles)
        add = desc.function("add")
        assert add is not None
        assert desc.find_function(add.function_id) is add
        assert desc.function("missing") is None
        assert desc.find_function(0) is None

    def test_callbacks_are_bound(self, handles: HandleTable) -> None:
        desc = build_interface_descriptor(Counter, handles=handles)
        counter = Counter()
        handle = handles.register(counter)
        add = desc.function("add")
        outputs = [TypedValue.s32(0)]
        assert add.callback(None, add.func_type, [TypedValue.s64(handle), TypedValue.s32(5)], outputs).succeeded
        assert outputs[0] == TypedValue.u64(5)

    def test_duplicate_function_ids(self, handles: HandleTable) -> None:
        @export_interface("test:pkg/clash@1.0.0")
        class Clash:
            @export_function(function_id=7)
            def one(self) -> None:
                pass

            @export_function(function_id=7)
            def two(self) -> None:
                pass

        with pytest.raises(DuplicateExportError, match="function id 0x7"):
            build_interface_descriptor(Clash, handles=handles)

    def test_duplicate_function_checksums(self, handles: HandleTable) -> None:
        @export_interface("test:pkg/clash@1.0.0")
        class Clash:
            @export_function(checksum=3)
            def one(self) -> None:
                pass

            @export_function(checksum=3)
            def two(self) -> None:
                pass

        with pytest.raises(DuplicateExportError) as exc_info:
            build_interface_descriptor(Clash, handles=handles)
        assert exc_info.value.field == "function checksum"

    def test_undeclared_type(self, handles: HandleTable) -> None:
        with pytest.raises(InterfaceDefinitionError):
            build_interface_descriptor(object, handles=handles)

    def test_to_dict(self, handles: HandleTable) -> None:
        d = build_interface_descriptor(Counter, handles=handles).to_dict()
        assert d["name"] == "arieo:engine/counter@0.1.0"
        assert d["functions"][0] == {
            "name": "add",
            "function_id": get_interface_info(Counter).functions[0].function_id,
            "checksum": get_interface_info(Counter).functions[0].checksum,
            "arity": 2,
            "params": ["s32"],
            "result": "u64",
        }

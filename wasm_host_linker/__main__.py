"""
Command line tools for wasm-host-linker.

Usage:
    python -m wasm_host_linker manifest my_module:INTERFACES
    python -m wasm_host_linker manifest my_module:linker --indent 2

``ATTR`` may name a sequence of interface types or an ``InterfaceLinker``.
"""

from __future__ import annotations

import argparse
import importlib
import sys
from collections.abc import Sequence
from typing import Any

from wasm_host_linker.errors import LinkerError
from wasm_host_linker.registry import ExportRegistry, InterfaceLinker
from wasm_host_linker.types import LINKER_ABI_VERSION


def load_target(target: str) -> Any:
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"Target must look like 'module:attribute', got '{target}'")
    module = importlib.import_module(module_name)
    obj: Any = module
    for part in attr.split("."):
        obj = getattr(obj, part)
    return obj


def build_registry(target: Any) -> ExportRegistry:
    if isinstance(target, InterfaceLinker):
        return target.link_interfaces(LINKER_ABI_VERSION)
    if isinstance(target, type):
        target = [target]
    return InterfaceLinker(target).link_interfaces(LINKER_ABI_VERSION)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="wasm_host_linker", description="Inspect host interface export tables")
    commands = parser.add_subparsers(dest="command", required=True)

    manifest = commands.add_parser("manifest", help="Print the export registry of a set of interfaces as JSON")
    manifest.add_argument("target", help="module:attribute naming interface types or an InterfaceLinker")
    manifest.add_argument("--indent", type=int, default=2, help="JSON indentation (default: 2)")

    args = parser.parse_args(argv)

    try:
        registry = build_registry(load_target(args.target))
    except (ImportError, AttributeError, ValueError, TypeError, LinkerError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(registry.to_json(indent=args.indent))
    return 0


if __name__ == "__main__":
    sys.exit(main())

from __future__ import annotations


class LinkerError(Exception):
    pass


class ConfigurationError(LinkerError):
    pass


class InterfaceDefinitionError(LinkerError):
    pass


class DuplicateExportError(InterfaceDefinitionError):
    def __init__(self, scope: str, field: str, value: int):
        self.scope = scope
        self.field = field
        self.value = value
        super().__init__(f"Duplicate {field} {value:#x} in {scope}")


class HostCallError(LinkerError):
    pass


class ArityError(HostCallError):
    def __init__(self, function: str, expected: int, received: int):
        self.function = function
        self.expected = expected
        self.received = received
        super().__init__(f"Insufficient arguments for '{function}': expected {expected}, got {received}")


class InvalidHandleError(HostCallError):
    def __init__(self, function: str, handle: int):
        self.function = function
        self.handle = handle
        super().__init__(f"Invalid instance handle for '{function}': {handle}")


class HandleTypeMismatchError(HostCallError):
    def __init__(self, function: str, handle: int, expected_tag: int, actual_tag: int):
        self.function = function
        self.handle = handle
        self.expected_tag = expected_tag
        self.actual_tag = actual_tag
        super().__init__(
            f"Instance handle {handle} for '{function}' has type tag {actual_tag:#010x}, "
            f"expected {expected_tag:#010x}"
        )


class ResultConversionError(HostCallError):
    def __init__(self, function: str, result_kind: str, result: object):
        self.function = function
        self.result_kind = result_kind
        self.result = result
        super().__init__(f"Cannot convert result of '{function}' to {result_kind}: {result!r}")


__all__ = [
    "LinkerError",
    "ConfigurationError",
    "InterfaceDefinitionError",
    "DuplicateExportError",
    "HostCallError",
    "ArityError",
    "InvalidHandleError",
    "HandleTypeMismatchError",
    "ResultConversionError",
]

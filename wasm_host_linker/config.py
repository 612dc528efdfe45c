from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum

from wasm_host_linker.errors import ConfigurationError
from wasm_host_linker.types import LogLevel

ERROR_POLICY_ENV = "WASM_HOST_LINKER_ERROR_POLICY"
LOG_LEVEL_ENV = "WASM_HOST_LINKER_LOG_LEVEL"


class ErrorPolicy(str, Enum):
    """How a callback reports calls it cannot dispatch."""

    SWALLOW = "swallow"
    REPORT = "report"
    RAISE = "raise"


@dataclass(frozen=True)
class LinkerConfig:
    error_policy: ErrorPolicy = ErrorPolicy.SWALLOW
    log_level: LogLevel = LogLevel.INFO
    verify_handle_type: bool = True

    @classmethod
    def from_env(
        cls,
        error_policy: ErrorPolicy | str | None = None,
        log_level: LogLevel | str | None = None,
        *,
        verify_handle_type: bool = True,
    ) -> LinkerConfig:
        policy = error_policy or os.environ.get(ERROR_POLICY_ENV)
        level = log_level if log_level is not None else (os.environ.get(LOG_LEVEL_ENV) or None)
        return cls(
            error_policy=resolve_error_policy(policy) if policy else ErrorPolicy.SWALLOW,
            log_level=resolve_log_level(level) if level is not None else LogLevel.INFO,
            verify_handle_type=verify_handle_type,
        )


def resolve_error_policy(value: ErrorPolicy | str) -> ErrorPolicy:
    if isinstance(value, ErrorPolicy):
        return value
    try:
        return ErrorPolicy(value.strip().lower())
    except ValueError:
        allowed = ", ".join(p.value for p in ErrorPolicy)
        raise ConfigurationError(f"Unknown error policy '{value}'. Must be one of: {allowed}.") from None


def resolve_log_level(value: LogLevel | int | str) -> LogLevel:
    if isinstance(value, LogLevel):
        return value
    if isinstance(value, int):
        try:
            return LogLevel(value)
        except ValueError:
            raise ConfigurationError(f"Unknown log level {value}.") from None
    name = value.strip().upper()
    if name.isdigit():
        return resolve_log_level(int(name))
    if name == "WARNING":
        name = "WARN"
    try:
        return LogLevel[name]
    except KeyError:
        allowed = ", ".join(level.name for level in LogLevel)
        raise ConfigurationError(f"Unknown log level '{value}'. Must be one of: {allowed}.") from None


__all__ = [
    "ERROR_POLICY_ENV",
    "LOG_LEVEL_ENV",
    "ErrorPolicy",
    "LinkerConfig",
    "resolve_error_policy",
    "resolve_log_level",
]

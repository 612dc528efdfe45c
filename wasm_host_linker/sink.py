from __future__ import annotations

from wasm_host_linker.types import LogLevel


class LogSink:
    """Destination for linker diagnostics. The base sink discards everything."""

    def log(self, level: int, message: str) -> None:
        pass


class MockLogSink(LogSink):
    """Log sink for local testing with captured messages."""

    def __init__(self) -> None:
        self.logs: list[tuple[int, str]] = []

    def log(self, level: int, message: str) -> None:
        self.logs.append((level, message))

    def messages(self, level: int | None = None) -> list[str]:
        return [m for lvl, m in self.logs if level is None or lvl == level]

    def clear(self) -> None:
        self.logs.clear()


class Diagnostics:
    """Level-gated front end over a sink."""

    def __init__(self, sink: LogSink | None = None, level: int = LogLevel.INFO) -> None:
        self._sink = sink
        self.level = level

    @property
    def sink(self) -> LogSink:
        return self._sink if self._sink is not None else _sink

    def enabled(self, level: int) -> bool:
        return level >= self.level

    def trace(self, message: str) -> None:
        if self.enabled(LogLevel.TRACE):
            self.sink.log(LogLevel.TRACE, message)

    def debug(self, message: str) -> None:
        if self.enabled(LogLevel.DEBUG):
            self.sink.log(LogLevel.DEBUG, message)

    def info(self, message: str) -> None:
        if self.enabled(LogLevel.INFO):
            self.sink.log(LogLevel.INFO, message)

    def warn(self, message: str) -> None:
        if self.enabled(LogLevel.WARN):
            self.sink.log(LogLevel.WARN, message)

    def error(self, message: str) -> None:
        if self.enabled(LogLevel.ERROR):
            self.sink.log(LogLevel.ERROR, message)


_sink: LogSink = LogSink()


def set_sink(sink: LogSink) -> None:
    global _sink
    _sink = sink


def get_sink() -> LogSink:
    return _sink

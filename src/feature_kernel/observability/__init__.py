from .adapters import JsonlLogSink, LogSink, MemoryLogSink, NullLogSink, StdoutLogSink
from .domain import LogMessage

__all__ = [
    "LogMessage",
    "LogSink",
    "NullLogSink",
    "StdoutLogSink",
    "JsonlLogSink",
    "MemoryLogSink",
]

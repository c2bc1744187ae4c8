from .logging import (
    JsonlLogSink,
    LogSink,
    MemoryLogSink,
    NullLogSink,
    StdoutLogSink,
    log_jsonl,
    log_stdout,
)

__all__ = [
    "LogSink",
    "NullLogSink",
    "StdoutLogSink",
    "JsonlLogSink",
    "MemoryLogSink",
    "log_stdout",
    "log_jsonl",
]

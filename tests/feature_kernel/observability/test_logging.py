from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path

import pytest

from feature_kernel.observability.adapters.logging import (
    JsonlLogSink,
    LogSink,
    MemoryLogSink,
    NullLogSink,
    StdoutLogSink,
    log_jsonl,
)
from feature_kernel.observability.domain.logging import LogMessage


def _message() -> LogMessage:
    return LogMessage(
        level="warning",
        message="step undefined",
        timestamp=datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC),
        fields={"step": "I have 42 cukes"},
    )


def test_log_message_requires_level_and_message() -> None:
    with pytest.raises(ValueError):
        LogMessage(level="", message="")


def test_log_message_rejects_unknown_level() -> None:
    with pytest.raises(ValueError):
        LogMessage(level="loud", message="x")


def test_stdout_sink_prints_compact_json(capsys: pytest.CaptureFixture[str]) -> None:
    StdoutLogSink().emit(_message())
    line = capsys.readouterr().out.strip()
    assert json.loads(line) == {
        "level": "warning",
        "message": "step undefined",
        "timestamp": "2024-01-02T03:04:05Z",
        "fields": {"step": "I have 42 cukes"},
    }
    assert ", " not in line


def test_jsonl_sink_appends_lines(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "log.jsonl"
    sink = JsonlLogSink(path)
    sink.emit(_message())
    sink.emit(LogMessage(level="debug", message="walk finished"))
    sink.close()
    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert json.loads(lines[1])["message"] == "walk finished"


def test_log_jsonl_factory_requires_path() -> None:
    with pytest.raises(ValueError):
        log_jsonl({})


def test_sinks_satisfy_protocol() -> None:
    memory = MemoryLogSink()
    memory.emit(_message())
    assert memory.messages == [_message()]
    for sink in (NullLogSink(), StdoutLogSink(), memory):
        assert isinstance(sink, LogSink)

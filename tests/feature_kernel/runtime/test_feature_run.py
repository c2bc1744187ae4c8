from __future__ import annotations

import asyncio
import json
from pathlib import Path

import pytest

from feature_kernel.ast.parser import LexerEventHandler
from feature_kernel.config.validator import RunConfig
from feature_kernel.kernel.listener import BaseListener
from feature_kernel.listeners.progress import ProgressFormatter
from feature_kernel.observability.adapters.logging import JsonlLogSink, MemoryLogSink
from feature_kernel.observability.domain.logging import LogMessage
from feature_kernel.runtime.run import START_MISSING_CALLBACK_ERROR, FeatureRun, MissingCallbackError
from feature_kernel.support_code.library import StepRegistrar

_SCRIPT = [
    ("feature", ("Feature", "Cukes", "", 1)),
    ("scenario", ("Scenario", "Counting", "", 2)),
    ("step", ("Given ", "I have 42 cukes", 3)),
    ("step", ("Then ", "I should be happy", 4)),
    ("eof", ()),
]


class _ScriptedLexer:
    def __init__(self, handler: LexerEventHandler) -> None:
        self._handler = handler

    def scan(self, source: str) -> None:
        _ = source
        for event, args in _SCRIPT:
            getattr(self._handler, event)(*args)


def _support(counts: list[str]):
    def support(steps: StepRegistrar) -> None:
        @steps.given(r"^I have (\d+) cukes$")
        def have(count: str, done) -> None:
            counts.append(count)
            done()

    return support


def test_start_requires_a_callback() -> None:
    run = FeatureRun("", _support([]), lexer_factory=_ScriptedLexer)
    with pytest.raises(MissingCallbackError) as info:
        run.start(None)  # type: ignore[arg-type]
    assert str(info.value) == START_MISSING_CALLBACK_ERROR
    assert isinstance(info.value, TypeError)


def test_start_walks_features_then_calls_back() -> None:
    counts: list[str] = []
    finished: list[bool] = []
    formatter = ProgressFormatter()
    run = FeatureRun("source", _support(counts), lexer_factory=_ScriptedLexer)
    run.attach_listener(formatter)

    run.start(lambda: finished.append(True))

    assert finished == [True]
    assert counts == ["42"]
    assert formatter.get_logs().startswith(".U")
    assert not formatter.features_passed()


def test_attach_listener_rejects_objects_without_hear_methods() -> None:
    run = FeatureRun("", _support([]), lexer_factory=_ScriptedLexer)
    with pytest.raises(TypeError):
        run.attach_listener(object())  # type: ignore[arg-type]


def test_run_logs_setup_and_walk_with_configured_policy() -> None:
    class _Broken(BaseListener):
        def hear_step_result(self, step_result) -> None:
            raise RuntimeError("broken reporter")

    sink = MemoryLogSink()
    run = FeatureRun(
        "source",
        _support([]),
        lexer_factory=_ScriptedLexer,
        config=RunConfig(listener_errors="isolate"),
        log_sink=sink,
    )
    run.attach_listener(_Broken())
    asyncio.run(run.run())

    messages = [message.message for message in sink.messages]
    assert messages[:2] == ["features parsed", "support code loaded"]
    assert messages.count("listener failed") == 2
    assert messages[-1] == "walk finished"
    assert sink.messages[1].fields == {"step_definitions": 1}


def test_fail_fast_policy_propagates_listener_errors() -> None:
    class _Broken(BaseListener):
        def hear_before_features(self) -> None:
            raise RuntimeError("broken reporter")

    finished: list[bool] = []
    run = FeatureRun("source", _support([]), lexer_factory=_ScriptedLexer)
    run.attach_listener(_Broken())
    with pytest.raises(RuntimeError, match="broken reporter"):
        run.start(lambda: finished.append(True))
    assert finished == []


class _ClosingSink(MemoryLogSink):
    def __init__(self) -> None:
        super().__init__()
        self.closed = 0

    def close(self) -> None:
        self.closed += 1


def test_run_closes_its_log_sink_at_the_end() -> None:
    sink = _ClosingSink()
    run = FeatureRun("source", _support([]), lexer_factory=_ScriptedLexer, log_sink=sink)
    run.start(lambda: None)
    assert sink.closed == 1
    assert sink.messages[-1].message == "walk finished"


def test_log_sink_is_closed_when_the_walk_aborts() -> None:
    class _Broken(BaseListener):
        def hear_before_features(self) -> None:
            raise RuntimeError("broken reporter")

    sink = _ClosingSink()
    run = FeatureRun("source", _support([]), lexer_factory=_ScriptedLexer, log_sink=sink)
    run.attach_listener(_Broken())
    with pytest.raises(RuntimeError):
        asyncio.run(run.run())
    assert sink.closed == 1


def test_jsonl_log_file_is_complete_after_run(tmp_path: Path) -> None:
    path = tmp_path / "logs" / "run.jsonl"
    sink = JsonlLogSink(path)
    run = FeatureRun("source", _support([]), lexer_factory=_ScriptedLexer, log_sink=sink)
    run.start(lambda: None)

    records = [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]
    assert records[0]["message"] == "features parsed"
    assert records[-1]["message"] == "walk finished"
    # Handle is released; a further emit has nowhere to go.
    with pytest.raises(ValueError):
        sink.emit(LogMessage(level="info", message="late"))

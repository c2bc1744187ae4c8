from __future__ import annotations

import asyncio
import inspect
import re
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from feature_kernel.support_code.step_result import StepResult

if TYPE_CHECKING:
    from feature_kernel.ast.nodes import DocString

# User step code: (*captures, [doc_string_content], done) -> None | Awaitable.
StepCallback = Callable[..., object]
StepError = BaseException | str


class StepDefinitionError(ValueError):
    # Raised for invalid registrations (fail fast at setup time).
    pass


@dataclass(slots=True)
class StepCompletion:
    # Continuation handed to user step code as its last argument.
    # done() signals success, done(error) signals failure; the first call wins when it is made,
    # even if it comes from another thread and settles on the loop later.
    _loop: asyncio.AbstractEventLoop
    _future: asyncio.Future[StepError | None] = field(init=False)
    _lock: threading.Lock = field(init=False, default_factory=threading.Lock)
    _signalled: bool = field(init=False, default=False)

    def __post_init__(self) -> None:
        self._future = self._loop.create_future()

    def __call__(self, error: StepError | None = None) -> None:
        with self._lock:
            if self._signalled:
                return
            self._signalled = True
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is self._loop:
            self._settle(error)
        else:
            # Step code finished on a foreign thread.
            self._loop.call_soon_threadsafe(self._settle, error)

    def fail(self, error: StepError = "step failed") -> None:
        self(error)

    async def wait(self) -> StepError | None:
        return await self._future

    def _settle(self, error: StepError | None) -> None:
        if self._future.done():
            return
        self._future.set_result(error)


@dataclass(frozen=True, slots=True)
class StepDefinition:
    pattern: re.Pattern[str]
    callback: StepCallback

    @classmethod
    def create(cls, pattern: str | re.Pattern[str], callback: StepCallback) -> StepDefinition:
        if isinstance(pattern, str):
            try:
                compiled = re.compile(pattern)
            except re.error as exc:
                raise StepDefinitionError(f"Invalid step pattern {pattern!r}: {exc}") from exc
        elif isinstance(pattern, re.Pattern):
            compiled = pattern
        else:
            raise StepDefinitionError("Step pattern must be a string or a compiled regular expression")
        if not callable(callback):
            raise StepDefinitionError(f"Step callback for {compiled.pattern!r} must be callable")
        return cls(pattern=compiled, callback=callback)

    def matches(self, name: str) -> bool:
        return self.pattern.search(name) is not None

    def build_invocation_parameters(
        self,
        name: str,
        doc_string: DocString | None,
        done: StepCompletion,
    ) -> list[object]:
        # Captures in group order, then doc string content, then the continuation.
        match = self.pattern.search(name)
        if match is None:
            raise StepDefinitionError(f"Step {name!r} does not match {self.pattern.pattern!r}")
        parameters: list[object] = list(match.groups())
        if doc_string is not None:
            parameters.append(doc_string.content)
        parameters.append(done)
        return parameters

    async def invoke(self, name: str, doc_string: DocString | None = None) -> StepResult:
        done = StepCompletion(asyncio.get_running_loop())
        parameters = self.build_invocation_parameters(name, doc_string, done)
        try:
            returned = self.callback(*parameters)
            if inspect.isawaitable(returned):
                await returned
                # Coroutine step code completes on return unless it already called done.
                done()
        except Exception as exc:  # noqa: BLE001 - step failures become results, not raises
            return StepResult.failed(name, exc)
        # Suspends until user code calls done; no timeout is imposed.
        error = await done.wait()
        if error is not None:
            return StepResult.failed(name, error)
        return StepResult.passed(name)

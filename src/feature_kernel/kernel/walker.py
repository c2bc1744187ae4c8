from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Literal, Protocol

from feature_kernel.ast.nodes import Feature, Features, Node, Scenario, Step
from feature_kernel.kernel.events import FEATURE, FEATURES, SCENARIO, STEP, STEP_RESULT, Event
from feature_kernel.kernel.listener import Listener
from feature_kernel.observability.adapters.logging import LogSink, NullLogSink
from feature_kernel.observability.domain.logging import LogMessage
from feature_kernel.support_code.step_definition import StepDefinition
from feature_kernel.support_code.step_result import StepResult, StepStatus
from feature_kernel.types.sequence import ItemSequence

ListenerErrorPolicy = Literal["fail_fast", "isolate"]
LISTENER_ERROR_POLICIES: tuple[str, ...] = ("fail_fast", "isolate")


class StepDefinitionSource(Protocol):
    def lookup_step_definition_by_name(self, name: str) -> StepDefinition | None:
        raise NotImplementedError("StepDefinitionSource.lookup_step_definition_by_name must be implemented")


@dataclass(slots=True)
class TreeWalker:
    # Depth-first walk of the AST, wrapping each node in a Before/After broadcast.
    # Holds non-owning references to the registry and the listener set.
    # The walk position lives in the await chain; nothing here changes while walking.
    features: Features
    support_code_library: StepDefinitionSource
    listeners: ItemSequence[Listener] = field(default_factory=ItemSequence)
    listener_errors: ListenerErrorPolicy = "fail_fast"
    log_sink: LogSink = field(default_factory=NullLogSink)

    def __post_init__(self) -> None:
        if self.listener_errors not in LISTENER_ERROR_POLICIES:
            raise ValueError(f"listener_errors must be one of: {list(LISTENER_ERROR_POLICIES)}")

    async def walk(self) -> None:
        self._log("debug", "walk started", features=len(self.features.features), listeners=len(self.listeners))
        await self.visit(self.features)
        self._log("debug", "walk finished")

    async def visit(self, node: Node) -> None:
        # Single dispatch over the closed set of node kinds.
        if isinstance(node, Features):
            event = Event(FEATURES)
        elif isinstance(node, Feature):
            event = Event(FEATURE, (node,))
        elif isinstance(node, Scenario):
            event = Event(SCENARIO, (node,))
        elif isinstance(node, Step):
            event = Event(STEP, (node,))
        else:
            raise TypeError(f"Cannot visit {type(node).__name__}")
        await self.broadcast_around(event, lambda: node.accept_visitor(self))

    async def visit_features(self, features: Features) -> None:
        await self.visit(features)

    async def visit_feature(self, feature: Feature) -> None:
        await self.visit(feature)

    async def visit_scenario(self, scenario: Scenario) -> None:
        await self.visit(scenario)

    async def visit_step(self, step: Step) -> None:
        await self.visit(step)

    async def visit_step_result(self, step_result: StepResult) -> None:
        # A result is a point in time: one notification, no before/after pair.
        if step_result.status is StepStatus.UNDEFINED:
            self._log("warning", "step undefined", step=step_result.step_name)
        elif step_result.status is StepStatus.FAILED:
            self._log("error", "step failed", step=step_result.step_name, error=_describe(step_result.error))
        self.broadcast(Event(STEP_RESULT, (step_result,)))

    async def broadcast_around(self, event: Event, inner: Callable[[], Awaitable[object]]) -> None:
        # inner must only return once all of its own async work (child visits) is done.
        self.broadcast(event.before())
        await inner()
        self.broadcast(event.after())

    def broadcast(self, event: Event) -> None:
        # Listeners are notified in registration order, one at a time.
        method_name = event.hear_method

        def _notify(listener: Listener) -> None:
            if self.listener_errors == "fail_fast":
                getattr(listener, method_name)(*event.payload)
                return
            try:
                getattr(listener, method_name)(*event.payload)
            except Exception as exc:  # noqa: BLE001 - isolate policy: log and keep notifying
                self._log(
                    "error",
                    "listener failed",
                    listener=type(listener).__name__,
                    event=event.name,
                    error=_describe(exc),
                )

        self.listeners.for_each_sync(_notify)

    def lookup_step_definition_by_name(self, name: str) -> StepDefinition | None:
        # Indirection keeps the registry out of the AST.
        return self.support_code_library.lookup_step_definition_by_name(name)

    def _log(self, level: str, message: str, **fields: object) -> None:
        self.log_sink.emit(LogMessage(level=level, message=message, fields=dict(fields)))


def _describe(error: BaseException | str | None) -> str | None:
    if error is None:
        return None
    if isinstance(error, BaseException):
        return f"{type(error).__name__}: {error}"
    return error

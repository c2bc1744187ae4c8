from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from feature_kernel.ast.nodes import Feature, Scenario, Step
    from feature_kernel.support_code.step_result import StepResult


@runtime_checkable
class Listener(Protocol):
    # Passive observer of the walk. Every hear_* call is synchronous; the walker does not wait on it.
    def hear_before_features(self) -> None:
        raise NotImplementedError("Listener.hear_before_features must be implemented")

    def hear_after_features(self) -> None:
        raise NotImplementedError("Listener.hear_after_features must be implemented")

    def hear_before_feature(self, feature: Feature) -> None:
        raise NotImplementedError("Listener.hear_before_feature must be implemented")

    def hear_after_feature(self, feature: Feature) -> None:
        raise NotImplementedError("Listener.hear_after_feature must be implemented")

    def hear_before_scenario(self, scenario: Scenario) -> None:
        raise NotImplementedError("Listener.hear_before_scenario must be implemented")

    def hear_after_scenario(self, scenario: Scenario) -> None:
        raise NotImplementedError("Listener.hear_after_scenario must be implemented")

    def hear_before_step(self, step: Step) -> None:
        raise NotImplementedError("Listener.hear_before_step must be implemented")

    def hear_after_step(self, step: Step) -> None:
        raise NotImplementedError("Listener.hear_after_step must be implemented")

    def hear_step_result(self, step_result: StepResult) -> None:
        raise NotImplementedError("Listener.hear_step_result must be implemented")


@dataclass(slots=True)
class BaseListener(Listener):
    # No-op listener; reporters override only the events they care about.
    _before_each_scenario: list[Callable[[], object]] = field(default_factory=list)

    def before_each_scenario_do(self, fn: Callable[[], object]) -> None:
        # Setup hooks layered on top of the event stream, run in registration order.
        self._before_each_scenario.append(fn)

    def run_before_each_scenario_hooks(self) -> None:
        for fn in self._before_each_scenario:
            fn()

    def hear_before_features(self) -> None:
        return None

    def hear_after_features(self) -> None:
        return None

    def hear_before_feature(self, feature: Feature) -> None:
        _ = feature
        return None

    def hear_after_feature(self, feature: Feature) -> None:
        _ = feature
        return None

    def hear_before_scenario(self, scenario: Scenario) -> None:
        _ = scenario
        self.run_before_each_scenario_hooks()

    def hear_after_scenario(self, scenario: Scenario) -> None:
        _ = scenario
        return None

    def hear_before_step(self, step: Step) -> None:
        _ = step
        return None

    def hear_after_step(self, step: Step) -> None:
        _ = step
        return None

    def hear_step_result(self, step_result: StepResult) -> None:
        _ = step_result
        return None

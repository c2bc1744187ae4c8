from __future__ import annotations

from collections import Counter
from collections.abc import Callable
from dataclasses import dataclass, field

from feature_kernel.ast.nodes import Scenario
from feature_kernel.kernel.listener import BaseListener
from feature_kernel.support_code.step_result import StepResult, StepStatus

PASSING_STEP_CHARACTER = "."
FAILING_STEP_CHARACTER = "F"
UNDEFINED_STEP_CHARACTER = "U"

_STEP_CHARACTERS = {
    StepStatus.PASSED: PASSING_STEP_CHARACTER,
    StepStatus.FAILED: FAILING_STEP_CHARACTER,
    StepStatus.UNDEFINED: UNDEFINED_STEP_CHARACTER,
}
# Summary order and precedence: a scenario takes the status of its worst step.
_STATUS_ORDER = (StepStatus.FAILED, StepStatus.UNDEFINED, StepStatus.PASSED)


@dataclass(slots=True)
class ProgressFormatter(BaseListener):
    # One character per step result, then a scenario/step summary at the end of the run.
    output: Callable[[str], object] | None = None
    _logs: list[str] = field(default_factory=list)
    _step_counts: Counter[StepStatus] = field(default_factory=Counter)
    _scenario_counts: Counter[StepStatus] = field(default_factory=Counter)
    _current_scenario_statuses: list[StepStatus] = field(default_factory=list)

    def log(self, text: str) -> None:
        self._logs.append(text)
        if self.output is not None:
            self.output(text)

    def get_logs(self) -> str:
        return "".join(self._logs)

    def features_passed(self) -> bool:
        return self._step_counts[StepStatus.FAILED] == 0 and self._step_counts[StepStatus.UNDEFINED] == 0

    def hear_before_scenario(self, scenario: Scenario) -> None:
        _ = scenario
        self._current_scenario_statuses = []
        self.run_before_each_scenario_hooks()

    def hear_after_scenario(self, scenario: Scenario) -> None:
        _ = scenario
        self._scenario_counts[_worst(self._current_scenario_statuses)] += 1

    def hear_step_result(self, step_result: StepResult) -> None:
        self._step_counts[step_result.status] += 1
        self._current_scenario_statuses.append(step_result.status)
        self.log(_STEP_CHARACTERS[step_result.status])

    def hear_after_features(self) -> None:
        self.log_summary()

    def log_summary(self) -> None:
        self.log("\n\n")
        self.log(_count_line("scenario", self._scenario_counts) + "\n")
        self.log(_count_line("step", self._step_counts) + "\n")


def _worst(statuses: list[StepStatus]) -> StepStatus:
    for status in _STATUS_ORDER:
        if status in statuses:
            return status
    return StepStatus.PASSED


def _count_line(noun: str, counts: Counter[StepStatus]) -> str:
    total = sum(counts.values())
    label = noun if total == 1 else noun + "s"
    details = [f"{counts[status]} {status.value}" for status in _STATUS_ORDER if counts[status]]
    if not details:
        return f"{total} {label}"
    return f"{total} {label} ({', '.join(details)})"

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from feature_kernel.ast.nodes import Feature, Scenario, Step
from feature_kernel.kernel.listener import BaseListener
from feature_kernel.support_code.step_result import StepResult

INDENT = "  "


@dataclass(slots=True)
class PrettyFormatter(BaseListener):
    # Echoes the walked tree back as indented text, one line per node.
    output: Callable[[str], object] | None = None
    _logs: list[str] = field(default_factory=list)
    _current_step: Step | None = None
    _failed: bool = False

    def log(self, message: str, indentation: int = 0) -> None:
        if indentation:
            message = indent(message, indentation)
        self._logs.append(message + "\n")
        if self.output is not None:
            self.output(message)

    def get_logs(self) -> str:
        return "".join(self._logs)

    def features_passed(self) -> bool:
        return not self._failed

    def hear_before_feature(self, feature: Feature) -> None:
        self.log(f"{feature.keyword}: {feature.name}")
        if feature.description:
            self.log(feature.description, 1)

    def hear_before_scenario(self, scenario: Scenario) -> None:
        self.run_before_each_scenario_hooks()
        self.log("")
        self.log(f"{scenario.keyword}: {scenario.name}", 1)

    def hear_before_step(self, step: Step) -> None:
        self._current_step = step

    def hear_step_result(self, step_result: StepResult) -> None:
        step = self._current_step
        if step is None:
            return
        line = step.keyword + step.name
        if not step_result.successful:
            self._failed = True
            line = f"{line} ({step_result.status.value})"
        self.log(line, 2)
        if step.doc_string is not None:
            self.log('"""', 3)
            self.log(step.doc_string.content, 3)
            self.log('"""', 3)
        if step_result.error is not None:
            self.log(str(step_result.error), 3)

    def hear_after_step(self, step: Step) -> None:
        _ = step
        self._current_step = None


def indent(text: str, indentation: int) -> str:
    prefix = INDENT * indentation
    return "\n".join(prefix + line for line in text.split("\n"))

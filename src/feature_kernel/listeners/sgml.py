from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from feature_kernel.ast.nodes import Feature, Scenario, Step
from feature_kernel.kernel.listener import BaseListener
from feature_kernel.support_code.step_result import StepResult

INDENT = "  "


@dataclass(slots=True)
class SgmlFormatter(BaseListener):
    # Debug view of the event stream: one tag per Before/After event, nested by depth.
    output: Callable[[str], object] | None = None
    _logs: list[str] = field(default_factory=list)

    def log(self, tag: str, depth: int = 0) -> None:
        line = INDENT * depth + tag
        self._logs.append(line + "\n")
        if self.output is not None:
            self.output(line)

    def get_logs(self) -> str:
        return "".join(self._logs)

    def hear_before_features(self) -> None:
        self.log("<features>")

    def hear_after_features(self) -> None:
        self.log("</features>")

    def hear_before_feature(self, feature: Feature) -> None:
        _ = feature
        self.log("<feature>", 1)

    def hear_after_feature(self, feature: Feature) -> None:
        _ = feature
        self.log("</feature>", 1)

    def hear_before_scenario(self, scenario: Scenario) -> None:
        _ = scenario
        self.run_before_each_scenario_hooks()
        self.log("<scenario>", 2)

    def hear_after_scenario(self, scenario: Scenario) -> None:
        _ = scenario
        self.log("</scenario>", 2)

    def hear_before_step(self, step: Step) -> None:
        _ = step
        self.log("<step>", 3)

    def hear_after_step(self, step: Step) -> None:
        _ = step
        self.log("</step>", 3)

    def hear_step_result(self, step_result: StepResult) -> None:
        success = "true" if step_result.successful else "false"
        self.log(f"<result success='{success}'></result>", 4)

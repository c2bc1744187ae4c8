from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class StepStatus(str, Enum):
    PASSED = "passed"
    FAILED = "failed"
    # No registered definition matched the step text.
    UNDEFINED = "undefined"


@dataclass(frozen=True, slots=True)
class StepResult:
    # Point-in-time outcome of one step execution; broadcast once and dropped.
    status: StepStatus
    step_name: str = ""
    error: BaseException | str | None = None

    @property
    def successful(self) -> bool:
        return self.status is StepStatus.PASSED

    def is_successful(self) -> bool:
        return self.successful

    @classmethod
    def passed(cls, step_name: str = "") -> StepResult:
        return cls(status=StepStatus.PASSED, step_name=step_name)

    @classmethod
    def failed(cls, step_name: str = "", error: BaseException | str | None = None) -> StepResult:
        return cls(status=StepStatus.FAILED, step_name=step_name, error=error)

    @classmethod
    def undefined(cls, step_name: str = "") -> StepResult:
        return cls(status=StepStatus.UNDEFINED, step_name=step_name)

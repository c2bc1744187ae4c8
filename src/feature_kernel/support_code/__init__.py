from .library import StepDefinitionRegistry, StepRegistrar, SupportCodeDefinition, SupportCodeLibrary
from .step_definition import StepCallback, StepCompletion, StepDefinition, StepDefinitionError
from .step_result import StepResult, StepStatus

__all__ = [
    "StepDefinitionRegistry",
    "StepRegistrar",
    "SupportCodeDefinition",
    "SupportCodeLibrary",
    "StepCallback",
    "StepCompletion",
    "StepDefinition",
    "StepDefinitionError",
    "StepResult",
    "StepStatus",
]

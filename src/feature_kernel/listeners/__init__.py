from .pretty import PrettyFormatter
from .progress import (
    FAILING_STEP_CHARACTER,
    PASSING_STEP_CHARACTER,
    UNDEFINED_STEP_CHARACTER,
    ProgressFormatter,
)
from .sgml import SgmlFormatter

__all__ = [
    "PrettyFormatter",
    "ProgressFormatter",
    "SgmlFormatter",
    "PASSING_STEP_CHARACTER",
    "FAILING_STEP_CHARACTER",
    "UNDEFINED_STEP_CHARACTER",
]

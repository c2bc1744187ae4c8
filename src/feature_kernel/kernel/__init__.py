from .events import (
    AFTER_PREFIX,
    BEFORE_PREFIX,
    FEATURE,
    FEATURES,
    HEAR_METHOD_PREFIX,
    SCENARIO,
    STEP,
    STEP_RESULT,
    Event,
    all_hear_methods,
    hear_method_name,
)
from .listener import BaseListener, Listener
from .walker import LISTENER_ERROR_POLICIES, ListenerErrorPolicy, StepDefinitionSource, TreeWalker

# Kernel exports are the walk itself and its event vocabulary.
__all__ = [
    "AFTER_PREFIX",
    "BEFORE_PREFIX",
    "FEATURE",
    "FEATURES",
    "HEAR_METHOD_PREFIX",
    "SCENARIO",
    "STEP",
    "STEP_RESULT",
    "Event",
    "all_hear_methods",
    "hear_method_name",
    "BaseListener",
    "Listener",
    "LISTENER_ERROR_POLICIES",
    "ListenerErrorPolicy",
    "StepDefinitionSource",
    "TreeWalker",
]

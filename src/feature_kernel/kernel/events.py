from __future__ import annotations

import re
from dataclasses import dataclass

# Event names shared by the walker, listeners and formatters.
FEATURES = "Features"
FEATURE = "Feature"
SCENARIO = "Scenario"
STEP = "Step"
STEP_RESULT = "StepResult"

BEFORE_PREFIX = "Before"
AFTER_PREFIX = "After"
HEAR_METHOD_PREFIX = "hear_"

# Events that are broadcast as a before/after pair around a subtree.
SPAN_EVENTS = (FEATURES, FEATURE, SCENARIO, STEP)

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def hear_method_name(event_name: str) -> str:
    # "BeforeFeature" -> "hear_before_feature", "StepResult" -> "hear_step_result".
    return HEAR_METHOD_PREFIX + _CAMEL_BOUNDARY.sub("_", event_name).lower()


@dataclass(frozen=True, slots=True)
class Event:
    # Structured event descriptor: one value instead of positional name/payload slicing.
    name: str
    payload: tuple[object, ...] = ()

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Event requires a non-empty name")

    def before(self) -> Event:
        return Event(name=BEFORE_PREFIX + self.name, payload=self.payload)

    def after(self) -> Event:
        return Event(name=AFTER_PREFIX + self.name, payload=self.payload)

    @property
    def hear_method(self) -> str:
        return hear_method_name(self.name)


def all_hear_methods() -> tuple[str, ...]:
    # Complete listener surface in a stable order.
    names: list[str] = []
    for event_name in SPAN_EVENTS:
        names.append(hear_method_name(BEFORE_PREFIX + event_name))
        names.append(hear_method_name(AFTER_PREFIX + event_name))
    names.append(hear_method_name(STEP_RESULT))
    return tuple(names)

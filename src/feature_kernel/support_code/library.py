from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field

from feature_kernel.support_code.step_definition import StepCallback, StepDefinition
from feature_kernel.types.sequence import ItemSequence

Pattern = str | re.Pattern[str]


@dataclass(slots=True)
class StepDefinitionRegistry:
    # Append-only; filled during setup and read-only while walking.
    _definitions: ItemSequence[StepDefinition] = field(default_factory=ItemSequence)

    def add(self, definition: StepDefinition) -> None:
        self._definitions.append(definition)

    def lookup(self, name: str) -> StepDefinition | None:
        # First registered match wins; None is the "no match" signal, never an exception.
        for definition in self._definitions:
            if definition.matches(name):
                return definition
        return None

    def __len__(self) -> int:
        return len(self._definitions)


@dataclass(frozen=True, slots=True)
class StepRegistrar:
    # Injected into support code; given/when/then differ only in name.
    registry: StepDefinitionRegistry

    def define_step(
        self,
        pattern: Pattern,
        callback: StepCallback | None = None,
    ) -> StepCallback | Callable[[StepCallback], StepCallback]:
        if callback is not None:
            self.registry.add(StepDefinition.create(pattern, callback))
            return callback

        # Decorator form: @steps.given(r"^I have (\d+) cukes$")
        def _decorate(fn: StepCallback) -> StepCallback:
            self.registry.add(StepDefinition.create(pattern, fn))
            return fn

        return _decorate

    def given(
        self,
        pattern: Pattern,
        callback: StepCallback | None = None,
    ) -> StepCallback | Callable[[StepCallback], StepCallback]:
        return self.define_step(pattern, callback)

    def when(
        self,
        pattern: Pattern,
        callback: StepCallback | None = None,
    ) -> StepCallback | Callable[[StepCallback], StepCallback]:
        return self.define_step(pattern, callback)

    def then(
        self,
        pattern: Pattern,
        callback: StepCallback | None = None,
    ) -> StepCallback | Callable[[StepCallback], StepCallback]:
        return self.define_step(pattern, callback)


SupportCodeDefinition = Callable[[StepRegistrar], object]


class SupportCodeLibrary:
    # Runs the user's setup function once with an explicit registrar (no global bindings).
    def __init__(self, support_code_definition: SupportCodeDefinition | None = None) -> None:
        self._registry = StepDefinitionRegistry()
        self._registrar = StepRegistrar(self._registry)
        if support_code_definition is not None:
            support_code_definition(self._registrar)

    def lookup_step_definition_by_name(self, name: str) -> StepDefinition | None:
        return self._registry.lookup(name)

    def define_given_step(self, pattern: Pattern, callback: StepCallback) -> None:
        self._registrar.given(pattern, callback)

    def define_when_step(self, pattern: Pattern, callback: StepCallback) -> None:
        self._registrar.when(pattern, callback)

    def define_then_step(self, pattern: Pattern, callback: StepCallback) -> None:
        self._registrar.then(pattern, callback)

    def __len__(self) -> int:
        return len(self._registry)

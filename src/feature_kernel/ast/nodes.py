from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from feature_kernel.support_code.step_result import StepResult
from feature_kernel.types.sequence import ItemSequence

if TYPE_CHECKING:
    from feature_kernel.support_code.step_definition import StepDefinition


class Visitor(Protocol):
    # Surface the AST needs from the walker; nodes never see the registry or listeners.
    async def visit(self, node: Node) -> None:
        raise NotImplementedError("Visitor.visit must be implemented")

    async def visit_step_result(self, step_result: StepResult) -> None:
        raise NotImplementedError("Visitor.visit_step_result must be implemented")

    def lookup_step_definition_by_name(self, name: str) -> StepDefinition | None:
        raise NotImplementedError("Visitor.lookup_step_definition_by_name must be implemented")


@dataclass(frozen=True, slots=True)
class DocString:
    # Literal text block attached to the step right above it.
    content: str
    line: int | None = None


@dataclass(slots=True, eq=False)
class Step:
    keyword: str
    name: str
    line: int | None = None
    doc_string: DocString | None = None

    def attach_doc_string(self, doc_string: DocString) -> None:
        # A later attachment replaces the earlier one.
        self.doc_string = doc_string

    def has_doc_string(self) -> bool:
        return self.doc_string is not None

    async def accept_visitor(self, visitor: Visitor) -> None:
        # Leaf node and unit of execution: resolve, invoke, then report the result.
        step_result = await self.execute(visitor)
        await visitor.visit_step_result(step_result)

    async def execute(self, visitor: Visitor) -> StepResult:
        step_definition = visitor.lookup_step_definition_by_name(self.name)
        if step_definition is None:
            return StepResult.undefined(self.name)
        return await step_definition.invoke(self.name, self.doc_string)


@dataclass(slots=True, eq=False)
class Scenario:
    keyword: str
    name: str
    description: str = ""
    line: int | None = None
    steps: ItemSequence[Step] = field(default_factory=ItemSequence)

    def add_step(self, step: Step) -> None:
        self.steps.append(step)

    def last_step(self) -> Step | None:
        return self.steps.last()

    async def accept_visitor(self, visitor: Visitor) -> None:
        await self.steps.for_each_async(visitor.visit)


@dataclass(slots=True, eq=False)
class Feature:
    keyword: str
    name: str
    description: str = ""
    line: int | None = None
    scenarios: ItemSequence[Scenario] = field(default_factory=ItemSequence)

    def add_scenario(self, scenario: Scenario) -> None:
        self.scenarios.append(scenario)

    def last_scenario(self) -> Scenario | None:
        return self.scenarios.last()

    async def accept_visitor(self, visitor: Visitor) -> None:
        await self.scenarios.for_each_async(visitor.visit)


@dataclass(slots=True, eq=False)
class Features:
    # Root of a run: every parsed feature, in source order.
    features: ItemSequence[Feature] = field(default_factory=ItemSequence)

    def add_feature(self, feature: Feature) -> None:
        self.features.append(feature)

    def last_feature(self) -> Feature | None:
        return self.features.last()

    async def accept_visitor(self, visitor: Visitor) -> None:
        await self.features.for_each_async(visitor.visit)


# Closed set of walkable node kinds.
Node = Features | Feature | Scenario | Step

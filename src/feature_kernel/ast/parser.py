from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from feature_kernel.ast.nodes import DocString, Feature, Features, Scenario, Step


class ParseError(ValueError):
    # Lexer events arrived in an order that cannot be attached to the tree.
    pass


class LexerEventHandler(Protocol):
    # Callbacks a lexer drives while scanning a specification document.
    def feature(self, keyword: str, name: str, description: str, line: int) -> None: ...

    def scenario(self, keyword: str, name: str, description: str, line: int) -> None: ...

    def step(self, keyword: str, name: str, line: int) -> None: ...

    def doc_string(self, content: str, line: int) -> None: ...

    def eof(self) -> None: ...


class Lexer(Protocol):
    def scan(self, source: str) -> None: ...


LexerFactory = Callable[[LexerEventHandler], Lexer]


class FeaturesParser:
    # Builds the AST from lexer events; the lexer itself is supplied by the caller.
    # New scenarios/steps/doc strings attach to the most recently added parent.
    def __init__(self, source: str, lexer_factory: LexerFactory) -> None:
        self._source = source
        self._lexer_factory = lexer_factory
        self._features = Features()

    def parse(self) -> Features:
        lexer = self._lexer_factory(self)
        lexer.scan(self._source)
        return self._features

    def current_feature(self) -> Feature:
        feature = self._features.last_feature()
        if feature is None:
            raise ParseError("Scenario found before any feature")
        return feature

    def current_scenario(self) -> Scenario:
        scenario = self.current_feature().last_scenario()
        if scenario is None:
            raise ParseError("Step found before any scenario")
        return scenario

    def current_step(self) -> Step:
        step = self.current_scenario().last_step()
        if step is None:
            raise ParseError("Doc string found before any step")
        return step

    def feature(self, keyword: str, name: str, description: str, line: int) -> None:
        self._features.add_feature(Feature(keyword=keyword, name=name, description=description, line=line))

    def scenario(self, keyword: str, name: str, description: str, line: int) -> None:
        feature = self.current_feature()
        feature.add_scenario(Scenario(keyword=keyword, name=name, description=description, line=line))

    def step(self, keyword: str, name: str, line: int) -> None:
        scenario = self.current_scenario()
        scenario.add_step(Step(keyword=keyword, name=name, line=line))

    def doc_string(self, content: str, line: int) -> None:
        step = self.current_step()
        step.attach_doc_string(DocString(content=content, line=line))

    def eof(self) -> None:
        return None

from __future__ import annotations

import asyncio

from feature_kernel.support_code.library import StepDefinitionRegistry, StepRegistrar, SupportCodeLibrary
from feature_kernel.support_code.step_definition import StepDefinition


def _done(done) -> None:
    done()


def test_support_code_definition_receives_a_registrar() -> None:
    seen: list[object] = []

    def support(steps: StepRegistrar) -> None:
        seen.append(steps)
        steps.given(r"^a$", _done)
        steps.when(r"^b$", _done)
        steps.then(r"^c$", _done)

    library = SupportCodeLibrary(support)
    assert isinstance(seen[0], StepRegistrar)
    assert len(library) == 3
    for name in ("a", "b", "c"):
        assert library.lookup_step_definition_by_name(name) is not None


def test_given_when_then_are_interchangeable() -> None:
    def support(steps: StepRegistrar) -> None:
        steps.then(r"^precondition$", _done)

    library = SupportCodeLibrary(support)
    definition = library.lookup_step_definition_by_name("precondition")
    assert definition is not None
    assert asyncio.run(definition.invoke("precondition")).successful


def test_lookup_returns_first_registered_match() -> None:
    def first(done) -> None:
        done()

    def second(done) -> None:
        done()

    def support(steps: StepRegistrar) -> None:
        steps.given(r"^I have \d+ cukes$", first)
        steps.given(r"cukes", second)

    library = SupportCodeLibrary(support)
    assert library.lookup_step_definition_by_name("I have 5 cukes").callback is first  # type: ignore[union-attr]
    assert library.lookup_step_definition_by_name("many cukes").callback is second  # type: ignore[union-attr]


def test_lookup_without_match_returns_none() -> None:
    assert SupportCodeLibrary().lookup_step_definition_by_name("nothing registered") is None
    assert StepDefinitionRegistry().lookup("x") is None


def test_decorator_registration_returns_the_function() -> None:
    def support(steps: StepRegistrar) -> None:
        @steps.given(r"^decorated (\w+)$")
        def decorated(word: str, done) -> None:
            done()

        assert callable(decorated)

    library = SupportCodeLibrary(support)
    assert library.lookup_step_definition_by_name("decorated thing") is not None


def test_library_define_methods_register_steps() -> None:
    library = SupportCodeLibrary()
    library.define_given_step(r"^g$", _done)
    library.define_when_step(r"^w$", _done)
    library.define_then_step(r"^t$", _done)
    assert len(library) == 3
    assert isinstance(library.lookup_step_definition_by_name("w"), StepDefinition)


def test_separate_libraries_do_not_share_registrations() -> None:
    def support(steps: StepRegistrar) -> None:
        steps.given(r"^only here$", _done)

    first = SupportCodeLibrary(support)
    second = SupportCodeLibrary()
    assert first.lookup_step_definition_by_name("only here") is not None
    assert second.lookup_step_definition_by_name("only here") is None

from __future__ import annotations

import asyncio
from collections.abc import Callable

from feature_kernel.ast.nodes import Features
from feature_kernel.ast.parser import FeaturesParser, LexerFactory
from feature_kernel.config.validator import RunConfig
from feature_kernel.kernel.listener import Listener
from feature_kernel.kernel.walker import TreeWalker
from feature_kernel.observability.adapters.logging import LogSink, NullLogSink
from feature_kernel.observability.domain.logging import LogMessage
from feature_kernel.support_code.library import SupportCodeDefinition, SupportCodeLibrary
from feature_kernel.types.sequence import ItemSequence

START_MISSING_CALLBACK_ERROR = "FeatureRun.start() expects a callback."


class MissingCallbackError(TypeError):
    pass


class FeatureRun:
    # One run: parse the source, load support code, walk with the attached listeners.
    # Listeners must be attached before start(); the set is fixed for the walk.
    def __init__(
        self,
        features_source: str,
        support_code_definition: SupportCodeDefinition,
        *,
        lexer_factory: LexerFactory,
        config: RunConfig | None = None,
        log_sink: LogSink | None = None,
    ) -> None:
        self._features_source = features_source
        self._support_code_definition = support_code_definition
        self._lexer_factory = lexer_factory
        self._config = config if config is not None else RunConfig()
        self._log_sink = log_sink if log_sink is not None else NullLogSink()
        self._listeners: ItemSequence[Listener] = ItemSequence()

    def attach_listener(self, listener: Listener) -> None:
        if not isinstance(listener, Listener):
            raise TypeError(f"{type(listener).__name__} does not implement the Listener hear_* methods")
        self._listeners.append(listener)

    def start(self, callback: Callable[[], object]) -> None:
        # Callback is validated before any parsing so misuse fails at the call site.
        if not callable(callback):
            raise MissingCallbackError(START_MISSING_CALLBACK_ERROR)
        asyncio.run(self.run())
        callback()

    async def run(self) -> None:
        try:
            features = self.parse_features_source()
            support_code_library = self.initialize_support_code()
            await self.execute_features_against_support_code_library(features, support_code_library)
        finally:
            # The run owns its log sink: file-backed sinks are closed at end of run.
            close = getattr(self._log_sink, "close", None)
            if callable(close):
                close()

    def parse_features_source(self) -> Features:
        parser = FeaturesParser(self._features_source, self._lexer_factory)
        features = parser.parse()
        self._log_sink.emit(
            LogMessage(level="debug", message="features parsed", fields={"features": len(features.features)})
        )
        return features

    def initialize_support_code(self) -> SupportCodeLibrary:
        support_code_library = SupportCodeLibrary(self._support_code_definition)
        self._log_sink.emit(
            LogMessage(
                level="debug",
                message="support code loaded",
                fields={"step_definitions": len(support_code_library)},
            )
        )
        return support_code_library

    async def execute_features_against_support_code_library(
        self,
        features: Features,
        support_code_library: SupportCodeLibrary,
    ) -> None:
        tree_walker = TreeWalker(
            features=features,
            support_code_library=support_code_library,
            listeners=self._listeners,
            listener_errors=self._config.listener_errors,
            log_sink=self._log_sink,
        )
        await tree_walker.walk()

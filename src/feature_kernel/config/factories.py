from __future__ import annotations

from collections.abc import Callable

from feature_kernel.config.validator import RunConfig
from feature_kernel.listeners.pretty import PrettyFormatter
from feature_kernel.listeners.progress import ProgressFormatter
from feature_kernel.listeners.sgml import SgmlFormatter
from feature_kernel.observability.adapters.logging import LogSink, NullLogSink, log_jsonl, log_stdout


def build_log_sink(config: RunConfig) -> LogSink:
    sink = config.logging.sink
    if sink == "stdout":
        return log_stdout({})
    if sink == "jsonl":
        return log_jsonl({"path": config.logging.path})
    return NullLogSink()


def build_formatter(
    config: RunConfig,
    output: Callable[[str], object] | None = None,
) -> ProgressFormatter | PrettyFormatter | SgmlFormatter:
    if config.formatter == "pretty":
        return PrettyFormatter(output=output)
    if config.formatter == "sgml":
        return SgmlFormatter(output=output)
    return ProgressFormatter(output=output)

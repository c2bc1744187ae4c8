from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator


class ConfigError(ValueError):
    # Raised for invalid run config (fail fast, before any walk starts).
    pass


class LoggingConfig(BaseModel):
    # Structured log destination for walker diagnostics.
    model_config = ConfigDict(extra="forbid")
    sink: Literal["none", "stdout", "jsonl"] = "none"
    path: str | None = None

    @model_validator(mode="after")
    def _jsonl_needs_path(self) -> LoggingConfig:
        if self.sink == "jsonl" and not self.path:
            raise ValueError("logging.path is required when logging.sink is jsonl")
        return self


class RunConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    # fail_fast: a raising listener aborts the run; isolate: log it and keep notifying.
    listener_errors: Literal["fail_fast", "isolate"] = "fail_fast"
    formatter: Literal["progress", "pretty", "sgml"] = "progress"
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def validate_run_config(raw: object) -> RunConfig:
    if raw is None:
        return RunConfig()
    if not isinstance(raw, dict):
        raise ConfigError("Config root must be a mapping")
    # Accept either a bare run section or a document with a top-level "run" key.
    section = raw.get("run", raw)
    if not isinstance(section, dict):
        raise ConfigError("run must be a mapping when provided")
    try:
        return RunConfig.model_validate(section)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc

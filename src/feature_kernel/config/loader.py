from __future__ import annotations

from pathlib import Path

import yaml

from feature_kernel.config.validator import ConfigError, RunConfig, validate_run_config


def load_yaml_config(path: Path) -> dict[str, object]:
    # Returns a raw mapping; validation happens separately.
    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise ConfigError("Config root must be a mapping")
    return raw


def load_run_config(path: Path) -> RunConfig:
    return validate_run_config(load_yaml_config(path))

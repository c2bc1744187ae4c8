from .factories import build_formatter, build_log_sink
from .loader import load_run_config, load_yaml_config
from .validator import ConfigError, LoggingConfig, RunConfig, validate_run_config

__all__ = [
    "ConfigError",
    "LoggingConfig",
    "RunConfig",
    "validate_run_config",
    "load_yaml_config",
    "load_run_config",
    "build_log_sink",
    "build_formatter",
]

"""Configuration loading, schema, and defaults."""

from deadcodechange.config.loader import ConfigError, load_config, resolve_patterns
from deadcodechange.config.schema import DeadCodeChangeConfig, FilePatterns

__all__ = [
    "ConfigError",
    "DeadCodeChangeConfig",
    "FilePatterns",
    "load_config",
    "resolve_patterns",
]

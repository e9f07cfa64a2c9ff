"""Configuration rules for apksweep."""

from rules.config import (
    CONFIG_FILENAME,
    AssembleConfig,
    ConfigError,
    SweepConfig,
    Variant,
    load_config,
    resolve_output_dir,
)

__all__ = [
    "CONFIG_FILENAME",
    "AssembleConfig",
    "ConfigError",
    "SweepConfig",
    "Variant",
    "load_config",
    "resolve_output_dir",
]

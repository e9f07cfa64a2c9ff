from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import tomllib
from pydantic import BaseModel, ConfigDict, Field, field_validator

from contract.artifacts import DEFAULT_CHECKSUM_SUFFIXES, DEFAULT_PACKAGE_SUFFIXES

CONFIG_FILENAME = "apksweep.toml"

DEFAULT_OUTPUT_DIR = "build/app/outputs/flutter-apk"

Variant = Literal["debug", "release"]


class AssembleConfig(BaseModel):
    """Assembly commands run after the output directory has been cleaned."""

    model_config = ConfigDict(extra="forbid")

    debug: list[str] = Field(
        default_factory=lambda: ["flutter", "build", "apk", "--debug"],
        description="argv for the debug assembly step",
    )
    release: list[str] = Field(
        default_factory=lambda: ["flutter", "build", "apk", "--release"],
        description="argv for the release assembly step",
    )

    @field_validator("debug", "release")
    @classmethod
    def validate_command(cls, v: list[str]) -> list[str]:
        if not v or not v[0]:
            msg = "assemble command must be a non-empty argv list"
            raise ValueError(msg)
        return v

    def command_for(self, variant: Variant) -> list[str]:
        return list(self.debug if variant == "debug" else self.release)


class SweepConfig(BaseModel):
    """Configuration for apksweep artifact cleanup."""

    model_config = ConfigDict(extra="forbid")

    output_dir: str = Field(
        default=DEFAULT_OUTPUT_DIR,
        description="Directory holding the generated packages, relative to root",
    )
    package_suffixes: list[str] = Field(
        default_factory=lambda: list(DEFAULT_PACKAGE_SUFFIXES),
        description="Filename suffixes of package artifacts",
    )
    checksum_suffixes: list[str] = Field(
        default_factory=lambda: list(DEFAULT_CHECKSUM_SUFFIXES),
        description="Filename suffixes of checksum sidecar files",
    )
    keep: list[str] = Field(
        default_factory=list,
        description="fnmatch patterns for artifact names that must not be deleted",
    )
    assemble: AssembleConfig = Field(
        default_factory=AssembleConfig,
        description="Debug and release assembly commands",
    )

    @field_validator("package_suffixes", "checksum_suffixes")
    @classmethod
    def validate_suffixes(cls, v: list[str]) -> list[str]:
        """Reject empty suffix lists and suffixes without a leading dot."""
        if not v:
            msg = "suffix list must not be empty"
            raise ValueError(msg)
        for suffix in v:
            if not suffix.startswith(".") or len(suffix) < 2:
                msg = f"Invalid suffix '{suffix}': must start with '.'"
                raise ValueError(msg)
        return v


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def resolve_output_dir(root: Path, output_dir: str) -> Path:
    """Resolve a config-provided output_dir safely within the project root.

    The config output_dir must be a non-empty relative path that remains
    within the project root after resolution. Absolute paths and paths
    that escape the root are rejected.
    """
    if not output_dir:
        msg = "output_dir must be a non-empty relative path"
        raise ConfigError(msg)

    if output_dir.startswith("~"):
        msg = "output_dir must be a relative path within the project root"
        raise ConfigError(msg)

    output_path = Path(output_dir)
    if output_path.is_absolute():
        msg = "output_dir must be a relative path within the project root"
        raise ConfigError(msg)

    try:
        resolved_root = root.resolve()
        resolved_output = (resolved_root / output_path).resolve()
    except OSError as exc:
        msg = f"Failed to resolve output_dir '{output_dir}': {exc}"
        raise ConfigError(msg) from exc

    try:
        resolved_output.relative_to(resolved_root)
    except ValueError as exc:
        msg = f"output_dir '{output_dir}' escapes the project root"
        raise ConfigError(msg) from exc

    return resolved_output


def load_config(root: Path) -> SweepConfig:
    """Load configuration from apksweep.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return SweepConfig()

    try:
        with config_path.open("rb") as f:
            data: dict[str, Any] = tomllib.load(f)
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e
    except OSError as e:
        msg = f"Cannot read {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return SweepConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e

"""Stale-artifact verification for apksweep output directories."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rules.config import SweepConfig
from scan.files import find_artifacts

if TYPE_CHECKING:
    from pathlib import Path


@dataclass(frozen=True)
class StaleCheckResult:
    ok: bool
    stale: tuple[str, ...] = field(default_factory=tuple)


def check_clean(
    directory: Path, *, config: SweepConfig | None = None
) -> StaleCheckResult:
    """Verify that no package artifacts remain in an output directory.

    Uses the same classification and keep patterns as the cleaner, so a
    directory is clean exactly when a cleanup run would delete nothing. A
    missing directory is clean.

    Args:
        directory: Output directory to inspect.
        config: Suffix and keep-pattern settings (defaults when omitted).

    Returns:
        StaleCheckResult with ok status and the sorted names of any
        remaining artifacts.
    """
    if config is None:
        config = SweepConfig()

    stale = tuple(
        artifact.name
        for artifact in find_artifacts(
            directory,
            package_suffixes=config.package_suffixes,
            checksum_suffixes=config.checksum_suffixes,
            keep_patterns=config.keep,
        )
    )
    return StaleCheckResult(ok=not stale, stale=stale)

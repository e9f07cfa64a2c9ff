"""Removal of stale package artifacts from the build output directory."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from contract.artifacts import KIND_LABELS, ArtifactFile
from rules.config import SweepConfig, load_config, resolve_output_dir
from scan.files import find_artifacts

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FailedRemoval:
    artifact: ArtifactFile
    reason: str

    def to_dict(self) -> dict[str, object]:
        return {**self.artifact.to_dict(), "reason": self.reason}


@dataclass(frozen=True)
class CleanupResult:
    directory: Path
    existed: bool
    dry_run: bool = False
    removed: tuple[ArtifactFile, ...] = field(default_factory=tuple)
    failed: tuple[FailedRemoval, ...] = field(default_factory=tuple)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return not self.failed and self.error is None


def clean_artifacts(
    directory: Path,
    *,
    config: SweepConfig | None = None,
    dry_run: bool = False,
) -> CleanupResult:
    """Delete package files and checksum sidecars left by a previous build.

    Only the immediate entries of ``directory`` are considered; subdirectories
    and files that are not artifacts are left alone. A missing directory is
    nothing to clean. Deletion is best-effort: a file that cannot be removed
    is logged and reported in ``CleanupResult.failed``, and a directory that
    cannot be listed is reported in ``CleanupResult.error``; neither is raised.

    Args:
        directory: Output directory containing the previous build's artifacts.
        config: Suffix and keep-pattern settings (defaults when omitted).
        dry_run: Report what would be deleted without deleting anything.

    Returns:
        CleanupResult listing removed and failed artifacts in name order.
    """
    if config is None:
        config = SweepConfig()

    if not directory.exists():
        logger.debug(
            "Output directory %s does not exist; nothing to clean", directory
        )
        return CleanupResult(directory=directory, existed=False, dry_run=dry_run)

    if not directory.is_dir():
        logger.warning(
            "Output path %s is not a directory; nothing to clean", directory
        )
        return CleanupResult(directory=directory, existed=False, dry_run=dry_run)

    removed: list[ArtifactFile] = []
    failed: list[FailedRemoval] = []

    try:
        artifacts = list(
            find_artifacts(
                directory,
                package_suffixes=config.package_suffixes,
                checksum_suffixes=config.checksum_suffixes,
                keep_patterns=config.keep,
            )
        )
    except OSError as exc:
        logger.warning("Could not list %s: %s", directory, exc)
        return CleanupResult(
            directory=directory, existed=True, dry_run=dry_run, error=str(exc)
        )

    for artifact in artifacts:
        label = KIND_LABELS[artifact.kind]
        if dry_run:
            logger.info("Would delete old %s: %s", label, artifact.name)
            removed.append(artifact)
            continue

        logger.info("Deleting old %s: %s", label, artifact.name)
        try:
            artifact.path.unlink()
        except FileNotFoundError:
            # Already gone; the end state is the same.
            removed.append(artifact)
        except OSError as exc:
            logger.warning("Could not delete %s: %s", artifact.name, exc)
            failed.append(FailedRemoval(artifact=artifact, reason=str(exc)))
        else:
            removed.append(artifact)

    return CleanupResult(
        directory=directory,
        existed=True,
        dry_run=dry_run,
        removed=tuple(removed),
        failed=tuple(failed),
    )


def clean_project(
    *,
    root: Path,
    out_dir: Path | None = None,
    config: SweepConfig | None = None,
    dry_run: bool = False,
) -> CleanupResult:
    """Clean the configured output directory of a project root."""
    if config is None:
        config = load_config(root)

    if out_dir is None:
        out_dir = resolve_output_dir(root, config.output_dir)

    return clean_artifacts(out_dir, config=config, dry_run=dry_run)


__all__ = ["CleanupResult", "FailedRemoval", "clean_artifacts", "clean_project"]

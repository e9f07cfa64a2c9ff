"""Output directory scanning for apksweep."""

from __future__ import annotations

from fnmatch import fnmatch
from typing import TYPE_CHECKING

from contract.artifacts import (
    DEFAULT_CHECKSUM_SUFFIXES,
    DEFAULT_PACKAGE_SUFFIXES,
    ArtifactFile,
    classify_artifact,
)

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence
    from pathlib import Path


def _is_kept(name: str, keep_patterns: Sequence[str] | None) -> bool:
    return bool(keep_patterns) and any(fnmatch(name, pat) for pat in keep_patterns)


def find_artifacts(
    directory: Path,
    *,
    package_suffixes: Sequence[str] = DEFAULT_PACKAGE_SUFFIXES,
    checksum_suffixes: Sequence[str] = DEFAULT_CHECKSUM_SUFFIXES,
    keep_patterns: Sequence[str] | None = None,
) -> Iterator[ArtifactFile]:
    """Find artifact files directly inside a directory.

    Args:
        directory: Output directory to scan (not recursed into)
        package_suffixes: Suffixes identifying package files
        checksum_suffixes: Suffixes identifying checksum sidecar files
        keep_patterns: Optional list of fnmatch patterns; artifacts whose
            name matches any pattern are skipped

    Yields:
        ArtifactFile for each regular file that classifies as an artifact,
        sorted by name for deterministic ordering. A missing directory (or a
        path that is not a directory) yields nothing.
    """
    if not directory.is_dir():
        return

    try:
        entries = list(directory.iterdir())
    except FileNotFoundError:
        return

    matched: list[ArtifactFile] = []
    for path in entries:
        if not path.is_file():
            continue
        kind = classify_artifact(path.name, package_suffixes, checksum_suffixes)
        if kind is None or _is_kept(path.name, keep_patterns):
            continue
        matched.append(ArtifactFile(name=path.name, kind=kind, path=path))

    matched.sort(key=lambda artifact: artifact.name)

    yield from matched


__all__ = ["find_artifacts"]

"""Artifact contract definitions.

Names the artifact kinds the packaging step leaves behind and the default
filename suffixes that identify them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

ArtifactKind = Literal["package", "checksum"]

# Default suffixes written by the Flutter Android build.
PACKAGE_SUFFIX = ".apk"
CHECKSUM_SUFFIX = ".apk.sha1"

DEFAULT_PACKAGE_SUFFIXES: tuple[str, ...] = (PACKAGE_SUFFIX,)
DEFAULT_CHECKSUM_SUFFIXES: tuple[str, ...] = (CHECKSUM_SUFFIX,)

# Labels used in log lines, one per kind.
KIND_LABELS: dict[ArtifactKind, str] = {
    "package": "APK",
    "checksum": "SHA1",
}


@dataclass(frozen=True)
class ArtifactFile:
    """A previously generated build output sitting in the output directory."""

    name: str
    kind: ArtifactKind
    path: Path

    def to_dict(self) -> dict[str, object]:
        return {"name": self.name, "kind": self.kind}


def classify_artifact(
    name: str,
    package_suffixes: Sequence[str] = DEFAULT_PACKAGE_SUFFIXES,
    checksum_suffixes: Sequence[str] = DEFAULT_CHECKSUM_SUFFIXES,
) -> ArtifactKind | None:
    """Return the artifact kind for a file name, or None if it is not one.

    Checksum suffixes are tested first so a package suffix can never shadow
    the sidecar of the same package. Matching is case-sensitive.

    Examples:
        >>> classify_artifact("app-release.apk")
        'package'
        >>> classify_artifact("app-release.apk.sha1")
        'checksum'
        >>> classify_artifact("output-metadata.json") is None
        True
    """
    if any(name.endswith(suffix) for suffix in checksum_suffixes):
        return "checksum"
    if any(name.endswith(suffix) for suffix in package_suffixes):
        return "package"
    return None


__all__ = [
    "CHECKSUM_SUFFIX",
    "DEFAULT_CHECKSUM_SUFFIXES",
    "DEFAULT_PACKAGE_SUFFIXES",
    "KIND_LABELS",
    "PACKAGE_SUFFIX",
    "ArtifactFile",
    "ArtifactKind",
    "classify_artifact",
]

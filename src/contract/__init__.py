"""Stable artifact contract surface for apksweep."""

from contract.artifacts import (
    CHECKSUM_SUFFIX,
    DEFAULT_CHECKSUM_SUFFIXES,
    DEFAULT_PACKAGE_SUFFIXES,
    KIND_LABELS,
    PACKAGE_SUFFIX,
    ArtifactFile,
    ArtifactKind,
    classify_artifact,
)

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

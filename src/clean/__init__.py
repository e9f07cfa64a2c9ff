"""Artifact cleanup entry points."""

from clean.cleaner import CleanupResult, FailedRemoval, clean_artifacts, clean_project
from clean.report import cleanup_report, write_report

__all__ = [
    "CleanupResult",
    "FailedRemoval",
    "clean_artifacts",
    "clean_project",
    "cleanup_report",
    "write_report",
]

"""JSON rendering of cleanup results."""

from __future__ import annotations

from typing import TYPE_CHECKING

import orjson

if TYPE_CHECKING:
    from pathlib import Path

    from clean.cleaner import CleanupResult

_JSON_OPTIONS = orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2


def cleanup_report(result: CleanupResult) -> dict[str, object]:
    return {
        "directory": str(result.directory),
        "existed": result.existed,
        "dry_run": result.dry_run,
        "removed": [artifact.to_dict() for artifact in result.removed],
        "failed": [failure.to_dict() for failure in result.failed],
        "error": result.error,
    }


def dumps_report(result: CleanupResult) -> bytes:
    return orjson.dumps(cleanup_report(result), option=_JSON_OPTIONS)


def write_report(path: Path, result: CleanupResult) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(dumps_report(result))


__all__ = ["cleanup_report", "dumps_report", "write_report"]

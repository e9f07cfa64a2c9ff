"""Run a package assembly command after cleaning its output directory."""

from __future__ import annotations

import logging
import shlex
import subprocess
from typing import TYPE_CHECKING

from clean.cleaner import clean_project

if TYPE_CHECKING:
    from pathlib import Path

    from rules.config import SweepConfig, Variant

logger = logging.getLogger(__name__)


class AssembleError(Exception):
    """Raised when the assembly command cannot be started."""


def _format_invocation(argv: list[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def run_assemble(
    *,
    root: Path,
    variant: Variant,
    config: SweepConfig,
    out_dir: Path | None = None,
) -> int:
    """Clean stale artifacts, then run the assembly command for a variant.

    The cleanup completes before the command starts. Cleanup failures are
    logged and do not prevent the build from running.

    Returns:
        Exit code of the assembly command.

    Raises:
        AssembleError: If the assembly executable cannot be found or started.
    """
    result = clean_project(root=root, out_dir=out_dir, config=config)
    if not result.ok:
        logger.warning(
            "Cleanup of %s was incomplete; continuing with the build",
            result.directory,
        )

    cmd = config.assemble.command_for(variant)
    logger.info("Assembling %s: %s", variant, _format_invocation(cmd))
    try:
        completed = subprocess.run(cmd, cwd=root, check=False)
    except FileNotFoundError as exc:
        msg = f"Assembly command not found: {cmd[0]}"
        raise AssembleError(msg) from exc
    except OSError as exc:
        msg = f"Failed to start assembly command {cmd[0]}: {exc}"
        raise AssembleError(msg) from exc

    if completed.returncode != 0:
        logger.error(
            "Assembly of %s failed with exit code %d", variant, completed.returncode
        )
    return completed.returncode


__all__ = ["AssembleError", "run_assemble"]

"""Debug and release assembly wiring."""

from assemble.runner import AssembleError, run_assemble

__all__ = ["AssembleError", "run_assemble"]

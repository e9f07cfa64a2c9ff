"""Command-line interface for apksweep."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, cast

from assemble.runner import AssembleError, run_assemble
from clean.cleaner import clean_project
from clean.report import dumps_report, write_report
from log_config import setup_logging
from rules.config import ConfigError, load_config, resolve_output_dir
from verify.verify import check_clean

if TYPE_CHECKING:
    from rules.config import SweepConfig, Variant


def _add_common_paths(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Project root (default: .)",
    )
    parser.add_argument(
        "--out-dir",
        default=None,
        help=(
            "Build output directory, relative paths are taken from the project"
            " root (default: config output dir)"
        ),
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="apksweep")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    clean_parser = subparsers.add_parser(
        "clean", help="Delete stale package and checksum files"
    )
    _add_common_paths(clean_parser)
    clean_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="List stale artifacts without deleting them",
    )
    clean_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the cleanup report as JSON on stdout",
    )
    clean_parser.add_argument(
        "--report",
        default=None,
        help="Write the cleanup report as JSON to this path",
    )

    check_parser = subparsers.add_parser(
        "check", help="Fail if stale artifacts remain in the output directory"
    )
    _add_common_paths(check_parser)

    assemble_parser = subparsers.add_parser(
        "assemble", help="Clean stale artifacts, then run the assembly command"
    )
    assemble_parser.add_argument("variant", choices=("debug", "release"))
    _add_common_paths(assemble_parser)

    return parser


def _resolve_out_dir(root: Path, out_dir: str | None, config: SweepConfig) -> Path:
    if out_dir is None:
        return resolve_output_dir(root, config.output_dir)
    path = Path(out_dir).expanduser()
    if not path.is_absolute():
        path = root / path
    return path.resolve()


def _handle_clean(
    root: Path,
    out_dir: str | None,
    *,
    dry_run: bool,
    as_json: bool,
    report: str | None,
) -> int:
    config = load_config(root)
    resolved_out_dir = _resolve_out_dir(root, out_dir, config)
    result = clean_project(
        root=root, out_dir=resolved_out_dir, config=config, dry_run=dry_run
    )
    if result.error is not None:
        sys.stderr.write(f"failed: {result.directory}: {result.error}\n")
    for failure in result.failed:
        sys.stderr.write(f"failed: {failure.artifact.name}: {failure.reason}\n")
    if report is not None:
        try:
            write_report(Path(report).expanduser().resolve(), result)
        except OSError as exc:
            sys.stderr.write(f"report: {exc}\n")
            return 2
    if as_json:
        sys.stdout.write(dumps_report(result).decode("utf-8") + "\n")
    return 0


def _handle_check(root: Path, out_dir: str | None) -> int:
    config = load_config(root)
    resolved_out_dir = _resolve_out_dir(root, out_dir, config)
    result = check_clean(resolved_out_dir, config=config)
    if not result.ok:
        for name in result.stale:
            sys.stderr.write(f"stale: {name}\n")
        return 1
    return 0


def _handle_assemble(root: Path, out_dir: str | None, variant: str) -> int:
    config = load_config(root)
    resolved_out_dir = _resolve_out_dir(root, out_dir, config)
    try:
        return run_assemble(
            root=root,
            variant=cast("Variant", variant),
            config=config,
            out_dir=resolved_out_dir,
        )
    except AssembleError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    root = Path(args.root).expanduser().resolve()

    try:
        if args.command == "clean":
            return _handle_clean(
                root,
                args.out_dir,
                dry_run=args.dry_run,
                as_json=args.json,
                report=args.report,
            )

        if args.command == "check":
            return _handle_check(root, args.out_dir)

        if args.command == "assemble":
            return _handle_assemble(root, args.out_dir, args.variant)
    except ConfigError as exc:
        sys.stderr.write(f"config: {exc}\n")
        return 2

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())

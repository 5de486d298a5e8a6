"""Command-line entrypoint.

Usage:
    ffcross deps [NAME ...] [--log-json PATH]
    ffcross list
    ffcross cross [--skip-sysroot] [--clean] [--root DIR]
    ffcross configure [--source DIR] [--dry-run] [-- EXTRA ...]
"""

from __future__ import annotations

import argparse
import shlex
import sys
from collections.abc import Sequence
from pathlib import Path

from ffcross.catalog import DESCRIPTORS, supported_names
from ffcross.configure import configure_command, run_configure
from ffcross.cross import CrossBuildLayout, CrossBuildOptions, CrossPipeline
from ffcross.environment import BuildEnvironment
from ffcross.errors import FfcrossError
from ffcross.fallback import build_missing
from ffcross.models import FallbackReport
from ffcross.observability import StructuredLogger
from ffcross.runner import Runner, SubprocessRunner


def cmd_deps(args: argparse.Namespace, *, runner: Runner, logger: StructuredLogger) -> int:
    report = FallbackReport()
    try:
        build_missing(
            args.names,
            environment=BuildEnvironment.from_environ(),
            runner=runner,
            logger=logger,
            report=report,
        )
    finally:
        if report.installed:
            logger.info("build_missing", f"Installed: {', '.join(report.installed)}")
        if args.log_json is not None:
            logger.to_json_lines(args.log_json)
    return 0


def cmd_list(args: argparse.Namespace, *, runner: Runner, logger: StructuredLogger) -> int:
    for name in supported_names():
        descriptor = DESCRIPTORS[name]
        print(f"{name}\t{descriptor.strategy}\t{descriptor.source}")
    return 0


def cmd_cross(args: argparse.Namespace, *, runner: Runner, logger: StructuredLogger) -> int:
    pipeline = CrossPipeline(
        layout=CrossBuildLayout(root=args.root.resolve()),
        options=CrossBuildOptions(skip_sysroot=args.skip_sysroot, clean=args.clean),
        runner=runner,
        logger=logger,
    )
    pipeline.run()
    return 0


def cmd_configure(args: argparse.Namespace, *, runner: Runner, logger: StructuredLogger) -> int:
    if args.dry_run:
        print(shlex.join(configure_command(args.extra)))
        return 0
    environment = BuildEnvironment.from_environ()
    logger.info("configure", f"Configuring FFmpeg in {args.source}")
    run_configure(args.source, environment=environment, runner=runner, extra_args=args.extra)
    logger.success("configure", "configure completed")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ffcross",
        description="FFmpeg ARM64 cross-compilation and static dependency fallback",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    deps_p = sub.add_parser("deps", help="Build missing dependencies from source into PREFIX")
    deps_p.add_argument("names", nargs="*", help="Package names reported missing")
    deps_p.add_argument("--log-json", type=Path, default=None, help="Write structured logs here")
    deps_p.set_defaults(handler=cmd_deps)

    list_p = sub.add_parser("list", help="List package names with a source fallback")
    list_p.set_defaults(handler=cmd_list)

    cross_p = sub.add_parser("cross", help="Run the two-stage docker cross build")
    cross_p.add_argument("--skip-sysroot", action="store_true", help="Reuse the cached sysroot")
    cross_p.add_argument(
        "--clean",
        action="store_true",
        help="Remove cached images and sysroot before building",
    )
    cross_p.add_argument("--root", type=Path, default=Path.cwd(), help="FFmpeg source root")
    cross_p.set_defaults(handler=cmd_cross)

    configure_p = sub.add_parser("configure", help="Run ./configure for aarch64 Linux")
    configure_p.add_argument("--source", type=Path, default=Path.cwd(), help="FFmpeg source root")
    configure_p.add_argument("--dry-run", action="store_true", help="Print the command only")
    configure_p.add_argument("extra", nargs="*", help="Extra configure arguments (after --)")
    configure_p.set_defaults(handler=cmd_configure)

    return parser


def main(
    argv: Sequence[str] | None = None,
    *,
    runner: Runner | None = None,
    logger: StructuredLogger | None = None,
) -> int:
    args = build_parser().parse_args(argv)
    runner = runner or SubprocessRunner()
    logger = logger or StructuredLogger()
    try:
        return int(args.handler(args, runner=runner, logger=logger))
    except FfcrossError as exc:
        logger.error(args.command, str(exc), extra=exc.to_dict())
        print(f"error[{exc.code}]: {exc}", file=sys.stderr)
        return exc.exit_code


if __name__ == "__main__":
    raise SystemExit(main())

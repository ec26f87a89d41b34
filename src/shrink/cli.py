"""Command-line entrypoint.

Usage:
    shrink
    shrink --target aarch64-unknown-linux-gnu --report build/shrink.json
    shrink --dry-run
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from shrink.models import Failure
from shrink.observability import StructuredLogger
from shrink.profiles import DEFAULT_TARGET, tiny_profile
from shrink.report import RunReport
from shrink.sequencer import Sequencer
from shrink.toolchain import CargoDriver, InProcessToolchain, RustupToolchain


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shrink",
        description="Provision a nightly toolchain and build a size-optimized binary.",
    )
    parser.add_argument(
        "--target",
        default=DEFAULT_TARGET,
        help=f"Target triple to build for (default: {DEFAULT_TARGET})",
    )
    parser.add_argument(
        "--manifest-path",
        type=Path,
        default=None,
        help="Path to Cargo.toml (default: the current directory's)",
    )
    parser.add_argument("--report", type=Path, default=None, help="Write a JSON run report")
    parser.add_argument(
        "--log-json",
        type=Path,
        default=None,
        help="Write structured logs as JSON lines",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Sequence against an in-process toolchain; install and compile nothing",
    )
    parser.add_argument("--quiet", action="store_true", help="Only print failures")
    return parser


def build_sequencer(args: argparse.Namespace) -> Sequencer:
    logger = StructuredLogger(echo=not args.quiet)
    if args.dry_run:
        fake = InProcessToolchain()
        return Sequencer(toolchain=fake, compiler=fake, logger=logger)
    return Sequencer(
        toolchain=RustupToolchain(),
        compiler=CargoDriver(manifest_path=args.manifest_path),
        logger=logger,
    )


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    sequencer = build_sequencer(args)
    result = sequencer.run(tiny_profile(target=args.target))

    if args.report is not None:
        RunReport.from_result(result, sequencer.logger).to_json(args.report)
    if args.log_json is not None:
        sequencer.logger.to_json_lines(args.log_json)

    if isinstance(result, Failure):
        print(f"shrink: step `{result.step}` failed: {result.cause}", file=sys.stderr)
        return result.exit_code
    if not args.quiet:
        print(f"Built {result.artifact.output_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

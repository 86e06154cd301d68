# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Command-line entry point for running a command file through the engine.

Example usage:
    priority-seating commands.txt

Writes results to commands.txt_output_file.txt unless --output is given.
"""

import argparse
import json
import logging
import sys

from .commands.processor import CommandProcessor
from .config import EngineConfig, ProcessorConfig
from .observability.collector import UnifiedMetricsCollector

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="priority-seating",
        description="Run a file of seat allocation commands and write one result per command",
        epilog="Example: priority-seating commands.txt --output results.txt",
    )
    parser.add_argument("input", help="Path to the command file")
    parser.add_argument("--output",
                        help="Path of the result file (default: INPUT plus '_output_file.txt')")
    parser.add_argument("--log-level", choices=LOG_LEVELS, default="WARNING",
                        help="Logging level (default: WARNING)")
    parser.add_argument("--check-invariants", action="store_true",
                        help="Verify engine invariants after every operation")
    parser.add_argument("--show-metrics", action="store_true",
                        help="Print collected metrics as JSON to stderr when done")
    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Run the CLI.

    Returns:
        Process exit code: 0 on success, 1 if a file could not be read,
        decoded or written
    """
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    metrics = UnifiedMetricsCollector(enable_prometheus=False)
    processor = CommandProcessor(
        config=ProcessorConfig(),
        engine_config=EngineConfig(check_invariants=args.check_invariants),
        metrics=metrics,
    )

    try:
        target = processor.run_file(args.input, args.output)
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Cannot process %s: %s", args.input, e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logger.info("Results written to %s", target)
    if args.show_metrics:
        print(json.dumps(metrics.get_flat_metrics(), indent=2, sort_keys=True), file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
SMALLSTEP Command-Line Interface

Runs the built-in example programs and prints their reduction traces.

Usage:
    smallstep list                          # List built-in programs
    smallstep show increment                # Show a program without running it
    smallstep run increment                 # Run and print the trace
    smallstep run triple-loop -f verbose    # Choose a trace format
    smallstep run triple-loop --max-steps 5 # Bound the run
    smallstep run arithmetic -f json        # JSON trace

Trace formats:
    lines      one "program, environment" line per configuration (default)
    verbose    Initial / numbered steps / Final
    chain      program renderings joined by arrows
    compact    single line summary
    json       machine-readable trace

Logging goes to stderr. Set the level with --log-level or the
SMALLSTEP_LOG_LEVEL environment variable (default WARNING).

Exit codes:
    0  success
    1  the program failed to reduce (unbound variable, bad condition, step limit)
    2  unknown program name or bad arguments
"""

import argparse
import sys
from typing import List, Optional

from loguru import logger

from . import __version__
from .errors import ReductionError, StepLimitExceeded
from .logging_utils import configure_logging
from .machine import Machine
from .programs import PROGRAMS, get_program, program_names

TRACE_FORMATS = ["lines", "verbose", "chain", "compact", "json"]


def non_negative_int(value: str) -> int:
    """argparse type for step bounds."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {number}")
    return number


def list_programs() -> str:
    """One line per built-in program: name and description."""
    width = max(len(name) for name in PROGRAMS)
    return "\n".join(f"{name:<{width}}  {program.description}"
                     for name, program in PROGRAMS.items())


def show_program(name: str) -> str:
    program, environment = get_program(name).build()
    return f"program:     {program}\nenvironment: {environment}"


def run_program(name: str, fmt: str = "lines", max_steps: Optional[int] = None) -> int:
    """
    Run a built-in program and print its trace.

    Returns:
        Exit code (0 for success)
    """
    program, environment = get_program(name).build()
    machine = Machine(program, environment, max_steps=max_steps)
    logger.info("cli.run program={} max_steps={}", name, max_steps)

    try:
        trace = machine.run()
    except StepLimitExceeded as e:
        if e.trace is not None and fmt != "json":
            print(e.trace.format(fmt))
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ReductionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if fmt == "json":
        print(trace.to_json())
    else:
        print(trace.format(fmt))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="smallstep",
        description="SMALLSTEP - small-step reduction of SIMPLE programs",
        epilog="Examples:\n"
               "  smallstep list                       List programs\n"
               "  smallstep run increment              Run and print the trace\n"
               "  smallstep run triple-loop -f chain   Show program rewrites only\n",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level for stderr output (default: $SMALLSTEP_LOG_LEVEL or WARNING)"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("list", help="List built-in programs")

    show = subparsers.add_parser("show", help="Show a program and its environment")
    show.add_argument("name", help="Program name")

    run = subparsers.add_parser("run", help="Run a program and print its trace")
    run.add_argument("name", help="Program name")
    run.add_argument(
        "-f", "--format",
        default="lines",
        choices=TRACE_FORMATS,
        help="Trace format"
    )
    run.add_argument(
        "-n", "--max-steps",
        type=non_negative_int,
        default=None,
        help="Stop with an error after this many steps"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    if args.command is None:
        parser.print_help()
        return 2

    if args.command == "list":
        print(list_programs())
        return 0

    if args.name not in PROGRAMS:
        print(f"Unknown program: {args.name}. "
              f"Available: {', '.join(program_names())}", file=sys.stderr)
        return 2

    if args.command == "show":
        print(show_program(args.name))
        return 0

    return run_program(args.name, fmt=args.format, max_steps=args.max_steps)


if __name__ == "__main__":
    sys.exit(main())

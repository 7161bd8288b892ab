from __future__ import annotations

import argparse
import io
import logging
import sys
from pathlib import Path
from typing import BinaryIO, Optional

from .errors import BrainfuckError, ExecutionError
from .machine import DEFAULT_TAPE_LENGTH, Machine, PointerPolicy, compile_program
from .opcodes import to_source
from .ports import StreamPort

logger = logging.getLogger(__name__)


def _read_source(path: str) -> str:
    source_path = Path(path)
    if not source_path.exists():
        raise FileNotFoundError(f"Source file not found: {path}")
    return source_path.read_text(encoding="utf-8")


def _setup_logging(verbose: int, quiet: bool) -> None:
    if quiet:
        level = logging.ERROR
    elif verbose == 0:
        level = logging.WARNING
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run a Brainfuck program")
    parser.add_argument("source", help="Path to Brainfuck source file")
    parser.add_argument(
        "cells",
        nargs="?",
        type=_positive_int,
        default=DEFAULT_TAPE_LENGTH,
        help=f"Number of tape cells (default: {DEFAULT_TAPE_LENGTH})",
    )
    parser.add_argument(
        "--bounds-check",
        action="store_true",
        help="Fail when the pointer leaves the tape instead of wrapping around",
    )
    parser.add_argument(
        "--no-condense",
        action="store_true",
        help="Execute one opcode per source character",
    )
    parser.add_argument(
        "--input",
        help="Input string supplied to the program instead of stdin",
    )
    parser.add_argument(
        "--max-steps",
        type=_positive_int,
        help="Abort after this many executed opcodes (default: unlimited)",
    )
    parser.add_argument(
        "--emit",
        action="store_true",
        help="Print the compiled program as Brainfuck source and exit",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase verbosity (-v, -vv)")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only report errors")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _setup_logging(args.verbose, args.quiet)

    try:
        source_text = _read_source(args.source)
    except (OSError, UnicodeDecodeError) as exc:
        print(str(exc), file=sys.stderr)
        return 1

    if args.emit:
        try:
            program = compile_program(source_text, condense=not args.no_condense)
        except BrainfuckError as exc:
            print(f"Parse error ({exc.kind}): {exc}", file=sys.stderr)
            return 1
        sys.stdout.write(to_source(program) + "\n")
        return 0

    reader: Optional[BinaryIO] = None
    if args.input is not None:
        try:
            reader = io.BytesIO(args.input.encode("latin-1"))
        except UnicodeEncodeError:
            print(
                "Input must contain only characters in the range U+0000..U+00FF",
                file=sys.stderr,
            )
            return 1

    machine = Machine(
        tape_length=args.cells,
        pointer_policy=PointerPolicy.ERROR if args.bounds_check else PointerPolicy.WRAP,
        condense=not args.no_condense,
        port=StreamPort(reader=reader),
        max_steps=args.max_steps,
    )

    try:
        machine.load(source_text)
    except BrainfuckError as exc:
        print(f"Parse error ({exc.kind}): {exc}", file=sys.stderr)
        return 1

    try:
        steps = machine.execute()
    except ExecutionError as exc:
        print(f"Runtime error ({exc.kind}): {exc}", file=sys.stderr)
        return 1

    logger.info("executed %d steps", steps)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

from __future__ import annotations

import argparse
import sys
from typing import Optional

from .codegen import DATA_SIZE
from .compiler import BrainfuckCompiler, DestinationUnwritable, SourceUnreadable
from .parser import ParseError


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="bfasm",
        description="Compile Brainfuck source into x86-64 NASM assembly",
    )
    parser.add_argument("source", help="Path to Brainfuck source file (.bf)")
    parser.add_argument(
        "-o",
        "--output",
        help="Destination for the assembly (default: source path with .asm suffix)",
    )
    parser.add_argument(
        "--tape-size",
        type=int,
        default=DATA_SIZE,
        help=f"Number of DWORD cells reserved for the tape (default: {DATA_SIZE})",
    )
    args = parser.parse_args(argv)

    if args.tape_size < 1:
        parser.error("--tape-size must be a positive integer")

    compiler = BrainfuckCompiler(tape_size=args.tape_size)
    try:
        destination = compiler.compile_file(args.source, args.output)
    except SourceUnreadable as exc:
        print(f"error: could not find or open '{args.source}': {exc.reason}", file=sys.stderr)
        return 1
    except ParseError as exc:
        print(f"error: {args.source}: {exc}", file=sys.stderr)
        return 1
    except DestinationUnwritable as exc:
        print(f"error: could not write to {exc.path}: {exc.reason}", file=sys.stderr)
        return 1

    print(f"info: successfully wrote to {destination}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

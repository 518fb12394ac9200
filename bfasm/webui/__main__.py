from __future__ import annotations

import argparse
from typing import Optional

import uvicorn

from bfasm.codegen import DATA_SIZE

from .app import create_app


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="python -m bfasm.webui",
        description="Serve the bfasm parse/compile HTTP API",
    )
    parser.add_argument("--host", default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8000, help="Port to listen on (default: 8000)")
    parser.add_argument(
        "--tape-size",
        type=int,
        default=DATA_SIZE,
        help=f"Tape size used when a compile request omits one (default: {DATA_SIZE})",
    )
    args = parser.parse_args(argv)

    if args.tape_size < 1:
        parser.error("--tape-size must be a positive integer")

    uvicorn.run(create_app(tape_size=args.tape_size), host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

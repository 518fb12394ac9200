from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .codegen import DATA_SIZE, AsmGenerator
from .parser import Program, parse, parse_text, split_lines

PathLike = Union[str, Path]

SOURCE_SUFFIXES = (".bf", ".b")
ASM_SUFFIX = ".asm"


class CompileIOError(Exception):
    """Base class for failures reading the source or writing the assembly."""

    def __init__(self, path: PathLike, reason: str) -> None:
        super().__init__(f"{reason}: {path}")
        self.path = Path(path)
        self.reason = reason


class SourceUnreadable(CompileIOError):
    pass


class DestinationUnwritable(CompileIOError):
    pass


def read_source(path: PathLike) -> List[str]:
    source_path = Path(path)
    try:
        # bytes, so a lone '\r' is not turned into a line break
        text = source_path.read_bytes().decode("utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceUnreadable(source_path, _describe(exc)) from exc
    return split_lines(text)


def write_output(path: PathLike, data: str) -> None:
    """Write ``data`` to ``path`` in full or not at all.

    The text goes to a temporary file beside the destination, which is then
    renamed over it. On failure the temporary file is removed and any existing
    destination is left untouched.
    """
    output_path = Path(path)
    temp_name: Optional[str] = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=output_path.parent,
            prefix=f".{output_path.name}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            temp_name = handle.name
            handle.write(data)
        os.replace(temp_name, output_path)
    except OSError as exc:
        if temp_name is not None:
            Path(temp_name).unlink(missing_ok=True)
        raise DestinationUnwritable(output_path, _describe(exc)) from exc


def output_path_for(path: PathLike) -> Path:
    """``prog.bf`` becomes ``prog.asm``; unknown suffixes get ``.asm`` appended."""
    source_path = Path(path)
    if source_path.suffix.lower() in SOURCE_SUFFIXES:
        return source_path.with_suffix(ASM_SUFFIX)
    return source_path.with_name(source_path.name + ASM_SUFFIX)


def _describe(exc: Exception) -> str:
    if isinstance(exc, OSError) and exc.strerror:
        return exc.strerror
    return str(exc)


class BrainfuckCompiler:
    def __init__(self, tape_size: int = DATA_SIZE) -> None:
        self.generator = AsmGenerator(tape_size=tape_size)

    @property
    def tape_size(self) -> int:
        return self.generator.tape_size

    def parse(self, source: str) -> Program:
        return parse_text(source)

    def compile(self, source: str) -> str:
        return self.compile_lines(split_lines(source))

    def compile_lines(self, lines: Iterable[str]) -> str:
        program = parse(lines)
        return self.generator.generate(program)

    def compile_file(self, source_path: PathLike, output_path: Optional[PathLike] = None) -> Path:
        """Compile ``source_path`` and write the assembly, returning where it went.

        The assembly is generated in full before the destination is touched,
        so a parse error never leaves a partial file behind.
        """
        lines = read_source(source_path)
        assembly = self.compile_lines(lines)
        destination = Path(output_path) if output_path is not None else output_path_for(source_path)
        write_output(destination, assembly)
        return destination


__all__ = [
    "ASM_SUFFIX",
    "BrainfuckCompiler",
    "CompileIOError",
    "DestinationUnwritable",
    "SOURCE_SUFFIXES",
    "SourceUnreadable",
    "output_path_for",
    "read_source",
    "write_output",
]

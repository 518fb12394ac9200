from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Dict, Iterable, List, Optional, Tuple, Type


class ParseError(Exception):
    """Raised when Brainfuck source has mismatched loop brackets."""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"{self.message} (line {self.line}, column {self.column})"


class UnmatchedCloseBracket(ParseError):
    pass


class UnmatchedOpenBracket(ParseError):
    pass


# === Instructions ===


@dataclass(frozen=True)
class Instruction:
    symbol: ClassVar[str] = ""


@dataclass(frozen=True)
class MoveRight(Instruction):
    symbol: ClassVar[str] = ">"


@dataclass(frozen=True)
class MoveLeft(Instruction):
    symbol: ClassVar[str] = "<"


@dataclass(frozen=True)
class Increment(Instruction):
    symbol: ClassVar[str] = "+"


@dataclass(frozen=True)
class Decrement(Instruction):
    symbol: ClassVar[str] = "-"


@dataclass(frozen=True)
class Output(Instruction):
    symbol: ClassVar[str] = "."


@dataclass(frozen=True)
class Input(Instruction):
    symbol: ClassVar[str] = ","


@dataclass(frozen=True)
class LoopStart(Instruction):
    """``[``; ``target`` is the position of the matching ``LoopEnd``."""

    target: int
    symbol: ClassVar[str] = "["


@dataclass(frozen=True)
class LoopEnd(Instruction):
    """``]``; ``target`` is the position of the matching ``LoopStart``."""

    target: int
    symbol: ClassVar[str] = "]"


Program = Tuple[Instruction, ...]

_SIMPLE_COMMANDS: Dict[str, Type[Instruction]] = {
    cls.symbol: cls for cls in (MoveRight, MoveLeft, Increment, Decrement, Output, Input)
}


# === Parser ===


def parse(lines: Iterable[str]) -> Program:
    """Parse Brainfuck source lines into a program with resolved loop targets.

    Characters other than the eight commands are comments and do not take a
    position. Raises ``UnmatchedCloseBracket`` as soon as a ``]`` has nothing
    to close and ``UnmatchedOpenBracket`` if a ``[`` is still open at the end.
    """
    instructions: List[Instruction] = []
    # (pc, line, column) of every LoopStart that is still open
    stack: List[Tuple[int, int, int]] = []
    pc = 0

    for line_no, line in enumerate(lines, start=1):
        for column, char in enumerate(line, start=1):
            command = _SIMPLE_COMMANDS.get(char)
            if command is not None:
                instructions.append(command())
            elif char == "[":
                # placeholder target, back-patched when the matching ']' is read
                instructions.append(LoopStart(target=0))
                stack.append((pc, line_no, column))
            elif char == "]":
                if not stack:
                    raise UnmatchedCloseBracket("unmatched ']'", line=line_no, column=column)
                start_pc, _, _ = stack.pop()
                instructions.append(LoopEnd(target=start_pc))
                instructions[start_pc] = LoopStart(target=pc)
            else:
                continue
            pc += 1

    if stack:
        _, line_no, column = stack[0]
        raise UnmatchedOpenBracket("unmatched '['", line=line_no, column=column)
    return tuple(instructions)


def split_lines(source: str) -> List[str]:
    """Split on ``\\n`` only, dropping a trailing ``\\r`` from each line.

    Form feeds and other Unicode line separators stay inside their line as
    comment characters, so reported line numbers match a text editor's.
    """
    lines = source.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def parse_text(source: str) -> Program:
    return parse(split_lines(source))


def loop_count(program: Program) -> int:
    return sum(1 for instruction in program if isinstance(instruction, LoopStart))


__all__ = [
    "Decrement",
    "Increment",
    "Input",
    "Instruction",
    "LoopEnd",
    "LoopStart",
    "MoveLeft",
    "MoveRight",
    "Output",
    "ParseError",
    "Program",
    "UnmatchedCloseBracket",
    "UnmatchedOpenBracket",
    "loop_count",
    "parse",
    "parse_text",
    "split_lines",
]

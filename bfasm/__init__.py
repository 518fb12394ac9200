from .codegen import DATA_SIZE, AsmGenerator, generate
from .compiler import BrainfuckCompiler, CompileIOError, DestinationUnwritable, SourceUnreadable
from .parser import (
    Decrement,
    Increment,
    Input,
    Instruction,
    LoopEnd,
    LoopStart,
    MoveLeft,
    MoveRight,
    Output,
    ParseError,
    Program,
    UnmatchedCloseBracket,
    UnmatchedOpenBracket,
    parse,
    parse_text,
)

__all__ = [
    "AsmGenerator",
    "BrainfuckCompiler",
    "CompileIOError",
    "DATA_SIZE",
    "Decrement",
    "DestinationUnwritable",
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
    "SourceUnreadable",
    "UnmatchedCloseBracket",
    "UnmatchedOpenBracket",
    "generate",
    "parse",
    "parse_text",
]

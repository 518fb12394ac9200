from __future__ import annotations

from dataclasses import dataclass
from typing import List, TextIO

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
    Program,
)

# Number of DWORD cells reserved for the tape in the .bss segment
DATA_SIZE = 256

READ_CHAR = "_getch"
WRITE_CHAR = "putchar"

_CURRENT_CELL = "[tape + 4 * ebx]"


@dataclass
class AsmGenerator:
    """Emits NASM x86-64 text for a parsed Brainfuck program.

    The generated ``main`` keeps the data pointer in the ``dp`` DWORD and the
    tape in ``tape``. Every instruction becomes one block of assembly; loops
    get a ``JUMP_<pc>`` / ``RETURN_<pc>`` label pair keyed by position.
    """

    tape_size: int = DATA_SIZE

    def __post_init__(self) -> None:
        if self.tape_size < 1:
            raise ValueError(f"tape size must be positive, got {self.tape_size}")

    def generate(self, program: Program) -> str:
        output: List[str] = []
        self._emit_header(output)
        for pc, instruction in enumerate(program):
            self._emit_instruction(pc, instruction, output)
        self._emit_footer(output)
        return "".join(f"{line}\n" for line in output)

    def write(self, program: Program, stream: TextIO) -> None:
        stream.write(self.generate(program))

    # --- Helpers ---

    def _emit_header(self, output: List[str]) -> None:
        output.extend(
            [
                "bits 64",
                "default rel",
                "",
                "segment .data",
                "\tdp dd 0",
                "",
                "segment .bss",
                f"\ttape resd {self.tape_size}",
                "",
                "segment .text",
                "global main",
                "",
                f"extern {READ_CHAR}",
                f"extern {WRITE_CHAR}",
                "",
                "main:",
                "\tpush rbp",
                "\tmov rbp, rsp",
                "\tsub rsp, 32",
                "",
            ]
        )

    def _emit_footer(self, output: List[str]) -> None:
        # leave the stack frame and return 0
        output.extend(
            [
                "",
                "\tmov rsp, rbp",
                "\tpop rbp",
                "",
                "\txor rax, rax",
                "\tret",
            ]
        )

    def _emit_instruction(self, pc: int, instruction: Instruction, output: List[str]) -> None:
        if isinstance(instruction, MoveRight):
            output.append("\tinc dword [dp]")
        elif isinstance(instruction, MoveLeft):
            output.append("\tdec dword [dp]")
        elif isinstance(instruction, Increment):
            output.append("\tmov ebx, [dp]")
            output.append(f"\tinc dword {_CURRENT_CELL}")
        elif isinstance(instruction, Decrement):
            output.append("\tmov ebx, [dp]")
            output.append(f"\tdec dword {_CURRENT_CELL}")
        elif isinstance(instruction, Output):
            output.append("\tmov ebx, [dp]")
            output.append(f"\tmov ecx, {_CURRENT_CELL}")
            output.append(f"\tcall {WRITE_CHAR}")
        elif isinstance(instruction, Input):
            output.append(f"\tcall {READ_CHAR}")
            output.append("\tmov ebx, [dp]")
            output.append(f"\tmov {_CURRENT_CELL}, eax")
        elif isinstance(instruction, LoopStart):
            output.append(f"{jump_label(pc)}:")
            output.append("\tmov ebx, [dp]")
            output.append(f"\tcmp dword {_CURRENT_CELL}, 0")
            output.append(f"\tje {return_label(instruction.target)}")
        elif isinstance(instruction, LoopEnd):
            output.append(f"{return_label(pc)}:")
            output.append("\tmov ebx, [dp]")
            output.append(f"\tcmp dword {_CURRENT_CELL}, 0")
            output.append(f"\tjne {jump_label(instruction.target)}")
        else:
            raise TypeError(f"Unhandled instruction type: {instruction!r}")


def jump_label(pc: int) -> str:
    return f"JUMP_{pc}"


def return_label(pc: int) -> str:
    return f"RETURN_{pc}"


def generate(program: Program, tape_size: int = DATA_SIZE) -> str:
    return AsmGenerator(tape_size=tape_size).generate(program)


__all__ = [
    "AsmGenerator",
    "DATA_SIZE",
    "generate",
    "jump_label",
    "return_label",
]

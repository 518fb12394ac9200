from __future__ import annotations

from typing import List, Optional

from fastapi import FastAPI, HTTPException, status
from pydantic import BaseModel, Field

from bfasm.codegen import DATA_SIZE
from bfasm.compiler import BrainfuckCompiler
from bfasm.parser import Instruction, LoopEnd, LoopStart, ParseError, Program, loop_count


def _instruction_to_dict(pc: int, instruction: Instruction) -> dict:
    target: Optional[int] = None
    if isinstance(instruction, (LoopStart, LoopEnd)):
        target = instruction.target
    return {
        "pc": pc,
        "op": type(instruction).__name__,
        "symbol": instruction.symbol,
        "target": target,
    }


def _parse_error_detail(exc: ParseError) -> dict:
    return {
        "error": type(exc).__name__,
        "message": exc.message,
        "line": exc.line,
        "column": exc.column,
    }


class ParseRequest(BaseModel):
    source: str = ""


class CompileRequest(BaseModel):
    source: str = ""
    tape_size: Optional[int] = Field(default=None, ge=1)


class InstructionPayload(BaseModel):
    pc: int
    op: str
    symbol: str
    target: Optional[int]


class ParsePayload(BaseModel):
    instructions: List[InstructionPayload]
    instruction_count: int
    loop_count: int


class CompilePayload(BaseModel):
    assembly: str
    instruction_count: int
    loop_count: int
    tape_size: int


def create_app(tape_size: int = DATA_SIZE) -> FastAPI:
    """Build the API; requests that omit ``tape_size`` use the one given here."""
    if tape_size < 1:
        raise ValueError(f"tape size must be positive, got {tape_size}")
    app = FastAPI(title="bfasm API", version="0.1.0")
    app.state.tape_size = tape_size

    def _parse_or_422(compiler: BrainfuckCompiler, source: str) -> Program:
        try:
            return compiler.parse(source)
        except ParseError as exc:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=_parse_error_detail(exc),
            ) from exc

    @app.post("/api/parse", response_model=ParsePayload)
    def parse_source(payload: ParseRequest) -> ParsePayload:
        program = _parse_or_422(BrainfuckCompiler(), payload.source)
        return ParsePayload(
            instructions=[
                InstructionPayload(**_instruction_to_dict(pc, instruction))
                for pc, instruction in enumerate(program)
            ],
            instruction_count=len(program),
            loop_count=loop_count(program),
        )

    @app.post("/api/compile", response_model=CompilePayload)
    def compile_source(payload: CompileRequest) -> CompilePayload:
        compiler = BrainfuckCompiler(tape_size=payload.tape_size or tape_size)
        program = _parse_or_422(compiler, payload.source)
        return CompilePayload(
            assembly=compiler.generator.generate(program),
            instruction_count=len(program),
            loop_count=loop_count(program),
            tape_size=compiler.tape_size,
        )

    return app


__all__ = ["create_app"]

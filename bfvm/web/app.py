from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import FastAPI, HTTPException, status
from pydantic import BaseModel, Field

from bfvm.errors import BrainfuckError, ExecutionError, ParseError, StepLimitExceeded
from bfvm.machine import DEFAULT_TAPE_LENGTH, Machine, PointerPolicy, compile_program
from bfvm.ports import BufferPort

logger = logging.getLogger(__name__)


def _string_to_input_bytes(data: str) -> bytes:
    return data.encode("latin-1")


def _error_detail(exc: BrainfuckError) -> dict:
    return {
        "kind": exc.kind,
        "position": getattr(exc, "position", None),
        "message": str(exc),
    }


class CheckRequest(BaseModel):
    code: str
    condense: bool = True


class CheckResponse(BaseModel):
    valid: bool
    opcode_count: int
    loop_count: int


class RunRequest(BaseModel):
    code: str
    input: str = ""
    tape_length: int = Field(default=DEFAULT_TAPE_LENGTH, ge=1)
    pointer_policy: PointerPolicy = PointerPolicy.WRAP
    condense: bool = True
    max_steps: Optional[int] = Field(default=None, ge=1)


class ErrorInfo(BaseModel):
    kind: str
    position: Optional[int]
    message: str


class RunResponse(BaseModel):
    status: str
    output: str
    output_bytes: List[int]
    pointer: int
    steps: int
    error: Optional[ErrorInfo] = None


def create_app() -> FastAPI:
    app = FastAPI(title="bfvm API", version="0.1.0")

    @app.post("/api/check", response_model=CheckResponse)
    def check_program(payload: CheckRequest) -> CheckResponse:
        try:
            program = compile_program(payload.code, condense=payload.condense)
        except ParseError as exc:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=_error_detail(exc),
            ) from exc
        return CheckResponse(
            valid=True,
            opcode_count=len(program),
            loop_count=sum(1 for op in program if op.is_loop) // 2,
        )

    @app.post("/api/run", response_model=RunResponse)
    def run_program(payload: RunRequest) -> RunResponse:
        try:
            input_bytes = _string_to_input_bytes(payload.input)
        except UnicodeEncodeError as exc:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="input must contain only characters in the range U+0000..U+00FF",
            ) from exc

        port = BufferPort(input_bytes)
        machine = Machine(
            tape_length=payload.tape_length,
            pointer_policy=payload.pointer_policy,
            condense=payload.condense,
            port=port,
            max_steps=payload.max_steps,
        )
        try:
            machine.load(payload.code)
        except ParseError as exc:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=_error_detail(exc),
            ) from exc

        error: Optional[ErrorInfo] = None
        try:
            machine.execute()
        except StepLimitExceeded as exc:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=_error_detail(exc),
            ) from exc
        except ExecutionError as exc:
            logger.info("run aborted: %s", exc)
            error = ErrorInfo(**_error_detail(exc))

        output = port.output
        return RunResponse(
            status="ok" if error is None else "error",
            output=output.decode("latin-1"),
            output_bytes=list(output),
            pointer=machine.pointer,
            steps=machine.steps,
            error=error,
        )

    return app


__all__ = ["create_app"]

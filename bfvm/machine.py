from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .condenser import condense as condense_opcodes
from .errors import InputExhausted, StepLimitExceeded, TapeBoundsExceeded
from .lexer import tokenize
from .opcodes import OpKind, Opcode, Program
from .ports import IOPort, StreamPort
from .resolver import resolve

logger = logging.getLogger(__name__)

DEFAULT_TAPE_LENGTH = 30000


class PointerPolicy(str, Enum):
    WRAP = "wrap"
    ERROR = "error"


def compile_program(source: str, condense: bool = True) -> Program:
    """Lex, optionally condense, then resolve ``source`` into a runnable program.

    Condensing happens before resolution so that jump targets always refer to
    positions in the final opcode sequence.
    """
    opcodes = tokenize(source)
    if condense:
        opcodes = condense_opcodes(opcodes)
    return resolve(opcodes)


@dataclass
class Machine:
    tape_length: int = DEFAULT_TAPE_LENGTH
    pointer_policy: PointerPolicy = PointerPolicy.WRAP
    condense: bool = True
    port: IOPort = field(default_factory=StreamPort)
    max_steps: Optional[int] = None

    tape: bytearray = field(init=False, repr=False)
    pointer: int = field(init=False, repr=False)
    pc: int = field(init=False, repr=False)
    steps: int = field(init=False, repr=False)
    program: Optional[Program] = field(init=False, repr=False, default=None)

    def __post_init__(self) -> None:
        if self.tape_length < 1:
            raise ValueError("tape_length must be at least 1")
        self.pointer_policy = PointerPolicy(self.pointer_policy)
        self.reset()

    def reset(self) -> None:
        self.tape = bytearray(self.tape_length)
        self.pointer = 0
        self.pc = 0
        self.steps = 0

    def load(self, source: str) -> Program:
        # A malformed source raises here and leaves no program loaded.
        self.program = None
        program = compile_program(source, condense=self.condense)
        self.program = program
        self.reset()
        logger.debug("loaded program of %d opcodes (tape_length=%d)", len(program), self.tape_length)
        return program

    def run(self, source: str) -> int:
        self.load(source)
        return self.execute()

    def execute(self) -> int:
        if self.program is None:
            raise RuntimeError("No program loaded")
        program = self.program
        code_length = len(program)

        while self.pc < code_length:
            if self.max_steps is not None and self.steps >= self.max_steps:
                raise StepLimitExceeded(self.pc, self.steps)
            self.pc = self._execute_instruction(program[self.pc], self.pc)
            self.steps += 1

        logger.debug("program halted after %d steps, pointer=%d", self.steps, self.pointer)
        return self.steps

    def _execute_instruction(self, op: Opcode, pc: int) -> int:
        new_pc = pc + 1
        kind = op.kind
        if kind is OpKind.INC_CELL:
            self.tape[self.pointer] = (self.tape[self.pointer] + op.count) & 0xFF
        elif kind is OpKind.DEC_CELL:
            self.tape[self.pointer] = (self.tape[self.pointer] - op.count) & 0xFF
        elif kind is OpKind.INC_PTR:
            self.pointer = self._move_pointer(self.pointer + op.count, pc)
        elif kind is OpKind.DEC_PTR:
            self.pointer = self._move_pointer(self.pointer - op.count, pc)
        elif kind is OpKind.OUTPUT:
            self.port.write_byte(self.tape[self.pointer])
        elif kind is OpKind.INPUT:
            value = self.port.read_byte()
            if value is None:
                raise InputExhausted(pc)
            self.tape[self.pointer] = value & 0xFF
        elif kind is OpKind.LOOP_START:
            if self.tape[self.pointer] == 0:
                new_pc = op.target + 1
        elif kind is OpKind.LOOP_END:
            # Jump back onto the '[' itself so its zero test runs again.
            if self.tape[self.pointer] != 0:
                new_pc = op.target
        return new_pc

    def _move_pointer(self, position: int, pc: int) -> int:
        if self.pointer_policy is PointerPolicy.WRAP:
            return position % self.tape_length
        if not 0 <= position < self.tape_length:
            raise TapeBoundsExceeded(pc, position)
        return position


__all__ = [
    "DEFAULT_TAPE_LENGTH",
    "Machine",
    "PointerPolicy",
    "compile_program",
]

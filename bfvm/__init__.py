from .condenser import condense
from .errors import (
    BrainfuckError,
    ExecutionError,
    InputExhausted,
    ParseError,
    StepLimitExceeded,
    TapeBoundsExceeded,
    UnmatchedClosedBracket,
    UnmatchedOpenBracket,
)
from .lexer import tokenize
from .machine import Machine, PointerPolicy, compile_program
from .opcodes import UNRESOLVED, OpKind, Opcode, Program
from .ports import BufferPort, IOPort, StreamPort
from .resolver import resolve

__all__ = [
    "BrainfuckError",
    "BufferPort",
    "ExecutionError",
    "IOPort",
    "InputExhausted",
    "Machine",
    "OpKind",
    "Opcode",
    "ParseError",
    "PointerPolicy",
    "Program",
    "StepLimitExceeded",
    "StreamPort",
    "TapeBoundsExceeded",
    "UNRESOLVED",
    "UnmatchedClosedBracket",
    "UnmatchedOpenBracket",
    "compile_program",
    "condense",
    "resolve",
    "tokenize",
]

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Tuple

UNRESOLVED = -1


class OpKind(str, Enum):
    INC_CELL = "+"
    DEC_CELL = "-"
    INC_PTR = ">"
    DEC_PTR = "<"
    OUTPUT = "."
    INPUT = ","
    LOOP_START = "["
    LOOP_END = "]"


# Kinds the condenser may merge into a single counted opcode.
COUNTED_KINDS = frozenset({OpKind.INC_CELL, OpKind.DEC_CELL, OpKind.INC_PTR, OpKind.DEC_PTR})
LOOP_KINDS = frozenset({OpKind.LOOP_START, OpKind.LOOP_END})


@dataclass(frozen=True)
class Opcode:
    kind: OpKind
    count: int = 1
    target: int = UNRESOLVED

    def __post_init__(self) -> None:
        if self.count < 1:
            raise ValueError(f"Opcode count must be positive, got {self.count}")

    @property
    def is_loop(self) -> bool:
        return self.kind in LOOP_KINDS

    @property
    def resolved(self) -> bool:
        return not self.is_loop or self.target != UNRESOLVED

    def to_source(self) -> str:
        return self.kind.value * self.count


Program = Tuple[Opcode, ...]


def to_source(opcodes: Iterable[Opcode]) -> str:
    return "".join(op.to_source() for op in opcodes)


__all__ = ["UNRESOLVED", "OpKind", "Opcode", "Program", "COUNTED_KINDS", "LOOP_KINDS", "to_source"]

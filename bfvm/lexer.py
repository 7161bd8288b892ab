from __future__ import annotations

from typing import List

from .opcodes import OpKind, Opcode

_SYMBOLS = {kind.value: kind for kind in OpKind}


def tokenize(source: str) -> List[Opcode]:
    """Map each significant character to one opcode; everything else is a comment."""
    return [Opcode(_SYMBOLS[char]) for char in source if char in _SYMBOLS]


__all__ = ["tokenize"]

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Sequence

from .errors import UnmatchedClosedBracket, UnmatchedOpenBracket
from .opcodes import OpKind, Opcode, Program

logger = logging.getLogger(__name__)


def resolve(opcodes: Sequence[Opcode]) -> Program:
    """Pair every loop opcode with its counterpart and return an immutable program.

    Each ``[`` at index ``i`` matched with ``]`` at ``j`` comes back with
    ``target == j`` and the ``]`` with ``target == i``. When brackets are left
    open after the scan, the innermost one (the last pushed) is reported.
    """
    targets: List[int] = [op.target for op in opcodes]
    stack: List[int] = []
    for index, op in enumerate(opcodes):
        if op.kind is OpKind.LOOP_START:
            stack.append(index)
        elif op.kind is OpKind.LOOP_END:
            if not stack:
                raise UnmatchedClosedBracket(index)
            start = stack.pop()
            targets[start] = index
            targets[index] = start
    if stack:
        raise UnmatchedOpenBracket(stack.pop())

    program = tuple(
        replace(op, target=target) if op.is_loop else op
        for op, target in zip(opcodes, targets)
    )
    logger.debug("resolved %d opcodes", len(program))
    return program


__all__ = ["resolve"]

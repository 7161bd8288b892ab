from __future__ import annotations

import logging
from typing import List, Sequence

from .opcodes import COUNTED_KINDS, UNRESOLVED, Opcode

logger = logging.getLogger(__name__)


def condense(opcodes: Sequence[Opcode]) -> List[Opcode]:
    """Merge runs of identical cell/pointer adjustments into counted opcodes.

    Indices shift, so loop opcodes come out with their targets cleared and
    the result must go through ``resolve`` before it can be executed.
    """
    condensed: List[Opcode] = []
    length = len(opcodes)
    index = 0
    while index < length:
        op = opcodes[index]
        if op.kind in COUNTED_KINDS:
            count = 0
            while index < length and opcodes[index].kind is op.kind:
                count += opcodes[index].count
                index += 1
            condensed.append(Opcode(op.kind, count))
            continue
        if op.is_loop:
            condensed.append(Opcode(op.kind, target=UNRESOLVED))
        else:
            condensed.append(op)
        index += 1
    logger.debug("condensed %d opcodes into %d", length, len(condensed))
    return condensed


__all__ = ["condense"]

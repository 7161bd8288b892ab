from __future__ import annotations


class BrainfuckError(Exception):
    """Base class for every failure raised while loading or running a program."""

    kind = "error"


class ParseError(BrainfuckError):
    kind = "parse_error"

    def __init__(self, position: int, message: str) -> None:
        super().__init__(message)
        self.position = position


class UnmatchedOpenBracket(ParseError):
    kind = "unmatched_open_bracket"

    def __init__(self, position: int) -> None:
        super().__init__(position, f"Unmatched '[' at position {position}")


class UnmatchedClosedBracket(ParseError):
    kind = "unmatched_closed_bracket"

    def __init__(self, position: int) -> None:
        super().__init__(position, f"Unmatched ']' at position {position}")


class ExecutionError(BrainfuckError):
    kind = "execution_error"

    def __init__(self, pc: int, message: str) -> None:
        super().__init__(message)
        self.pc = pc

    @property
    def position(self) -> int:
        return self.pc


class TapeBoundsExceeded(ExecutionError):
    kind = "tape_bounds_exceeded"

    def __init__(self, pc: int, pointer: int) -> None:
        super().__init__(pc, f"Pointer moved off the tape (to {pointer}) at opcode {pc}")
        self.pointer = pointer


class InputExhausted(ExecutionError):
    kind = "input_exhausted"

    def __init__(self, pc: int) -> None:
        super().__init__(pc, f"Input exhausted at opcode {pc}")


class StepLimitExceeded(ExecutionError):
    """Raised when execution exceeds the configured step budget."""

    kind = "step_limit_exceeded"

    def __init__(self, pc: int, steps: int) -> None:
        super().__init__(pc, f"Brainfuck program exceeded allowed step count ({steps})")
        self.steps = steps


__all__ = [
    "BrainfuckError",
    "ParseError",
    "UnmatchedOpenBracket",
    "UnmatchedClosedBracket",
    "ExecutionError",
    "TapeBoundsExceeded",
    "InputExhausted",
    "StepLimitExceeded",
]

from __future__ import annotations

import sys
from typing import BinaryIO, Iterable, List, Optional, Protocol, Union


class IOPort(Protocol):
    def read_byte(self) -> Optional[int]:
        """Return the next input byte, or None once input is exhausted."""

    def write_byte(self, value: int) -> None:
        ...


class StreamPort:
    """Byte port over binary streams (stdin/stdout by default)."""

    def __init__(self, reader: Optional[BinaryIO] = None, writer: Optional[BinaryIO] = None) -> None:
        self.reader = reader
        self.writer = writer

    def read_byte(self) -> Optional[int]:
        reader = self.reader if self.reader is not None else sys.stdin.buffer
        data = reader.read(1)
        if not data:
            return None
        return data[0]

    def write_byte(self, value: int) -> None:
        writer = self.writer if self.writer is not None else sys.stdout.buffer
        writer.write(bytes((value,)))
        writer.flush()


class BufferPort:
    """In-memory port fed from a fixed input script; records every transfer."""

    def __init__(self, input_data: Union[bytes, Iterable[int]] = b"") -> None:
        self._input = bytes(input_data)
        self._offset = 0
        self.reads: List[int] = []
        self.written = bytearray()

    def read_byte(self) -> Optional[int]:
        if self._offset >= len(self._input):
            return None
        value = self._input[self._offset]
        self._offset += 1
        self.reads.append(value)
        return value

    def write_byte(self, value: int) -> None:
        self.written.append(value)

    @property
    def output(self) -> bytes:
        return bytes(self.written)


__all__ = ["IOPort", "StreamPort", "BufferPort"]

"""Source buffer helpers and span tracking for diagnostics."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Span:
    """A range within the source, 1-based with an inclusive end column."""

    start_line: int
    start_col: int
    end_line: int
    end_col: int

    def __str__(self) -> str:
        return f"{self.start_line}:{self.start_col}"


def as_buffer(source: str | bytes) -> bytes:
    """Return the byte buffer the tokenizer scans; text is UTF-8 encoded."""
    if isinstance(source, str):
        return source.encode("utf-8")
    return bytes(source)


def decode(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace")


def line_bounds(buffer: bytes, offset: int) -> tuple[int, int]:
    """Return ``(start, end)`` offsets of the line holding ``offset``.

    ``end`` is the offset of the terminating newline, or the buffer length.
    An offset at the very end of the buffer is looked up one byte earlier
    so that EOF reports the last line rather than an empty one.
    """
    if not buffer:
        return 0, 0
    if offset >= len(buffer):
        offset = len(buffer) - 1
        # A trailing newline means EOF sits on the empty line after it.
        if buffer[offset] == 0x0A:
            return len(buffer), len(buffer)
    start = buffer.rfind(b"\n", 0, offset) + 1
    if buffer[offset] == 0x0A:
        return start, offset
    end = buffer.find(b"\n", offset)
    if end == -1:
        end = len(buffer)
    return start, end


def line_text(buffer: bytes, offset: int) -> str:
    """Return the full text of the line holding ``offset``, without newline."""
    start, end = line_bounds(buffer, offset)
    return decode(buffer[start:end])

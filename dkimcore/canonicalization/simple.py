"""Simple body canonicalization (RFC 6376 section 3.4.3)."""

from __future__ import annotations

from dataclasses import dataclass

from .base import CR, CRLF, LF, BodyCanonicalizer, CanonicalizationMode


@dataclass
class _SimpleState:
    is_empty_line: bool = True
    empty_lines: int = 0
    pending_cr: bool = False


class SimpleBodyCanonicalizer(BodyCanonicalizer):
    """Copies the body unchanged except for trailing empty lines.

    Empty lines are counted rather than written and are only replayed as
    ``CRLF`` pairs once a line with content follows them. A ``CR`` is held
    back until the next byte shows whether it starts a line terminator.
    """

    mode = CanonicalizationMode.SIMPLE

    def __init__(self) -> None:
        self._state = _SimpleState()

    def reset(self) -> None:
        self._state = _SimpleState()

    def _emit(self, out: bytearray, byte: int) -> None:
        state = self._state
        if state.empty_lines:
            out += CRLF * state.empty_lines
            state.empty_lines = 0
        out.append(byte)
        state.is_empty_line = False

    def filter(self, chunk: bytes) -> bytes:
        state = self._state
        out = bytearray()

        for byte in chunk:
            if byte == LF:
                if state.is_empty_line:
                    state.empty_lines += 1
                else:
                    if state.pending_cr:
                        out.append(CR)
                    out.append(LF)
                    state.is_empty_line = True
                state.pending_cr = False
                continue

            if state.pending_cr:
                # bare CR, part of the line content
                state.pending_cr = False
                self._emit(out, CR)

            if byte == CR:
                state.pending_cr = True
            else:
                self._emit(out, byte)

        return bytes(out)

    def flush(self) -> bytes:
        state = self._state
        out = bytearray()

        if state.pending_cr:
            state.pending_cr = False
            self._emit(out, CR)

        if not state.is_empty_line:
            out += CRLF

        self.reset()
        return bytes(out)

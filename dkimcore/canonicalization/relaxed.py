"""Relaxed body canonicalization (RFC 6376 section 3.4.4)."""

from __future__ import annotations

from dataclasses import dataclass

from .base import CR, CRLF, LF, SP, TAB, BodyCanonicalizer, CanonicalizationMode


@dataclass
class _RelaxedState:
    is_empty_line: bool = True
    empty_lines: int = 0
    pending_space: bool = False
    pending_cr: bool = False


class RelaxedBodyCanonicalizer(BodyCanonicalizer):
    """Collapses whitespace runs and strips trailing whitespace and empty lines.

    A run of spaces and tabs is remembered as a single pending space which is
    written only when more content follows on the same line, so whitespace in
    front of a line terminator disappears. Lines holding nothing but
    whitespace count as empty lines. A bare LF ends a line like CRLF does
    and is written back unchanged. Whitespace in front of a CR is dropped.
    """

    mode = CanonicalizationMode.RELAXED

    def __init__(self) -> None:
        self._state = _RelaxedState()

    def reset(self) -> None:
        self._state = _RelaxedState()

    def _emit(self, out: bytearray, byte: int) -> None:
        state = self._state
        if state.empty_lines:
            out += CRLF * state.empty_lines
            state.empty_lines = 0
        if state.pending_space:
            out.append(SP)
            state.pending_space = False
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
                state.pending_space = False
                state.pending_cr = False
                continue

            if state.pending_cr:
                state.pending_cr = False
                self._emit(out, CR)

            if byte == CR:
                state.pending_space = False
                state.pending_cr = True
            elif byte == SP or byte == TAB:
                state.pending_space = True
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

"""Streaming body canonicalizer interface."""

from __future__ import annotations

import abc
from enum import Enum

CR = 0x0D
LF = 0x0A
SP = 0x20
TAB = 0x09
CRLF = b"\r\n"


class CanonicalizationMode(str, Enum):
    """DKIM body canonicalization profiles."""

    SIMPLE = "simple"
    RELAXED = "relaxed"

    @classmethod
    def parse(cls, value: str | "CanonicalizationMode") -> "CanonicalizationMode":
        """Parse a ``c=`` tag component such as ``relaxed``."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown canonicalization mode: {value!r}") from None


class BodyCanonicalizer(metaclass=abc.ABCMeta):
    """Chunk-wise transformer producing the canonical form of a message body.

    Instances keep state between :meth:`filter` calls so a body may be fed in
    arbitrary pieces. The concatenated output of every ``filter`` call plus the
    final :meth:`flush` is identical regardless of where the chunks were split.
    An instance represents one ordered stream and is not thread-safe.
    """

    mode: CanonicalizationMode

    @abc.abstractmethod
    def filter(self, chunk: bytes) -> bytes:
        """Consume ``chunk`` and return the canonical bytes produced so far."""
        raise NotImplementedError

    @abc.abstractmethod
    def flush(self) -> bytes:
        """Signal end of input and return any remaining canonical bytes.

        Buffered empty lines are discarded. A body whose last line has content
        but no terminator receives one. The canonicalizer is reset afterwards.
        """
        raise NotImplementedError

    @abc.abstractmethod
    def reset(self) -> None:
        """Restore the initial state for reuse."""
        raise NotImplementedError

    def canonicalize(self, data: bytes) -> bytes:
        """Canonicalize a complete body in one call."""
        return self.filter(data) + self.flush()

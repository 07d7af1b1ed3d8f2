"""Body canonicalizers and factory."""

from __future__ import annotations

from typing import Optional

from ..config import DkimConfig, load_config
from .base import BodyCanonicalizer, CanonicalizationMode
from .relaxed import RelaxedBodyCanonicalizer
from .simple import SimpleBodyCanonicalizer


def get_canonicalizer(
    mode: Optional[CanonicalizationMode | str] = None, config: Optional[DkimConfig] = None
) -> BodyCanonicalizer:
    """Factory function returning a fresh canonicalizer for ``mode``.

    Without an explicit ``mode`` the configured ``body_canonicalization`` is used.
    """

    if mode is None:
        config = config or load_config()
        mode = config.body_canonicalization
    mode = CanonicalizationMode.parse(mode)
    if mode is CanonicalizationMode.SIMPLE:
        return SimpleBodyCanonicalizer()
    return RelaxedBodyCanonicalizer()


def canonicalize_body(
    body: bytes,
    mode: Optional[CanonicalizationMode | str] = None,
    config: Optional[DkimConfig] = None,
) -> bytes:
    """Return the canonical form of a complete ``body``."""
    return get_canonicalizer(mode, config).canonicalize(body)


__all__ = [
    "BodyCanonicalizer",
    "CanonicalizationMode",
    "RelaxedBodyCanonicalizer",
    "SimpleBodyCanonicalizer",
    "canonicalize_body",
    "get_canonicalizer",
]

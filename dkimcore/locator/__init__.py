"""Public key locator factory."""

from __future__ import annotations

import os
from typing import Mapping, Optional

from .base import PublicKeyLocator, parse_tags, parse_txt_record, query_name
from .inmemory import InMemoryPublicKeyLocator


def get_locator(
    backend: Optional[str] = None, records: Optional[Mapping[str, str]] = None
) -> PublicKeyLocator:
    """Factory function to get a public key locator."""

    backend = (backend or os.getenv("DKIMCORE_LOCATOR") or "inmemory").lower()
    if backend == "inmemory":
        return InMemoryPublicKeyLocator(records)
    raise ValueError(f"Unsupported locator backend: {backend}")


__all__ = [
    "InMemoryPublicKeyLocator",
    "PublicKeyLocator",
    "get_locator",
    "parse_tags",
    "parse_txt_record",
    "query_name",
]

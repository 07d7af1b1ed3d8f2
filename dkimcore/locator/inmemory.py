"""In-memory public key locator for testing."""

from __future__ import annotations

import asyncio
from typing import Dict, Mapping, Optional

from ..errors import PublicKeyNotFound
from ..keys.public import DkimPublicKey
from .base import PublicKeyLocator, check_methods, parse_txt_record, query_name


class InMemoryPublicKeyLocator(PublicKeyLocator):
    """Serves key records from a dictionary keyed by DNS name."""

    def __init__(self, records: Optional[Mapping[str, str]] = None) -> None:
        self._records: Dict[str, str] = dict(records or {})
        self._cache: Dict[str, DkimPublicKey] = {}

    def add_record(self, domain: str, selector: str, txt: str) -> None:
        name = query_name(domain, selector)
        self._records[name] = txt
        self._cache.pop(name, None)

    def locate_public_key(self, methods: str, domain: str, selector: str) -> DkimPublicKey:
        check_methods(methods)
        name = query_name(domain, selector)
        if name in self._cache:
            return self._cache[name]

        txt = self._records.get(name)
        if txt is None:
            raise PublicKeyNotFound(f"No key record published at {name}")
        key = parse_txt_record(txt)
        self._cache[name] = key
        return key

    async def alocate_public_key(
        self, methods: str, domain: str, selector: str
    ) -> DkimPublicKey:
        await asyncio.sleep(0)
        return self.locate_public_key(methods, domain, selector)

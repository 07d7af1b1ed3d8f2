"""Public key locator interface and DKIM key record parsing."""

from __future__ import annotations

import abc
import logging
from typing import Dict

from ..errors import PublicKeyNotFound, UnsupportedAlgorithm
from ..keys.public import DkimPublicKey, DkimPublicKeyAlgorithm, create_public_key

logger = logging.getLogger(__name__)

DNS_TXT = "dns/txt"


def parse_tags(txt: str) -> Dict[str, str]:
    """Split a ``tag=value;`` list into a dictionary.

    Leading whitespace before a tag name is skipped; a trailing fragment
    without ``=`` is ignored.
    """

    tags: Dict[str, str] = {}
    for item in txt.split(";"):
        name, sep, value = item.lstrip().partition("=")
        if not sep:
            continue
        tags[name.strip()] = value
    return tags


def parse_txt_record(txt: str) -> DkimPublicKey:
    """Build a public key from the text of a DKIM key record."""

    if txt is None:
        raise ValueError("txt must not be None")

    tags = parse_tags(txt)
    algorithm = DkimPublicKeyAlgorithm.parse(tags.get("k", "rsa").strip())
    payload = tags.get("p")
    if payload is None or not payload.strip():
        raise PublicKeyNotFound("Public key parameters not found in DNS TXT record.")
    return create_public_key(algorithm, payload.replace(" ", ""))


def query_name(domain: str, selector: str) -> str:
    """Return the DNS name holding the key for ``selector`` at ``domain``."""
    return f"{selector}._domainkey.{domain}"


def check_methods(methods: str) -> None:
    """Ensure the ``q=`` method list includes ``dns/txt``."""
    for method in (methods or DNS_TXT).split(":"):
        if method.strip().lower() == DNS_TXT:
            return
    raise UnsupportedAlgorithm(f"None of the query methods are supported: {methods}")


class PublicKeyLocator(metaclass=abc.ABCMeta):
    """Abstract source of DKIM public keys.

    Implementations resolve ``selector._domainkey.domain`` and return the
    parsed key. Network access belongs to concrete subclasses.
    """

    @abc.abstractmethod
    def locate_public_key(self, methods: str, domain: str, selector: str) -> DkimPublicKey:
        """Blocking lookup of the key for ``selector`` at ``domain``."""
        raise NotImplementedError

    @abc.abstractmethod
    async def alocate_public_key(
        self, methods: str, domain: str, selector: str
    ) -> DkimPublicKey:
        """Awaitable lookup; cancel by cancelling the awaiting task."""
        raise NotImplementedError

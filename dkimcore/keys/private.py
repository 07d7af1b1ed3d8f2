"""Loading and wrapping DKIM signing keys."""

from __future__ import annotations

import logging
import os
import re
from typing import IO, Optional, Union

from cryptography import exceptions as crypto_exceptions
from cryptography.hazmat.primitives import serialization

from ..config import DkimConfig, load_config
from ..errors import MalformedKey
from ..signing.algorithms import SignatureAlgorithm
from ..signing.context import SignatureContext, SignatureMode
from .convert import convert_foreign_key
from .models import KeyMaterial

logger = logging.getLogger(__name__)

_PEM_BLOCK = re.compile(rb"-----BEGIN ([A-Z0-9 ]+)-----.*?-----END \1-----", re.DOTALL)


class DkimPrivateKey:
    """A private key able to create signing contexts."""

    def __init__(self, material: KeyMaterial) -> None:
        if material is None:
            raise MalformedKey("No key supplied.")
        if not material.is_private:
            raise MalformedKey("The key must be a private key.")
        self.material = material

    @property
    def key_size(self) -> int:
        return self.material.key_size

    def create_signing_context(
        self,
        algorithm: Optional[Union[str, SignatureAlgorithm]] = None,
        config: Optional[DkimConfig] = None,
    ) -> SignatureContext:
        if algorithm is None:
            config = config or load_config()
            algorithm = config.signature_algorithm
        return SignatureContext(self.material, algorithm, SignatureMode.SIGN)

    def __repr__(self) -> str:
        return f"DkimPrivateKey({self.material.family.value}, {self.key_size} bits)"


def _read_pem(data: Union[str, bytes]) -> bytes:
    if isinstance(data, str):
        try:
            return data.encode("ascii")
        except UnicodeEncodeError as exc:
            raise MalformedKey("PEM data must be ASCII.") from exc
    return data


def load_private_key_stream(
    stream: IO, password: Optional[bytes] = None
) -> DkimPrivateKey:
    """Load the first private key found in a PEM ``stream``.

    The stream may hold a key pair or several blocks; public key and
    certificate blocks are skipped. Text and binary streams are accepted.
    """

    if stream is None:
        raise ValueError("stream must not be None")

    data = _read_pem(stream.read())
    blocks = list(_PEM_BLOCK.finditer(data))
    if not blocks:
        raise MalformedKey("No PEM block found.")

    for block in blocks:
        label = block.group(1).decode("ascii")
        if not label.endswith("PRIVATE KEY"):
            continue
        try:
            key = serialization.load_pem_private_key(block.group(0), password=password)
        except (ValueError, TypeError, crypto_exceptions.UnsupportedAlgorithm) as exc:
            raise MalformedKey(f"Unable to parse {label}: {exc}") from exc
        material = convert_foreign_key(key)
        logger.debug(f"Loaded {material.key_size}-bit {material.family.value} private key")
        return DkimPrivateKey(material)

    raise MalformedKey("Private key not found.")


def load_private_key(
    source: Optional[Union[str, os.PathLike, IO]] = None,
    password: Optional[bytes] = None,
    config: Optional[DkimConfig] = None,
) -> DkimPrivateKey:
    """Load a private key from a file path or an open stream.

    Without a ``source`` the configured ``private_key_path`` is read. I/O
    errors raised while opening or reading a file propagate unchanged.
    """

    if source is None:
        config = config or load_config()
        if not config.private_key_path:
            raise ValueError("No private key source given and no private_key_path configured.")
        source = config.private_key_path

    if hasattr(source, "read"):
        return load_private_key_stream(source, password)

    path = os.fspath(source)
    if not path:
        raise ValueError("The file name cannot be empty.")
    with open(path, "rb") as f:
        return load_private_key_stream(f, password)


def create_private_key(key) -> DkimPrivateKey:
    """Wrap a ``cryptography`` private key object."""
    return DkimPrivateKey(convert_foreign_key(key))

"""Public keys as published in DKIM DNS records."""

from __future__ import annotations

import base64
import binascii
import logging
import os
from enum import Enum
from typing import IO, Optional, Union

from cryptography import exceptions as crypto_exceptions
from cryptography.hazmat.primitives import serialization

from ..config import DkimConfig, load_config
from ..errors import MalformedKey, UnsupportedAlgorithm
from ..signing.algorithms import SignatureAlgorithm
from ..signing.context import SignatureContext, SignatureMode
from .convert import convert_foreign_key
from .models import (
    Ed25519KeyMaterial,
    KeyFamily,
    KeyMaterial,
    UnknownKeyMaterial,
)

logger = logging.getLogger(__name__)


class DkimPublicKeyAlgorithm(str, Enum):
    """Key algorithms named by the ``k=`` tag of a DKIM key record."""

    RSA = "rsa"
    ED25519 = "ed25519"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Union[str, "DkimPublicKeyAlgorithm"]) -> "DkimPublicKeyAlgorithm":
        if isinstance(value, cls) and value is not cls.UNKNOWN:
            return value
        tag = str(value.value if isinstance(value, cls) else value).strip().lower()
        if tag not in (cls.RSA.value, cls.ED25519.value):
            raise UnsupportedAlgorithm(f"Unknown public key algorithm: {value}")
        return cls(tag)


class DkimPublicKey:
    """A public key able to create verification contexts."""

    def __init__(self, material: KeyMaterial) -> None:
        if material is None:
            raise MalformedKey("No key supplied.")
        if material.is_private:
            raise MalformedKey("The key must be a public key.")
        self.material = material

    @property
    def key_size(self) -> int:
        return self.material.key_size

    @property
    def algorithm(self) -> DkimPublicKeyAlgorithm:
        if self.material.family is KeyFamily.RSA:
            return DkimPublicKeyAlgorithm.RSA
        if self.material.family is KeyFamily.ED25519:
            return DkimPublicKeyAlgorithm.ED25519
        return DkimPublicKeyAlgorithm.UNKNOWN

    def check_key_size(self, config: Optional[DkimConfig] = None) -> bool:
        """Check an RSA key against the configured minimum size.

        Returns ``False`` for undersized keys, or raises
        :class:`~dkimcore.errors.UnsupportedAlgorithm` when the configuration
        enforces the minimum.
        """

        config = config or load_config()
        if self.algorithm is not DkimPublicKeyAlgorithm.RSA:
            return True
        if self.key_size >= config.minimum_rsa_key_size:
            return True
        if config.enforce_minimum_key_size:
            raise UnsupportedAlgorithm(
                f"RSA key of {self.key_size} bits is below the minimum of "
                f"{config.minimum_rsa_key_size} bits."
            )
        logger.warning(
            f"RSA key of {self.key_size} bits is below the minimum of "
            f"{config.minimum_rsa_key_size} bits"
        )
        return False

    def create_verify_context(
        self, algorithm: Union[str, SignatureAlgorithm]
    ) -> SignatureContext:
        return SignatureContext(self.material, algorithm, SignatureMode.VERIFY)

    def __repr__(self) -> str:
        return f"DkimPublicKey({self.algorithm.value}, {self.key_size} bits)"


def _wrap_public_key(key) -> DkimPublicKey:
    try:
        material = convert_foreign_key(key)
    except UnsupportedAlgorithm:
        logger.debug(f"Public key of type {type(key).__name__} kept as unknown")
        material = UnknownKeyMaterial(type_name=type(key).__name__)
    return DkimPublicKey(material)


def _decode_payload(key_data: str) -> bytes:
    payload = "".join(key_data.split())
    if not payload:
        raise MalformedKey("Public key data is empty.")
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise MalformedKey("Public key data is not valid base64.") from exc


def _load_rsa_payload(der: bytes):
    try:
        return serialization.load_der_public_key(der)
    except (ValueError, crypto_exceptions.UnsupportedAlgorithm):
        pass
    # some publishers put a bare PKCS#1 RSAPublicKey in p=
    pem = (
        b"-----BEGIN RSA PUBLIC KEY-----\n"
        + base64.encodebytes(der)
        + b"-----END RSA PUBLIC KEY-----\n"
    )
    try:
        return serialization.load_pem_public_key(pem)
    except (ValueError, crypto_exceptions.UnsupportedAlgorithm) as exc:
        raise MalformedKey("Unable to parse RSA public key data.") from exc


def create_public_key(
    algorithm: Union[str, DkimPublicKeyAlgorithm], key_data: str
) -> DkimPublicKey:
    """Create a public key from a ``k=`` algorithm tag and ``p=`` payload."""

    algorithm = DkimPublicKeyAlgorithm.parse(algorithm)
    if key_data is None:
        raise MalformedKey("No public key data supplied.")
    raw = _decode_payload(key_data)

    if algorithm is DkimPublicKeyAlgorithm.ED25519:
        try:
            material = Ed25519KeyMaterial(public_key=raw)
        except ValueError as exc:
            raise MalformedKey(f"Invalid Ed25519 public key: {exc}") from exc
        return DkimPublicKey(material)

    return _wrap_public_key(_load_rsa_payload(raw))


def load_public_key(source: Union[str, os.PathLike, IO]) -> DkimPublicKey:
    """Load a PEM ``PUBLIC KEY`` block from a file path or an open stream."""

    if hasattr(source, "read"):
        data = source.read()
    else:
        with open(os.fspath(source), "rb") as f:
            data = f.read()
    if isinstance(data, str):
        data = data.encode("ascii", "replace")

    try:
        key = serialization.load_pem_public_key(data)
    except (ValueError, crypto_exceptions.UnsupportedAlgorithm) as exc:
        raise MalformedKey(f"Unable to parse public key: {exc}") from exc
    return _wrap_public_key(key)

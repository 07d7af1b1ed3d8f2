"""Incremental signing and verification over canonical bytes."""

from __future__ import annotations

import base64
import binascii
import logging
from enum import Enum
from typing import Any, Optional, Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, utils

from ..errors import MalformedKey, SignatureContextError, UnsupportedAlgorithm
from ..keys.convert import to_cryptography_key
from ..keys.models import KeyFamily, KeyMaterial
from .algorithms import SignatureAlgorithm

logger = logging.getLogger(__name__)

ED25519_SIGNATURE_SIZE = 64


class SignatureMode(str, Enum):
    SIGN = "sign"
    VERIFY = "verify"


class SignatureContext:
    """Binds one key and one algorithm to a running digest.

    Bytes passed to :meth:`update` are hashed with the algorithm's digest.
    :meth:`generate_signature` (sign mode) or :meth:`verify_signature`
    (verify mode) finalizes the digest, so each context yields at most one
    result. RSA variants use PKCS#1 v1.5 over the prehashed digest, Ed25519
    signs the SHA-256 digest itself (RFC 8463).

    Use the context as a context manager so the digest is released on every
    exit path::

        with create_signature_context(key, "rsa-sha256", SignatureMode.SIGN) as ctx:
            ctx.update(headers)
            signature = ctx.generate_signature()
    """

    def __init__(
        self,
        key: KeyMaterial,
        algorithm: Union[str, SignatureAlgorithm],
        mode: Union[str, SignatureMode],
    ) -> None:
        if key is None:
            raise SignatureContextError("No key available for the signature context.")

        self.algorithm = SignatureAlgorithm.parse(algorithm)
        self.mode = SignatureMode(mode)

        if key.family is not self.algorithm.key_family:
            raise UnsupportedAlgorithm(
                f"{self.algorithm.tag} cannot be used with a {key.family.value} key."
            )
        if self.mode is SignatureMode.SIGN and not key.is_private:
            raise MalformedKey("A private key is required for signing.")

        if self.mode is SignatureMode.VERIFY:
            key = key.public()
        self.key = key
        self._key_object: Any = to_cryptography_key(key)
        self._digest: Optional[hashes.Hash] = hashes.Hash(self.algorithm.hash_algorithm())
        self._finalized = False
        self._disposed = False
        self.bytes_written = 0

        if self.algorithm is SignatureAlgorithm.RSA_SHA1:
            logger.warning("rsa-sha1 is deprecated for DKIM (RFC 8301), prefer rsa-sha256")
        logger.debug(
            f"Created {self.mode.value} context for {self.algorithm.tag} "
            f"({key.key_size}-bit {key.family.value} key)"
        )

    def __enter__(self) -> "SignatureContext":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()

    def _check_usable(self) -> hashes.Hash:
        if self._disposed:
            raise SignatureContextError("The signature context has been disposed.")
        if self._finalized or self._digest is None:
            raise SignatureContextError("The signature context has already been finalized.")
        return self._digest

    def update(self, data: bytes) -> None:
        """Feed ``data`` into the running digest."""
        self._check_usable().update(data)
        self.bytes_written += len(data)

    def _finalize(self) -> bytes:
        digest = self._check_usable().finalize()
        self._finalized = True
        self._digest = None
        return digest

    def generate_signature(self) -> bytes:
        """Finalize the digest and sign it with the private key."""

        if self.mode is not SignatureMode.SIGN:
            raise SignatureContextError("The signature context was not created for signing.")
        digest = self._finalize()

        if self.algorithm.key_family is KeyFamily.ED25519:
            return self._key_object.sign(digest)
        return self._key_object.sign(
            digest, padding.PKCS1v15(), utils.Prehashed(self.algorithm.hash_algorithm())
        )

    def verify_signature(self, signature: Union[bytes, str]) -> bool:
        """Finalize the digest and check ``signature`` against the public key.

        ``signature`` may be raw bytes or the base64 text of a ``b=`` tag.
        Returns ``False`` for any signature that does not verify.
        """

        if self.mode is not SignatureMode.VERIFY:
            raise SignatureContextError("The signature context was not created for verification.")
        digest = self._finalize()

        if isinstance(signature, str):
            try:
                signature = base64.b64decode("".join(signature.split()), validate=True)
            except (binascii.Error, ValueError):
                logger.debug("Signature is not valid base64")
                return False

        try:
            if self.algorithm.key_family is KeyFamily.ED25519:
                if len(signature) != ED25519_SIGNATURE_SIZE:
                    return False
                self._key_object.verify(signature, digest)
            else:
                self._key_object.verify(
                    signature,
                    digest,
                    padding.PKCS1v15(),
                    utils.Prehashed(self.algorithm.hash_algorithm()),
                )
        except InvalidSignature:
            logger.debug(f"{self.algorithm.tag} signature did not verify")
            return False
        return True

    def dispose(self) -> None:
        """Release the digest. Safe to call more than once."""
        self._digest = None
        self._disposed = True


def create_signature_context(
    key: KeyMaterial,
    algorithm: Union[str, SignatureAlgorithm],
    mode: Union[str, SignatureMode],
) -> SignatureContext:
    """Factory function mirroring :class:`SignatureContext`'s constructor."""
    return SignatureContext(key, algorithm, mode)

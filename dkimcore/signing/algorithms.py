"""DKIM signature algorithms."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from cryptography.hazmat.primitives import hashes

from ..config import DkimConfig, load_config
from ..errors import UnsupportedAlgorithm
from ..keys.models import KeyFamily


class SignatureAlgorithm(str, Enum):
    """Signature algorithms named by the DKIM ``a=`` tag."""

    RSA_SHA1 = "rsa-sha1"
    RSA_SHA256 = "rsa-sha256"
    ED25519_SHA256 = "ed25519-sha256"

    @classmethod
    def parse(cls, value: Union[str, "SignatureAlgorithm"]) -> "SignatureAlgorithm":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise UnsupportedAlgorithm(f"{value} is not supported.") from None

    @property
    def tag(self) -> str:
        return self.value

    @property
    def key_family(self) -> KeyFamily:
        if self is SignatureAlgorithm.ED25519_SHA256:
            return KeyFamily.ED25519
        return KeyFamily.RSA

    @property
    def digest_name(self) -> str:
        return "sha1" if self is SignatureAlgorithm.RSA_SHA1 else "sha256"

    def hash_algorithm(self) -> hashes.HashAlgorithm:
        """Return a fresh ``cryptography`` hash algorithm instance."""
        if self is SignatureAlgorithm.RSA_SHA1:
            return hashes.SHA1()
        return hashes.SHA256()


def is_algorithm_enabled(
    algorithm: Union[str, SignatureAlgorithm], config: Optional[DkimConfig] = None
) -> bool:
    """Return ``True`` when a verifier using ``config`` accepts ``algorithm``."""

    config = config or load_config()
    return SignatureAlgorithm.parse(algorithm).tag in config.enabled_algorithms

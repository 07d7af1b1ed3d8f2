"""Body hash (``bh=``) computation over canonicalized body bytes."""

from __future__ import annotations

import base64
import logging
from typing import Optional, Union

from cryptography.hazmat.primitives import hashes

from .config import DkimConfig, load_config
from .canonicalization import CanonicalizationMode, get_canonicalizer
from .errors import SignatureContextError
from .signing.algorithms import SignatureAlgorithm

logger = logging.getLogger(__name__)


class BodyHasher:
    """Canonicalizes body chunks and hashes at most ``max_length`` canonical bytes.

    ``max_length`` is the value of the ``l=`` tag; ``None`` hashes the whole
    canonical body. An omitted ``algorithm`` or ``mode`` is taken from the
    configured ``signature_algorithm`` and ``body_canonicalization``.
    """

    def __init__(
        self,
        algorithm: Optional[Union[str, SignatureAlgorithm]] = None,
        mode: Optional[Union[str, CanonicalizationMode]] = None,
        max_length: Optional[int] = None,
        config: Optional[DkimConfig] = None,
    ) -> None:
        if max_length is not None and max_length < 0:
            raise ValueError("max_length must not be negative")
        if algorithm is None or mode is None:
            config = config or load_config()
            algorithm = algorithm or config.signature_algorithm
            mode = mode or config.body_canonicalization
        self.algorithm = SignatureAlgorithm.parse(algorithm)
        self.canonicalizer = get_canonicalizer(mode)
        self.max_length = max_length
        self.length = 0
        self._digest: Optional[hashes.Hash] = hashes.Hash(self.algorithm.hash_algorithm())

    def _write(self, data: bytes) -> None:
        if self._digest is None:
            raise SignatureContextError("The body hash has already been finalized.")
        if self.max_length is not None:
            data = data[: max(self.max_length - self.length, 0)]
        if data:
            self._digest.update(data)
            self.length += len(data)

    def update(self, chunk: bytes) -> None:
        self._write(self.canonicalizer.filter(chunk))

    def digest(self) -> bytes:
        """Flush the canonicalizer and return the raw digest."""
        self._write(self.canonicalizer.flush())
        digest = self._digest.finalize()
        self._digest = None
        logger.debug(
            f"Hashed {self.length} canonical body bytes "
            f"({self.canonicalizer.mode.value}/{self.algorithm.digest_name})"
        )
        return digest

    def b64digest(self) -> str:
        return base64.b64encode(self.digest()).decode("ascii")


def hash_body(
    body: bytes,
    algorithm: Optional[Union[str, SignatureAlgorithm]] = None,
    mode: Optional[Union[str, CanonicalizationMode]] = None,
    max_length: Optional[int] = None,
    config: Optional[DkimConfig] = None,
) -> bytes:
    """Return the raw body hash of a complete ``body``."""
    hasher = BodyHasher(algorithm, mode, max_length, config)
    hasher.update(body)
    return hasher.digest()

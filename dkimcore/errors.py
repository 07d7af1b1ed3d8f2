"""Exception hierarchy for dkimcore."""

from __future__ import annotations


class DkimError(Exception):
    """Base class for all dkimcore errors."""


class UnsupportedAlgorithm(DkimError):
    """Algorithm, key family or algorithm/key combination is not implemented."""


class MalformedKey(DkimError, ValueError):
    """Key bytes could not be parsed or the wrong key component was supplied."""


class SignatureContextError(DkimError, RuntimeError):
    """A signature or hash context was used after finalization or in the wrong mode."""


class PublicKeyNotFound(DkimError):
    """No usable public key was published for a selector."""


__all__ = [
    "DkimError",
    "UnsupportedAlgorithm",
    "MalformedKey",
    "SignatureContextError",
    "PublicKeyNotFound",
]

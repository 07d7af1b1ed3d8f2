"""Signature algorithms and contexts."""

from .algorithms import SignatureAlgorithm, is_algorithm_enabled
from .context import SignatureContext, SignatureMode, create_signature_context

__all__ = [
    "SignatureAlgorithm",
    "SignatureContext",
    "SignatureMode",
    "create_signature_context",
    "is_algorithm_enabled",
]

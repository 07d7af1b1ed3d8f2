"""dkimcore: DKIM body canonicalization and signature primitives."""

from .errors import (
    DkimError,
    MalformedKey,
    PublicKeyNotFound,
    SignatureContextError,
    UnsupportedAlgorithm,
)
from .config import DkimConfig, load_config
from .canonicalization import CanonicalizationMode, canonicalize_body, get_canonicalizer
from .keys import (
    DkimPrivateKey,
    DkimPublicKey,
    DkimPublicKeyAlgorithm,
    KeyFamily,
    KeyMaterial,
    convert_foreign_key,
    create_public_key,
    from_jwk,
    load_private_key,
    parse_key_material,
)
from .signing import (
    SignatureAlgorithm,
    SignatureContext,
    SignatureMode,
    create_signature_context,
)
from .hashing import BodyHasher, hash_body
from .locator import PublicKeyLocator, get_locator

__version__ = "0.1.0"
__all__ = [
    "BodyHasher",
    "CanonicalizationMode",
    "DkimConfig",
    "DkimError",
    "DkimPrivateKey",
    "DkimPublicKey",
    "DkimPublicKeyAlgorithm",
    "KeyFamily",
    "KeyMaterial",
    "MalformedKey",
    "PublicKeyLocator",
    "PublicKeyNotFound",
    "SignatureAlgorithm",
    "SignatureContext",
    "SignatureContextError",
    "SignatureMode",
    "UnsupportedAlgorithm",
    "canonicalize_body",
    "convert_foreign_key",
    "create_public_key",
    "create_signature_context",
    "from_jwk",
    "get_canonicalizer",
    "get_locator",
    "hash_body",
    "load_config",
    "load_private_key",
    "parse_key_material",
]

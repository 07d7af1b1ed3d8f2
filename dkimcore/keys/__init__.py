"""Key material, converters and factories."""

from .convert import (
    convert_foreign_key,
    detect_family,
    from_jwk,
    parse_key_material,
    to_cryptography_key,
)
from .models import (
    DsaKeyMaterial,
    Ed25519KeyMaterial,
    KeyFamily,
    KeyMaterial,
    RsaKeyMaterial,
    UnknownKeyMaterial,
)
from .private import (
    DkimPrivateKey,
    create_private_key,
    load_private_key,
    load_private_key_stream,
)
from .public import (
    DkimPublicKey,
    DkimPublicKeyAlgorithm,
    create_public_key,
    load_public_key,
)

__all__ = [
    "DkimPrivateKey",
    "DkimPublicKey",
    "DkimPublicKeyAlgorithm",
    "DsaKeyMaterial",
    "Ed25519KeyMaterial",
    "KeyFamily",
    "KeyMaterial",
    "RsaKeyMaterial",
    "UnknownKeyMaterial",
    "convert_foreign_key",
    "create_private_key",
    "create_public_key",
    "detect_family",
    "from_jwk",
    "load_private_key",
    "load_private_key_stream",
    "load_public_key",
    "parse_key_material",
    "to_cryptography_key",
]

"""Conversion between KeyMaterial and keys from other cryptography providers.

The public entry points are :func:`convert_foreign_key`, which turns a
``cryptography`` key object into :data:`~dkimcore.keys.models.KeyMaterial`,
:func:`from_jwk`, which does the same for a JSON Web Key through PyJWT,
:func:`parse_key_material`, which validates plain field mappings, and
:func:`to_cryptography_key`, the reverse direction used when signing.

Conversion is dispatched on an explicit :class:`KeyFamily` tag. When no tag
is given it is detected from the key object; families without a converter
(elliptic curves other than Ed25519, Ed448, X25519, ...) raise
:class:`~dkimcore.errors.UnsupportedAlgorithm`.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, Mapping, Optional, Union

import jwt
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import dsa, ed25519, rsa
from pydantic import TypeAdapter, ValidationError

from ..errors import MalformedKey, UnsupportedAlgorithm
from .models import (
    DsaKeyMaterial,
    Ed25519KeyMaterial,
    KeyFamily,
    KeyMaterial,
    RsaKeyMaterial,
)

logger = logging.getLogger(__name__)

_JWK_FAMILIES = {"RSA": KeyFamily.RSA, "OKP": KeyFamily.ED25519}

_KEY_MATERIAL_ADAPTER: TypeAdapter[KeyMaterial] = TypeAdapter(KeyMaterial)


def detect_family(key: Any) -> KeyFamily:
    """Return the family tag for a ``cryptography`` key object."""
    if isinstance(key, (rsa.RSAPrivateKey, rsa.RSAPublicKey)):
        return KeyFamily.RSA
    if isinstance(key, (dsa.DSAPrivateKey, dsa.DSAPublicKey)):
        return KeyFamily.DSA
    if isinstance(key, (ed25519.Ed25519PrivateKey, ed25519.Ed25519PublicKey)):
        return KeyFamily.ED25519
    return KeyFamily.UNKNOWN


def _convert_rsa(key: Any) -> RsaKeyMaterial:
    if isinstance(key, rsa.RSAPrivateKey):
        numbers = key.private_numbers()
        public_numbers = numbers.public_numbers
        return RsaKeyMaterial(
            modulus=public_numbers.n,
            public_exponent=public_numbers.e,
            private_exponent=numbers.d,
            prime1=numbers.p,
            prime2=numbers.q,
            exponent1=numbers.dmp1,
            exponent2=numbers.dmq1,
            coefficient=numbers.iqmp,
        )
    if isinstance(key, rsa.RSAPublicKey):
        public_numbers = key.public_numbers()
        return RsaKeyMaterial(modulus=public_numbers.n, public_exponent=public_numbers.e)
    raise MalformedKey(f"{type(key).__name__} is not an RSA key.")


def _convert_dsa(key: Any) -> DsaKeyMaterial:
    if isinstance(key, dsa.DSAPrivateKey):
        numbers = key.private_numbers()
        public_numbers = numbers.public_numbers
        x: Optional[int] = numbers.x
    elif isinstance(key, dsa.DSAPublicKey):
        public_numbers = key.public_numbers()
        x = None
    else:
        raise MalformedKey(f"{type(key).__name__} is not a DSA key.")

    # cryptography keeps no FIPS 186 seed/counter, so none are carried over
    params = public_numbers.parameter_numbers
    return DsaKeyMaterial(
        p=params.p,
        q=params.q,
        g=params.g,
        y=public_numbers.y,
        x=x,
    )


def _convert_ed25519(key: Any) -> Ed25519KeyMaterial:
    raw = serialization.Encoding.Raw
    if isinstance(key, ed25519.Ed25519PrivateKey):
        return Ed25519KeyMaterial(
            public_key=key.public_key().public_bytes(raw, serialization.PublicFormat.Raw),
            private_key=key.private_bytes(
                raw, serialization.PrivateFormat.Raw, serialization.NoEncryption()
            ),
        )
    if isinstance(key, ed25519.Ed25519PublicKey):
        return Ed25519KeyMaterial(public_key=key.public_bytes(raw, serialization.PublicFormat.Raw))
    raise MalformedKey(f"{type(key).__name__} is not an Ed25519 key.")


_CONVERTERS: Dict[KeyFamily, Callable[[Any], KeyMaterial]] = {
    KeyFamily.RSA: _convert_rsa,
    KeyFamily.DSA: _convert_dsa,
    KeyFamily.ED25519: _convert_ed25519,
}


def convert_foreign_key(
    key: Any, family: Optional[Union[KeyFamily, str]] = None
) -> KeyMaterial:
    """Reconstruct ``key`` as KeyMaterial.

    Args:
        key: A private or public key object from the ``cryptography`` package.
        family: Family tag to convert as. Detected from ``key`` when omitted.
    """

    if key is None:
        raise MalformedKey("No key supplied.")

    tag = KeyFamily(family) if family is not None else detect_family(key)
    converter = _CONVERTERS.get(tag)
    if converter is None:
        raise UnsupportedAlgorithm(f"'{type(key).__name__}' is currently not supported.")

    try:
        material = converter(key)
    except ValidationError as exc:
        raise MalformedKey(f"Invalid {tag.value} key parameters: {exc}") from exc

    logger.debug(
        f"Converted {type(key).__name__} to {tag.value} key material "
        f"({material.key_size} bits, private={material.is_private})"
    )
    return material


def from_jwk(jwk: Union[str, Mapping[str, Any]]) -> KeyMaterial:
    """Import an RSA or Ed25519 JSON Web Key."""

    try:
        data = json.loads(jwk) if isinstance(jwk, str) else dict(jwk)
    except (TypeError, ValueError) as exc:
        raise MalformedKey("JWK is not a JSON object.") from exc

    kty = data.get("kty")
    family = _JWK_FAMILIES.get(kty)
    if family is None:
        raise UnsupportedAlgorithm(f"JWK key type {kty!r} is currently not supported.")
    if family is KeyFamily.ED25519 and data.get("crv") != "Ed25519":
        raise UnsupportedAlgorithm(f"JWK curve {data.get('crv')!r} is currently not supported.")

    try:
        if family is KeyFamily.RSA:
            key = jwt.algorithms.RSAAlgorithm.from_jwk(data)
        else:
            key = jwt.algorithms.OKPAlgorithm.from_jwk(data)
    except jwt.exceptions.InvalidKeyError as exc:
        raise MalformedKey(f"Invalid {kty} JWK: {exc}") from exc

    logger.info(f"Imported {kty} key from JWK (kid={data.get('kid')!r})")
    return convert_foreign_key(key, family)


def parse_key_material(data: Union[KeyMaterial, Mapping[str, Any]]) -> KeyMaterial:
    """Validate ``data`` into the KeyMaterial variant named by its ``family`` tag.

    Accepts a mapping of fields or an existing model. Missing, inconsistent or
    mismatched parameters raise :class:`~dkimcore.errors.MalformedKey`.
    """

    try:
        return _KEY_MATERIAL_ADAPTER.validate_python(data)
    except ValidationError as exc:
        raise MalformedKey(f"Invalid key material: {exc}") from exc


def to_cryptography_key(material: KeyMaterial) -> Any:
    """Build the ``cryptography`` key object for ``material``."""

    try:
        if isinstance(material, RsaKeyMaterial):
            public_numbers = rsa.RSAPublicNumbers(material.public_exponent, material.modulus)
            if not material.is_private:
                return public_numbers.public_key()
            return rsa.RSAPrivateNumbers(
                p=material.prime1,
                q=material.prime2,
                d=material.private_exponent,
                dmp1=material.exponent1,
                dmq1=material.exponent2,
                iqmp=material.coefficient,
                public_numbers=public_numbers,
            ).private_key()

        if isinstance(material, DsaKeyMaterial):
            params = dsa.DSAParameterNumbers(material.p, material.q, material.g)
            public_numbers = dsa.DSAPublicNumbers(material.y, params)
            if not material.is_private:
                return public_numbers.public_key()
            return dsa.DSAPrivateNumbers(material.x, public_numbers).private_key()

        if isinstance(material, Ed25519KeyMaterial):
            if material.is_private:
                return ed25519.Ed25519PrivateKey.from_private_bytes(material.private_key)
            return ed25519.Ed25519PublicKey.from_public_bytes(material.public_key)
    except ValueError as exc:
        raise MalformedKey(f"Inconsistent {material.family.value} key parameters: {exc}") from exc

    raise UnsupportedAlgorithm(f"{material.family.value} keys are currently not supported.")

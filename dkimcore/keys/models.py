"""Pydantic models describing asymmetric key material."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ed25519
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

ED25519_KEY_SIZE = 32


class KeyFamily(str, Enum):
    """Asymmetric key families understood by dkimcore."""

    RSA = "rsa"
    DSA = "dsa"
    ED25519 = "ed25519"
    UNKNOWN = "unknown"


class _KeyMaterialBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    @property
    def is_private(self) -> bool:
        raise NotImplementedError

    @property
    def key_size(self) -> int:
        raise NotImplementedError


class RsaKeyMaterial(_KeyMaterialBase):
    """RSA modulus and exponents, with CRT parameters for private keys."""

    family: Literal[KeyFamily.RSA] = KeyFamily.RSA
    modulus: int
    public_exponent: int

    private_exponent: Optional[int] = None
    prime1: Optional[int] = None
    prime2: Optional[int] = None
    exponent1: Optional[int] = Field(default=None, description="d mod (p - 1)")
    exponent2: Optional[int] = Field(default=None, description="d mod (q - 1)")
    coefficient: Optional[int] = Field(default=None, description="q^-1 mod p")

    @model_validator(mode="after")
    def _ensure_private_components(self) -> "RsaKeyMaterial":
        private = (
            self.private_exponent,
            self.prime1,
            self.prime2,
            self.exponent1,
            self.exponent2,
            self.coefficient,
        )
        present = [value is not None for value in private]
        if any(present) and not all(present):
            raise ValueError("RSA private keys need the private exponent, both primes and CRT values")
        if self.private_exponent is not None and self.private_exponent <= 0:
            raise ValueError("RSA private exponent must be positive")
        return self

    @property
    def is_private(self) -> bool:
        return self.private_exponent is not None

    @property
    def key_size(self) -> int:
        return self.modulus.bit_length()

    def public(self) -> "RsaKeyMaterial":
        return RsaKeyMaterial(modulus=self.modulus, public_exponent=self.public_exponent)


class DsaKeyMaterial(_KeyMaterialBase):
    """DSA domain parameters with the public value and optional private value."""

    family: Literal[KeyFamily.DSA] = KeyFamily.DSA
    p: int
    q: int
    g: int
    y: int
    x: Optional[int] = None
    seed: Optional[bytes] = Field(default=None, description="Domain parameter validation seed")
    counter: Optional[int] = Field(default=None, description="Domain parameter validation counter")

    @field_validator("x")
    @classmethod
    def _ensure_private_value(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v <= 0:
            raise ValueError("DSA private value must be positive")
        return v

    @property
    def is_private(self) -> bool:
        return self.x is not None

    @property
    def key_size(self) -> int:
        return self.p.bit_length()

    def public(self) -> "DsaKeyMaterial":
        return self.model_copy(update={"x": None})


class Ed25519KeyMaterial(_KeyMaterialBase):
    """Raw Ed25519 public key, plus the 32-byte seed for private keys."""

    family: Literal[KeyFamily.ED25519] = KeyFamily.ED25519
    public_key: bytes
    private_key: Optional[bytes] = None

    @field_validator("public_key", "private_key")
    @classmethod
    def _ensure_length(cls, v: Optional[bytes]) -> Optional[bytes]:
        if v is not None and len(v) != ED25519_KEY_SIZE:
            raise ValueError(f"Ed25519 keys are {ED25519_KEY_SIZE} bytes, got {len(v)}")
        return v

    @model_validator(mode="after")
    def _ensure_matching_halves(self) -> "Ed25519KeyMaterial":
        if self.private_key is None:
            return self
        derived = (
            ed25519.Ed25519PrivateKey.from_private_bytes(self.private_key)
            .public_key()
            .public_bytes(serialization.Encoding.Raw, serialization.PublicFormat.Raw)
        )
        if derived != self.public_key:
            raise ValueError("Ed25519 public key does not match the private seed")
        return self

    @property
    def is_private(self) -> bool:
        return self.private_key is not None

    @property
    def key_size(self) -> int:
        return ED25519_KEY_SIZE * 8

    def public(self) -> "Ed25519KeyMaterial":
        return Ed25519KeyMaterial(public_key=self.public_key)


class UnknownKeyMaterial(_KeyMaterialBase):
    """Placeholder for a public key of a family dkimcore cannot use."""

    family: Literal[KeyFamily.UNKNOWN] = KeyFamily.UNKNOWN
    type_name: str

    @property
    def is_private(self) -> bool:
        return False

    @property
    def key_size(self) -> int:
        return 0

    def public(self) -> "UnknownKeyMaterial":
        return self


KeyMaterial = Annotated[
    Union[RsaKeyMaterial, DsaKeyMaterial, Ed25519KeyMaterial, UnknownKeyMaterial],
    Field(discriminator="family"),
]

from __future__ import annotations

import os
from typing import List, Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

AlgorithmTag = Literal["rsa-sha1", "rsa-sha256", "ed25519-sha256"]
CanonicalizationTag = Literal["simple", "relaxed"]


class DkimConfig(BaseModel):
    """Top-level configuration model."""

    signature_algorithm: AlgorithmTag = "rsa-sha256"
    body_canonicalization: CanonicalizationTag = "simple"
    minimum_rsa_key_size: int = 1024
    enforce_minimum_key_size: bool = False
    enabled_algorithms: List[AlgorithmTag] = Field(
        default_factory=lambda: ["ed25519-sha256", "rsa-sha256"]
    )
    private_key_path: Optional[str] = None

    @field_validator("minimum_rsa_key_size")
    @classmethod
    def _ensure_positive(cls, v: int) -> int:
        if v < 0:
            raise ValueError("minimum_rsa_key_size must not be negative")
        return v


def load_config(path: Optional[str] = None) -> DkimConfig:
    """Load configuration from YAML file.

    Args:
        path: Optional path to config file. Falls back to DKIMCORE_CONFIG env
            variable or 'dkimcore.yaml' in the current directory.
    """

    config_path = path or os.getenv("DKIMCORE_CONFIG", "dkimcore.yaml")
    if os.path.exists(config_path):
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        config = DkimConfig(**data)
    else:
        config = DkimConfig()

    env_key_path = os.getenv("DKIMCORE_PRIVATE_KEY")
    if env_key_path:
        config.private_key_path = env_key_path
    return config

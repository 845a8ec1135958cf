# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_widevine

import os

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _require_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise ValueError(f"{name} environment variable is not set.")
    return value


class ProxyConfig(BaseModel):
    """
    Immutable proxy configuration: the partner root credentials issued by Widevine,
    the provider identifier and HTTP timeouts. Built once at startup.
    """

    model_config = ConfigDict(frozen=True)

    partner_root_key: bytes = Field(..., repr=False, description="Partner root AES key")
    partner_root_iv: bytes = Field(..., repr=False, description="Partner root AES-CBC IV")
    provider: str = Field(..., min_length=1, description="Provider identifier, also the envelope signer")
    connect_timeout: float = Field(5.0, gt=0)
    timeout: float = Field(10.0, gt=0)

    @field_validator("partner_root_key")
    @classmethod
    def validate_key_length(cls, v: bytes) -> bytes:
        if len(v) < 16:
            raise ValueError("Partner root key must be at least 16 bytes.")
        return v

    @field_validator("partner_root_iv")
    @classmethod
    def validate_iv_length(cls, v: bytes) -> bytes:
        if len(v) != 16:
            raise ValueError("Partner root IV must be 16 bytes (the AES block size).")
        return v

    @classmethod
    def from_env(cls) -> "ProxyConfig":
        """
        Reads the configuration from environment variables.

        WIDEVINE_PARTNER_KEY and WIDEVINE_PARTNER_IV are hex-encoded.
        WIDEVINE_CONNECT_TIMEOUT and WIDEVINE_TIMEOUT are optional, in seconds.
        """
        key = _require_env("WIDEVINE_PARTNER_KEY")
        iv = _require_env("WIDEVINE_PARTNER_IV")
        provider = _require_env("WIDEVINE_PROVIDER")

        try:
            key_bytes = bytes.fromhex(key)
            iv_bytes = bytes.fromhex(iv)
        except ValueError as e:
            raise ValueError(f"Partner credentials must be hex-encoded: {e}") from e

        return cls(
            partner_root_key=key_bytes,
            partner_root_iv=iv_bytes,
            provider=provider,
            connect_timeout=float(os.environ.get("WIDEVINE_CONNECT_TIMEOUT", "5.0")),
            timeout=float(os.environ.get("WIDEVINE_TIMEOUT", "10.0")),
        )

# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_widevine

import base64
import hashlib
import hmac
import os
from abc import ABC, abstractmethod
from typing import Dict, List

from coreason_widevine.models import ContentKeySpec


class KeyGovernor(ABC):
    """
    Business logic deciding which content keys protect a piece of content.
    Implementations are supplied by the integrator and bound when the proxy is built.
    """

    @abstractmethod
    def derive_content_key(self, content_id: bytes) -> bytes:
        """Return the raw content key for `content_id`."""

    @abstractmethod
    def derive_content_key_id(self, content_id: bytes) -> bytes:
        """Return the raw key identifier for `content_id`."""

    @abstractmethod
    def derive_content_iv(self, content_id: bytes) -> bytes:
        """Return the raw initialization vector for `content_id`."""

    @abstractmethod
    def derive_key_specs(self, content_id: bytes, policy_config: Dict[str, str]) -> List[ContentKeySpec]:
        """Return the content key specs to provision for `content_id` under `policy_config`."""


class HmacKeyGovernor(KeyGovernor):
    """
    Reference governor deriving every key from one master secret with HMAC-SHA256.
    """

    def __init__(self, master_secret: bytes):
        if not master_secret:
            raise ValueError("Master secret must not be empty.")
        self._secret = master_secret

    @classmethod
    def from_env(cls) -> "HmacKeyGovernor":
        """Builds the governor from the hex WIDEVINE_KEY_SECRET environment variable."""
        secret = os.getenv("WIDEVINE_KEY_SECRET")
        if not secret:
            raise ValueError("WIDEVINE_KEY_SECRET environment variable is not set.")
        return cls(bytes.fromhex(secret))

    def _derive(self, label: bytes, content_id: bytes) -> bytes:
        return hmac.new(self._secret, label + content_id, hashlib.sha256).digest()[:16]

    def derive_content_key(self, content_id: bytes) -> bytes:
        return self._derive(b"key", content_id)

    def derive_content_key_id(self, content_id: bytes) -> bytes:
        return hashlib.md5(self.derive_content_key(content_id)).digest()

    def derive_content_iv(self, content_id: bytes) -> bytes:
        return self._derive(b"iv", content_id)

    def derive_key_specs(self, content_id: bytes, policy_config: Dict[str, str]) -> List[ContentKeySpec]:
        tracks = [t.strip() for t in policy_config.get("tracks", "SD").split(",") if t.strip()]
        specs = []
        for track in tracks:
            # Each track gets its own key, scoped by the track label.
            scoped_id = content_id + b":" + track.encode("utf-8")
            specs.append(
                ContentKeySpec(
                    key_id=base64.b64encode(self.derive_content_key_id(scoped_id)).decode("ascii"),
                    key=base64.b64encode(self.derive_content_key(scoped_id)).decode("ascii"),
                    iv=base64.b64encode(self.derive_content_iv(scoped_id)).decode("ascii"),
                    track_type=track,
                )
            )
        return specs

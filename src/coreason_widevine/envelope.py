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
from typing import Any, Dict, Union

import jcs
from loguru import logger

from coreason_widevine.exceptions import EncodingError
from coreason_widevine.governance import KeyGovernor
from coreason_widevine.logging_utils import scrub_sensitive_data
from coreason_widevine.models import ContentKeySpec, LicenseMessage, Policy, SignedEnvelope
from coreason_widevine.signer import Signer


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def canonical_json(message: Dict[str, Any]) -> bytes:
    """
    Serializes an inner message with RFC 8785 canonicalization (sorted keys, no whitespace).
    These bytes are both what gets signed and what gets base64-encoded into `request`.
    """
    try:
        return jcs.canonicalize(message)
    except (TypeError, ValueError) as e:
        raise EncodingError(f"Failed to serialize inner message: {e}", stage="request") from e


class EnvelopeCodec:
    """
    Builds the signed `{request, signature, signer}` envelopes for both licensing operations.
    Holds only immutable collaborators, so one instance is safe to share across threads.
    """

    def __init__(self, signer: Signer, provider: str, key_governor: KeyGovernor):
        self.signer = signer
        self.provider = provider
        self.key_governor = key_governor

    def seal(self, message: Dict[str, Any]) -> SignedEnvelope:
        """
        Canonicalizes, signs and wraps an inner message.

        Args:
            message: The inner message as a JSON-compatible dictionary.

        Returns:
            SignedEnvelope: The envelope ready to post.
        """
        raw = canonical_json(message)
        signature = self.signer.sign(raw)
        return SignedEnvelope(request=_b64(raw), signature=_b64(signature), signer=self.provider)

    def build_license_message(self, content_id: str, challenge: Union[str, bytes]) -> LicenseMessage:
        """
        Builds the inner license message, deriving the content key through the key governor.

        A `str` challenge is taken to be base64 already and is passed through verbatim;
        a `bytes` challenge is base64-encoded first.
        """
        logger.debug(f"Content ID: {content_id}")
        payload = challenge if isinstance(challenge, str) else _b64(challenge)

        content_key = self.key_governor.derive_content_key(content_id.encode("utf-8"))
        content_key_id = hashlib.md5(content_key).digest()

        return LicenseMessage(
            payload=payload,
            content_id=_b64(content_id.encode("utf-8")),
            provider=self.provider,
            content_key_specs=[ContentKeySpec(key=_b64(content_key), key_id=_b64(content_key_id))],
        )

    def build_license_envelope(self, content_id: str, challenge: Union[str, bytes]) -> SignedEnvelope:
        message = self.build_license_message(content_id, challenge).model_dump()
        logger.debug(f"License Message: {scrub_sensitive_data(message)}")
        return self.seal(message)

    @staticmethod
    def build_content_key_policy(policy: Policy) -> Dict[str, Any]:
        """
        Builds the inner content-key message. Track order and duplicates are preserved;
        an empty track list stays an empty array.
        """
        return {
            "content_id": _b64(policy.content_id.encode("utf-8")),
            "tracks": [{"type": track} for track in policy.tracks],
            "drm_types": list(policy.drm_types),
            "policy": policy.policy,
        }

    def build_content_key_envelope(self, policy: Policy) -> SignedEnvelope:
        return self.seal(self.build_content_key_policy(policy))

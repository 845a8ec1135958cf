# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_widevine

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, padding
from cryptography.hazmat.primitives.ciphers import Cipher, CipherContext, algorithms, modes

from coreason_widevine.exceptions import CryptoError


class Signer:
    """
    Computes the request signature expected by the Widevine cloud license service.

    The signature is AES-CBC(partner root key, partner root IV) over the SHA-1 digest
    of the payload. The 20-byte digest is PKCS#7 padded to 32 bytes before encryption.
    Signing is deterministic: the IV is static configuration, not a per-call nonce.
    """

    def __init__(self, key: bytes, iv: bytes):
        """
        Args:
            key: The partner root key (16, 24 or 32 bytes).
            iv: The partner root IV (16 bytes, the AES block size).

        Raises:
            CryptoError: If AES-CBC rejects the key or IV.
        """
        self._key = key
        self._iv = iv
        # Fail at construction rather than on the first request.
        self._encryptor()

    def _encryptor(self) -> CipherContext:
        try:
            return Cipher(algorithms.AES(self._key), modes.CBC(self._iv)).encryptor()
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            raise CryptoError(f"Signer cipher rejected key/IV: {e}") from e

    def sign(self, payload: bytes) -> bytes:
        """
        Signs the exact payload bytes.

        Args:
            payload: The bytes to sign (the inner message JSON, never its base64 form).

        Returns:
            bytes: The raw signature (32 bytes).
        """
        digest = hashes.Hash(hashes.SHA1())
        digest.update(payload)

        padder = padding.PKCS7(algorithms.AES.block_size).padder()
        plaintext = padder.update(digest.finalize()) + padder.finalize()

        encryptor = self._encryptor()
        return encryptor.update(plaintext) + encryptor.finalize()

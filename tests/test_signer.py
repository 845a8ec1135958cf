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

import jcs
import pytest
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from coreason_widevine.exceptions import CryptoError
from coreason_widevine.signer import Signer

GOLDEN_PAYLOAD = {
    "test": "testing",
    "test2": "testing2",
    "test3": "testing3",
    "isTest": True,
}
GOLDEN_SIGNATURE = "ga80QzRuUM+jnPcoR6UWs5TXrTQ2VgeYiu0FoqCNRH4="


def test_golden_vector(test_key: bytes, test_iv: bytes) -> None:
    """Signing the canonical golden payload reproduces the published signature."""
    payload = jcs.canonicalize(GOLDEN_PAYLOAD)
    assert payload == b'{"isTest":true,"test":"testing","test2":"testing2","test3":"testing3"}'

    signature = Signer(test_key, test_iv).sign(payload)
    assert signature == base64.b64decode(GOLDEN_SIGNATURE)


def test_sign_is_deterministic(test_key: bytes, test_iv: bytes) -> None:
    signer = Signer(test_key, test_iv)
    assert signer.sign(b"payload") == signer.sign(b"payload")
    assert Signer(test_key, test_iv).sign(b"payload") == signer.sign(b"payload")


def test_signature_is_two_aes_blocks(test_key: bytes, test_iv: bytes) -> None:
    """SHA-1 digest (20 bytes) padded to 32 bytes."""
    assert len(Signer(test_key, test_iv).sign(b"")) == 32
    assert len(Signer(test_key, test_iv).sign(b"x" * 10_000)) == 32


def test_signature_depends_on_payload_key_and_iv(test_key: bytes, test_iv: bytes) -> None:
    base = Signer(test_key, test_iv).sign(b"payload")
    assert Signer(test_key, test_iv).sign(b"payload2") != base
    assert Signer(bytes(32), test_iv).sign(b"payload") != base
    assert Signer(test_key, bytes(16)).sign(b"payload") != base


def test_signature_round_trips_through_cipher(test_key: bytes, test_iv: bytes) -> None:
    """Decrypting the signature yields the PKCS#7 padded SHA-1 digest."""
    signature = Signer(test_key, test_iv).sign(b"payload")
    decryptor = Cipher(algorithms.AES(test_key), modes.CBC(test_iv)).decryptor()
    plaintext = decryptor.update(signature) + decryptor.finalize()
    assert plaintext == hashlib.sha1(b"payload").digest() + bytes([12]) * 12


@pytest.mark.parametrize("key_len", [0, 8, 15, 17, 31, 33])
def test_invalid_key_length_raises_crypto_error(test_iv: bytes, key_len: int) -> None:
    with pytest.raises(CryptoError):
        Signer(b"k" * key_len, test_iv)


@pytest.mark.parametrize("iv_len", [0, 8, 15, 17, 32])
def test_invalid_iv_length_raises_crypto_error(test_key: bytes, iv_len: int) -> None:
    with pytest.raises(CryptoError, match="rejected key/IV"):
        Signer(test_key, b"i" * iv_len)


def test_crypto_error_keeps_cause(test_iv: bytes) -> None:
    with pytest.raises(CryptoError) as exc_info:
        Signer(b"short", test_iv)
    assert isinstance(exc_info.value.__cause__, ValueError)

# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_widevine

from coreason_widevine.exceptions import (
    CryptoError,
    EmptyResponseError,
    EncodingError,
    ProtocolError,
    TransportError,
    WidevineProxyError,
)


def test_exception_inheritance() -> None:
    """Verify the inheritance hierarchy of exceptions."""
    assert issubclass(TransportError, WidevineProxyError)
    assert issubclass(EncodingError, WidevineProxyError)
    assert issubclass(ProtocolError, WidevineProxyError)
    assert issubclass(EmptyResponseError, ProtocolError)
    assert issubclass(CryptoError, WidevineProxyError)
    assert not issubclass(EmptyResponseError, EncodingError)


def test_encoding_error_carries_stage() -> None:
    err = EncodingError("bad body", stage="outer", status_code=502)
    assert str(err) == "bad body"
    assert err.stage == "outer"
    assert err.status_code == 502

    inner = EncodingError("bad payload", stage="inner")
    assert inner.status_code is None

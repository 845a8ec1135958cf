# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_widevine

from typing import Optional


class WidevineProxyError(Exception):
    """Base exception for all Widevine proxy errors."""

    pass


class TransportError(WidevineProxyError):
    """Raised when the HTTP exchange with the licensing service fails (connect, timeout, read)."""

    pass


class EncodingError(WidevineProxyError):
    """
    Raised when a JSON or base64 encode/decode step fails.

    The ``stage`` attribute names the layer that broke:
    ``request`` (building the envelope), ``outer`` (transport body) or
    ``inner`` (the base64 JSON carried in a content-key ``response`` field).
    """

    def __init__(self, message: str, stage: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.stage = stage
        self.status_code = status_code


class ProtocolError(WidevineProxyError):
    """Raised when a decoded response lacks a field the protocol requires."""

    pass


class EmptyResponseError(ProtocolError):
    """Raised when a content-key transport body carries no ``response`` field."""

    pass


class CryptoError(WidevineProxyError):
    """Raised when the signer cipher rejects the configured key or IV."""

    pass

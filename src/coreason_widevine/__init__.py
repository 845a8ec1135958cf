# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_widevine

__version__ = "0.1.0"

from coreason_widevine.config import ProxyConfig
from coreason_widevine.endpoints import Purpose, resolve
from coreason_widevine.envelope import EnvelopeCodec
from coreason_widevine.exceptions import (
    CryptoError,
    EmptyResponseError,
    EncodingError,
    ProtocolError,
    TransportError,
    WidevineProxyError,
)
from coreason_widevine.governance import HmacKeyGovernor, KeyGovernor
from coreason_widevine.models import (
    ContentKeyResponse,
    ContentKeySpec,
    LicenseResponse,
    Policy,
    SignedEnvelope,
)
from coreason_widevine.proxy import WidevineProxy
from coreason_widevine.pssh import build_header
from coreason_widevine.signer import Signer

__all__ = [
    "ContentKeyResponse",
    "ContentKeySpec",
    "CryptoError",
    "EmptyResponseError",
    "EncodingError",
    "EnvelopeCodec",
    "HmacKeyGovernor",
    "KeyGovernor",
    "LicenseResponse",
    "Policy",
    "ProtocolError",
    "ProxyConfig",
    "Purpose",
    "Signer",
    "SignedEnvelope",
    "TransportError",
    "WidevineProxy",
    "WidevineProxyError",
    "build_header",
    "resolve",
]

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

from pywidevine.license_protocol_pb2 import WidevinePsshData


def build_header(provider: str, content_id: str) -> str:
    """
    Builds the base64 Widevine PSSH data (provider + content id) used by players
    to locate the license service.

    Args:
        provider: The provider identifier.
        content_id: The content identifier; its UTF-8 bytes are stored as-is.

    Returns:
        str: The base64-encoded protobuf header.
    """
    header = WidevinePsshData(provider=provider, content_id=content_id.encode("utf-8"))
    return base64.b64encode(header.SerializeToString()).decode("ascii")

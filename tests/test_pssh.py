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

from coreason_widevine.pssh import build_header


def test_build_header_bytes() -> None:
    """provider is field 3 (string), content_id is field 4 (bytes)."""
    header = base64.b64decode(build_header("widevine_test", "testing"))
    assert header == b"\x1a\x0dwidevine_test\x22\x07testing"


def test_build_header_parses_back() -> None:
    parsed = WidevinePsshData()
    parsed.ParseFromString(base64.b64decode(build_header("acme", "movie-42")))
    assert parsed.provider == "acme"
    assert parsed.content_id == b"movie-42"


def test_build_header_is_pure() -> None:
    assert build_header("acme", "movie-42") == build_header("acme", "movie-42")
    assert build_header("acme", "movie-42") != build_header("acme", "movie-43")


def test_build_header_utf8_content_id() -> None:
    parsed = WidevinePsshData()
    parsed.ParseFromString(base64.b64decode(build_header("acme", "épisode")))
    assert parsed.content_id == "épisode".encode("utf-8")

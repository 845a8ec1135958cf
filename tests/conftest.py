# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_widevine

import hashlib
from typing import Callable, Dict, List

import httpx
import pytest

from coreason_widevine.config import ProxyConfig
from coreason_widevine.governance import KeyGovernor
from coreason_widevine.models import ContentKeySpec
from coreason_widevine.proxy import WidevineProxy

# Published Widevine UAT test credentials for the "widevine_test" provider.
TEST_KEY_HEX = "1ae8ccd0e7985cc0b6203a55855a1034afc252980e970ca90e5202689f947ab9"
TEST_IV_HEX = "d58ce954203b7c9a9a9d467f59839249"
TEST_PROVIDER = "widevine_test"


class FakeKeyGovernor(KeyGovernor):
    """Deterministic governor for tests: key is MD5 of the content id."""

    def derive_content_key(self, content_id: bytes) -> bytes:
        return hashlib.md5(b"key:" + content_id).digest()

    def derive_content_key_id(self, content_id: bytes) -> bytes:
        return hashlib.md5(content_id).digest()

    def derive_content_iv(self, content_id: bytes) -> bytes:
        return b"\x00" * 16

    def derive_key_specs(self, content_id: bytes, policy_config: Dict[str, str]) -> List[ContentKeySpec]:
        return [
            ContentKeySpec(
                key_id="base64EncodedString",
                key="base64EncodedString",
                iv="base64EncodedString",
                track_type="SD",
            )
        ]


@pytest.fixture
def test_key() -> bytes:
    return bytes.fromhex(TEST_KEY_HEX)


@pytest.fixture
def test_iv() -> bytes:
    return bytes.fromhex(TEST_IV_HEX)


@pytest.fixture
def proxy_config(test_key: bytes, test_iv: bytes) -> ProxyConfig:
    return ProxyConfig(partner_root_key=test_key, partner_root_iv=test_iv, provider=TEST_PROVIDER)


@pytest.fixture
def key_governor() -> FakeKeyGovernor:
    return FakeKeyGovernor()


@pytest.fixture
def make_proxy(
    proxy_config: ProxyConfig, key_governor: FakeKeyGovernor
) -> Callable[[Callable[[httpx.Request], httpx.Response]], WidevineProxy]:
    """
    Builds a WidevineProxy whose HTTP traffic is served by `handler` through httpx.MockTransport.
    """

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> WidevineProxy:
        client = httpx.Client(transport=httpx.MockTransport(handler))
        return WidevineProxy(proxy_config, key_governor, client=client)

    return _make

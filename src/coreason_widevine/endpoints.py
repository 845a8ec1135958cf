# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_widevine

from enum import Enum
from typing import Union

# Ref: https://www.widevine.com/news (updated 2021/01/14)
TEST_PROVIDER = "widevine_test"

# Widevine Modular
MODULAR_UAT_LICENSE_URL = "https://license.uat.widevine.com/cenc/getlicense/"
MODULAR_UAT_KEY_URL = "https://license.uat.widevine.com/cenc/getcontentkey/"
MODULAR_STAGING_LICENSE_URL = "https://license.staging.widevine.com/cenc/getlicense/"
MODULAR_STAGING_KEY_URL = "https://license.staging.widevine.com/cenc/getcontentkey/"
MODULAR_PRODUCTION_LICENSE_URL = "https://license.widevine.com/cenc/getlicense/"
MODULAR_PRODUCTION_KEY_URL = "https://license.widevine.com/cenc/getcontentkey/"

# Widevine Classic
CLASSIC_UAT_LICENSE_URL = "https://license.uat.widevine.com/cas/getlicense/"
CLASSIC_UAT_KEY_URL = "https://license.uat.widevine.com/cas/getcontentkey/"
CLASSIC_STAGING_LICENSE_URL = "https://license.staging.widevine.com/cas/getlicense/"
CLASSIC_STAGING_KEY_URL = "https://license.staging.widevine.com/cas/getcontentkey/"
CLASSIC_PRODUCTION_LICENSE_URL = "https://license.widevine.com/cas/getlicense/"
CLASSIC_PRODUCTION_KEY_URL = "https://license.widevine.com/cas/getcontentkey/"


class Purpose(str, Enum):
    """Which licensing operation a request targets."""

    LICENSE = "license"
    KEY = "key"


_ROUTES = {
    Purpose.LICENSE: (MODULAR_UAT_LICENSE_URL, MODULAR_PRODUCTION_LICENSE_URL),
    Purpose.KEY: (MODULAR_UAT_KEY_URL, MODULAR_PRODUCTION_KEY_URL),
}


def resolve(provider: str, purpose: Union[Purpose, str]) -> str:
    """
    Maps a provider and purpose to the Widevine Modular service URL.

    The test provider is routed to UAT and every other provider to production.
    Staging is never selected. The trailing path segment is always the test
    provider literal, whichever host was chosen; callers relying on production
    routing should confirm this with Widevine before changing it.

    Args:
        provider: The provider identifier.
        purpose: `Purpose.LICENSE` / `Purpose.KEY`, or their case-insensitive string values.

    Returns:
        str: The absolute endpoint URL.

    Raises:
        ValueError: If `purpose` is not a known purpose.
    """
    if not isinstance(purpose, Purpose):
        purpose = Purpose(str(purpose).lower())

    uat_url, production_url = _ROUTES[purpose]
    base = uat_url if provider == TEST_PROVIDER else production_url
    return base + TEST_PROVIDER

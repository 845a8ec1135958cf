# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_widevine

from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field

ALLOWED_TRACK_TYPES = "SD_UHD1"


class ContentKeySpec(BaseModel):
    """
    A content key provisioned alongside a license request.
    Raw key material is carried base64-encoded; absent optional values are empty strings.
    """

    key_id: str = ""
    key: str = ""
    iv: str = ""
    track_type: str = ""


class LicenseMessage(BaseModel):
    """Inner message of a license issuance request."""

    payload: str = Field(..., description="Base64 CDM challenge, passed through opaquely")
    content_id: str = Field(..., description="Base64 of the content identifier")
    provider: str
    allowed_track_types: str = ALLOWED_TRACK_TYPES
    content_key_specs: List[ContentKeySpec] = Field(..., min_length=1)


class Policy(BaseModel):
    """Caller-supplied options for a content-key request."""

    model_config = ConfigDict(frozen=True)

    content_id: str
    tracks: List[str] = Field(default_factory=list, description="Track type labels, order preserved")
    drm_types: List[str] = Field(default_factory=list)
    policy: str = Field("", description="Named policy profile on the licensing service")


class SignedEnvelope(BaseModel):
    """
    Outer transport envelope posted to the licensing service.
    `signature` covers the JSON bytes behind `request`, not the base64 text.
    """

    model_config = ConfigDict(frozen=True)

    request: str
    signature: str
    signer: str


# --- License response (/cenc/getlicense) ---


class ClientInfo(BaseModel):
    name: str = ""
    value: str = ""


class LicenseMetadata(BaseModel):
    content_id: str = ""
    license_type: str = ""
    request_type: str = ""


class PsshData(BaseModel):
    key_id: List[Any] = Field(default_factory=list)
    content_id: str = ""


class ServiceVersionInfo(BaseModel):
    license_sdk_version: str = ""
    license_service_version: str = ""


class LicenseID(BaseModel):
    request_id: str = ""
    session_id: str = ""
    purchase_id: str = ""
    type: str = ""
    version: int = 0


class SessionState(BaseModel):
    license_id: LicenseID = Field(default_factory=LicenseID)
    signing_key: str = ""
    keybox_system_id: int = 0
    license_counter: int = 0


class LicenseResponse(BaseModel):
    """
    Decoded reply of the license service. Only `status` is interpreted by callers
    ("OK" on success); everything else is passed through.
    """

    status: str = ""
    status_message: str = ""
    license: str = ""
    license_metadata: LicenseMetadata = Field(default_factory=LicenseMetadata)
    supported_tracks: List[Any] = Field(default_factory=list)
    make: str = ""
    model: str = ""
    security_level: int = 0
    internal_status: int = 0
    session_state: SessionState = Field(default_factory=SessionState)
    drm_cert_serial_number: str = ""
    device_whitelist_state: str = ""
    message_type: str = ""
    platform: str = ""
    device_state: str = ""
    pssh_data: PsshData = Field(default_factory=PsshData)
    client_max_hdcp_version: str = ""
    client_info: List[ClientInfo] = Field(default_factory=list)
    signature_expiration_secs: int = 0
    platform_verification_status: str = ""
    content_owner: str = ""
    content_provider: str = ""
    system_id: int = 0
    oem_crypto_api_version: int = 0
    resource_rating_tier: int = 0
    service_version_info: ServiceVersionInfo = Field(default_factory=ServiceVersionInfo)


# --- Content-key response (/cenc/getcontentkey) ---


class DrmSystem(BaseModel):
    type: str = ""
    system_id: str = ""


class TrackPssh(BaseModel):
    drm_type: str = ""
    data: str = ""


class Track(BaseModel):
    type: str = ""
    key_id: str = ""
    key: str = ""
    pssh: List[TrackPssh] = Field(default_factory=list)


class ContentKeyResponse(BaseModel):
    """Inner payload of a content-key reply, after the second decode pass."""

    status: str = ""
    drm: List[DrmSystem] = Field(default_factory=list)
    tracks: List[Track] = Field(default_factory=list)
    already_used: bool = False

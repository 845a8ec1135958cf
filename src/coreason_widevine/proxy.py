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
import binascii
import json
from types import TracebackType
from typing import Any, Dict, Optional, Type, Union

import httpx
from loguru import logger
from opentelemetry import trace
from pydantic import ValidationError

from coreason_widevine.config import ProxyConfig
from coreason_widevine.endpoints import Purpose, resolve
from coreason_widevine.envelope import EnvelopeCodec
from coreason_widevine.exceptions import EmptyResponseError, EncodingError, TransportError
from coreason_widevine.governance import KeyGovernor
from coreason_widevine.logging_utils import scrub_sensitive_data
from coreason_widevine.models import ContentKeyResponse, LicenseResponse, Policy, SignedEnvelope
from coreason_widevine.pssh import build_header
from coreason_widevine.signer import Signer


class WidevineProxy:
    """
    Client for the Widevine cloud license service.

    Every call is a single signed POST with no retry and no session state; the
    instance only holds immutable configuration and a thread-safe httpx.Client,
    so it can be shared by concurrent callers.
    """

    def __init__(
        self,
        config: ProxyConfig,
        key_governor: KeyGovernor,
        client: Optional[httpx.Client] = None,
    ):
        """
        Args:
            config: The partner credentials and provider.
            key_governor: Derives content keys for license requests.
            client: Optional pre-configured HTTP client. When omitted, one is created
                with the configured timeouts and closed by `close()`.

        Raises:
            CryptoError: If the partner root key or IV is rejected by the signer.
        """
        self.config = config
        self.key_governor = key_governor
        self.codec = EnvelopeCodec(
            Signer(config.partner_root_key, config.partner_root_iv), config.provider, key_governor
        )
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=httpx.Timeout(config.timeout, connect=config.connect_timeout))
        self._tracer = trace.get_tracer("widevine.proxy")

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "WidevineProxy":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        self.close()

    def _post(self, url: str, envelope: SignedEnvelope) -> httpx.Response:
        try:
            response = self._client.post(
                url,
                content=envelope.model_dump_json(),
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as e:
            logger.error(f"Transport failure posting to {url}: {e}")
            raise TransportError(f"Request to {url} failed: {e}") from e

        logger.debug(f"POST {url} -> {response.status_code}")
        return response

    def get_license(self, content_id: str, challenge: Union[str, bytes]) -> LicenseResponse:
        """
        Requests a license for a CDM challenge.

        Args:
            content_id: The content identifier.
            challenge: The CDM license challenge, base64 text or raw bytes.

        Returns:
            LicenseResponse: The decoded reply. The HTTP status is not inspected;
            callers check `status == "OK"`.

        Raises:
            TransportError: If the HTTP exchange fails.
            EncodingError: If the body is not a license response (stage "outer").
            CryptoError: If signing fails.
        """
        url = resolve(self.config.provider, Purpose.LICENSE)
        attributes = {"widevine.provider": self.config.provider, "widevine.purpose": "license", "widevine.url": url}

        with self._tracer.start_as_current_span("widevine.get_license", attributes=attributes):
            envelope = self.codec.build_license_envelope(content_id, challenge)
            response = self._post(url, envelope)

            try:
                license_response = LicenseResponse.model_validate_json(response.content)
            except ValidationError as e:
                logger.error("Get License JSON Decode Error")
                raise EncodingError(
                    f"License response is not valid JSON (HTTP {response.status_code}): {e}",
                    stage="outer",
                    status_code=response.status_code,
                ) from e

        logger.debug(f"License response: {scrub_sensitive_data(license_response.model_dump())}")
        return license_response

    def get_content_key(self, content_id: str, policy: Policy) -> ContentKeyResponse:
        """
        Requests content keys for a piece of content.

        The reply is decoded in two stages: the transport JSON body, then the
        base64 JSON held in its `response` field.

        Args:
            content_id: The content identifier used for the PSSH header.
            policy: Track types, DRM types and policy profile; `policy.content_id`
                is what gets signed into the request.

        Returns:
            ContentKeyResponse: The decoded inner payload.

        Raises:
            TransportError: If the HTTP exchange fails.
            EncodingError: If the outer body (stage "outer") or the inner payload
                (stage "inner") cannot be decoded.
            EmptyResponseError: If the outer body has no `response` field.
        """
        url = resolve(self.config.provider, Purpose.KEY)
        attributes = {"widevine.provider": self.config.provider, "widevine.purpose": "key", "widevine.url": url}

        with self._tracer.start_as_current_span("widevine.get_content_key", attributes=attributes):
            envelope = self.codec.build_content_key_envelope(policy)
            response = self._post(url, envelope)

            outer = self._decode_outer(response)
            if "response" not in outer:
                logger.error("Content key response is empty")
                raise EmptyResponseError("[GET] Content Key Response is Empty")

            content_key_response = self._decode_inner(outer["response"])

        logger.debug(f"pssh build: {build_header(self.config.provider, content_id)}")
        return content_key_response

    @staticmethod
    def _decode_outer(response: httpx.Response) -> Dict[str, Any]:
        try:
            body = json.loads(response.content)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise EncodingError(
                f"Content key transport body is not valid JSON (HTTP {response.status_code}): {e}",
                stage="outer",
                status_code=response.status_code,
            ) from e

        if not isinstance(body, dict):
            raise EncodingError(
                f"Content key transport body must be a JSON object, got {type(body).__name__}",
                stage="outer",
                status_code=response.status_code,
            )
        return body

    @staticmethod
    def _decode_inner(encoded: Any) -> ContentKeyResponse:
        if not isinstance(encoded, str):
            raise EncodingError(f"'response' must be a base64 string, got {type(encoded).__name__}", stage="inner")

        try:
            decoded = base64.b64decode(encoded, validate=True)
        except binascii.Error as e:
            raise EncodingError(f"'response' is not valid base64: {e}", stage="inner") from e

        try:
            return ContentKeyResponse.model_validate_json(decoded)
        except ValidationError as e:
            raise EncodingError(f"Decoded content key payload is invalid: {e}", stage="inner") from e

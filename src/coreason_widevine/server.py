# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_widevine

import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, HTTPException, Request, status
from loguru import logger
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from starlette.concurrency import run_in_threadpool

from coreason_widevine.config import ProxyConfig
from coreason_widevine.exceptions import CryptoError, WidevineProxyError
from coreason_widevine.governance import HmacKeyGovernor
from coreason_widevine.logging_utils import configure_logging
from coreason_widevine.models import ContentKeyResponse, LicenseResponse, Policy
from coreason_widevine.proxy import WidevineProxy


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Builds the shared WidevineProxy from the environment on startup and closes it on shutdown.
    """
    config = ProxyConfig.from_env()
    app.state.proxy = WidevineProxy(config, HmacKeyGovernor.from_env())
    logger.bind(provider=config.provider).info("Widevine license gateway started")
    yield
    app.state.proxy.close()


app = FastAPI(title="CoReason Widevine License Gateway", lifespan=lifespan)

FastAPIInstrumentor.instrument_app(app)


def _to_http_error(exc: WidevineProxyError) -> HTTPException:
    """
    Maps client errors to gateway responses: signer failures are ours (500),
    anything that broke talking to or decoding Widevine is upstream (502).
    """
    if isinstance(exc, CryptoError):
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    else:
        status_code = status.HTTP_502_BAD_GATEWAY
    logger.bind(error=type(exc).__name__).warning(f"Upstream licensing call failed: {exc}")
    return HTTPException(status_code=status_code, detail={"error": type(exc).__name__, "reason": str(exc)})


@app.post("/license/{content_id}", response_model=LicenseResponse)  # type: ignore[misc]
async def issue_license(content_id: str, request: Request) -> LicenseResponse:
    """
    Forwards a player's CDM challenge (raw request body) to Widevine and returns the decoded reply.
    The upstream `status` is passed through untouched.
    """
    challenge = await request.body()
    if not challenge:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Empty license challenge")

    proxy: WidevineProxy = request.app.state.proxy
    try:
        # The client is blocking; keep it off the event loop.
        return await run_in_threadpool(proxy.get_license, content_id, challenge)
    except WidevineProxyError as e:
        raise _to_http_error(e) from e


@app.post("/contentkey", response_model=ContentKeyResponse)  # type: ignore[misc]
async def issue_content_key(policy: Policy, request: Request) -> ContentKeyResponse:
    """Requests content keys for `policy.content_id` and returns the decoded inner payload."""
    proxy: WidevineProxy = request.app.state.proxy
    try:
        return await run_in_threadpool(proxy.get_content_key, policy.content_id, policy)
    except WidevineProxyError as e:
        raise _to_http_error(e) from e


@logger.catch  # type: ignore[misc]
def run_server() -> None:
    """Entry point for the widevine-proxy command. Configured via ENV."""
    configure_logging()
    host = os.environ.get("WIDEVINE_HOST", "0.0.0.0")
    port = int(os.environ.get("WIDEVINE_PORT", "8080"))
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run_server()  # pragma: no cover
